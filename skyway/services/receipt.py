"""
PDF receipts for settled bookings
"""
import logging
from datetime import datetime, timezone
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from skyway.models.enums import BookingStatus
from skyway.services.pricing import PricingCalculator, PricingError

logger = logging.getLogger(__name__)

RECEIPT_STATUSES = (BookingStatus.PAID.value.lower(), BookingStatus.COMPLETED.value.lower())

TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (0, -1), colors.grey),
    ('TEXTCOLOR', (0, 0), (0, -1), colors.whitesmoke),
    ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
    ('BACKGROUND', (1, 0), (-1, -1), colors.beige),
    ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
    ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
    ('GRID', (0, 0), (-1, -1), 1, colors.black)
])


def can_issue_receipt(booking) -> bool:
    """Receipts exist only once a booking is Paid or Completed (any case)"""
    return (booking.status or '').lower() in RECEIPT_STATUSES


def receipt_filename(booking) -> str:
    return f"Skyway_Receipt_{booking.id}.pdf"


def _money(amount) -> str:
    return f"${amount:,.2f}"


def _when(value) -> str:
    return value.strftime('%Y-%m-%d %H:%M') if value else 'N/A'


class ReceiptBuilder:
    """Lay out a booking receipt with reportlab"""

    @staticmethod
    def _section(elements, styles, title, rows):
        elements.append(Paragraph(title, styles['Heading2']))
        table = Table(rows, colWidths=[160, 300])
        table.setStyle(TABLE_STYLE)
        elements.append(table)
        elements.append(Spacer(1, 12))

    @staticmethod
    def build(booking, rates=None, issued_at=None) -> BytesIO:
        """Render the receipt; the returned buffer is rewound"""
        issued_at = issued_at or datetime.now(timezone.utc)
        flight = booking.flight

        buffer = BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=letter, title=f"Receipt {booking.reference}")
        elements = []
        styles = getSampleStyleSheet()

        elements.append(Paragraph('Skyway', styles['Title']))
        elements.append(Paragraph('Flight Booking Receipt', styles['Heading1']))
        elements.append(Spacer(1, 12))

        ReceiptBuilder._section(elements, styles, 'Receipt', [
            ['Booking Reference', booking.reference],
            ['Receipt Date', _when(issued_at)],
            ['Booking Date', _when(booking.booking_date)],
            ['Status', booking.status],
            ['Payment Reference', booking.payment_reference or 'N/A'],
        ])

        ReceiptBuilder._section(elements, styles, 'Passenger', [
            ['Name', f"{booking.passenger_first_name} {booking.passenger_last_name}"],
            ['Email', booking.passenger_email],
            ['Phone', booking.passenger_phone],
        ])

        if flight is not None:
            ReceiptBuilder._section(elements, styles, 'Flight', [
                ['From', f"{flight.origin.city} ({flight.origin.code})"],
                ['To', f"{flight.destination.city} ({flight.destination.code})"],
                ['Departure', _when(flight.departure_time)],
                ['Arrival', _when(flight.arrival_time)],
                ['Class', booking.effective_travel_class],
            ])

            try:
                price = PricingCalculator.price_flight(flight, rates, booking.effective_travel_class)
            except PricingError as e:
                logger.warning(f"Receipt for booking {booking.id} has no price: {e}")
            else:
                amounts = price.to_dict()
                ReceiptBuilder._section(elements, styles, 'Payment', [
                    ['Base Fare', _money(amounts['basePrice'])],
                    ['Taxes', _money(amounts['taxAmount'])],
                    ['Service Fee', _money(amounts['serviceFeeAmount'])],
                    ['Total Paid', _money(amounts['totalPrice'])],
                ])

        elements.append(Paragraph('Thank you for flying with Skyway.', styles['Normal']))

        doc.build(elements)
        buffer.seek(0)
        return buffer
