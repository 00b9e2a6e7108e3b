import smtplib
from email.message import EmailMessage
from typing import List, Optional, Tuple

from flask import current_app

from skyway.models.enums import BookingStatus

# (filename, content bytes, mime subtype) of an application/* attachment
Attachment = Tuple[str, bytes, str]

STATUS_MESSAGES = {
    BookingStatus.CONFIRMED.value: 'Your booking is confirmed. Please complete the payment to secure your seat.',
    BookingStatus.PAID.value: 'We have received your payment. Your receipt is attached.',
    BookingStatus.DECLINED.value: 'Unfortunately your booking could not be accepted.',
    BookingStatus.COMPLETED.value: 'Your trip is complete. We hope to see you on board again soon.',
    BookingStatus.PENDING_PAYMENT.value: 'We are reviewing your payment and will update you shortly.',
}


class EmailService:
    """Booking emails over SMTP; without MAIL_SERVER they are only logged"""

    @staticmethod
    def send_email(to: str, subject: str, body: str, attachments: Optional[List[Attachment]] = None) -> bool:
        config = current_app.config
        if not config.get('MAIL_SERVER'):
            current_app.logger.info(f"Email to {to} not sent (no MAIL_SERVER): {subject}")
            return False

        msg = EmailMessage()
        msg['Subject'] = subject
        msg['From'] = config.get('MAIL_DEFAULT_SENDER')
        msg['To'] = to
        msg.set_content(body)
        for filename, content, subtype in attachments or []:
            msg.add_attachment(content, maintype='application', subtype=subtype, filename=filename)

        with smtplib.SMTP(config['MAIL_SERVER'], config.get('MAIL_PORT', 587), timeout=10) as smtp:
            if config.get('MAIL_USE_TLS'):
                smtp.starttls()
            if config.get('MAIL_USERNAME') and config.get('MAIL_PASSWORD'):
                smtp.login(config['MAIL_USERNAME'], config['MAIL_PASSWORD'])
            smtp.send_message(msg)

        current_app.logger.info(f"Email sent to {to}: {subject}")
        return True

    @staticmethod
    def _route(booking) -> str:
        flight = booking.flight
        return f"{flight.origin.code} to {flight.destination.code}"

    @staticmethod
    def send_status_update_email(booking, previous_status: str) -> bool:
        """Tell the passenger their booking moved to a new status"""
        body = f"""Dear {booking.passenger_first_name} {booking.passenger_last_name},

The status of your booking has been updated.

Booking Reference: {booking.reference}
Previous Status: {previous_status}
New Status: {booking.status}
Flight: {booking.flight.origin.city} ({booking.flight.origin.code}) to {booking.flight.destination.city} ({booking.flight.destination.code})
Departure: {booking.flight.departure_time.strftime('%B %d, %Y %H:%M')}
"""
        extra = STATUS_MESSAGES.get(booking.status)
        if extra:
            body += f"\n{extra}\n"
        if booking.status == BookingStatus.DECLINED.value and booking.decline_reason:
            body += f"Reason: {booking.decline_reason}\n"
        body += "\nThank you for choosing Skyway.\n"

        return EmailService.send_email(
            to=booking.passenger_email,
            subject=f"Booking Status Update - Flight {EmailService._route(booking)}",
            body=body
        )

    @staticmethod
    def send_payment_confirmation_email(booking, receipt_pdf: bytes, filename: str) -> bool:
        """Payment confirmation with the receipt attached"""
        body = f"""Dear {booking.passenger_first_name} {booking.passenger_last_name},

We have received your payment for booking {booking.reference}.

Payment Reference: {booking.payment_reference or 'N/A'}

Your receipt is attached to this email.

Thank you for choosing Skyway.
"""
        return EmailService.send_email(
            to=booking.passenger_email,
            subject=f"Payment Confirmed - Flight {EmailService._route(booking)}",
            body=body,
            attachments=[(filename, receipt_pdf, 'pdf')]
        )
