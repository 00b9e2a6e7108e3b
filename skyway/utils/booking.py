import logging
import random
import string
import time
from typing import Optional

from skyway.models.enums import BookingStatus
from skyway.services.booking_status import BookingClassifier
from skyway.services.pricing import PricingCalculator, PricingError

logger = logging.getLogger(__name__)

# Statuses an admin may set on a booking
ADMIN_STATUSES = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.PAID.value,
    BookingStatus.DECLINED.value,
    BookingStatus.COMPLETED.value,
    BookingStatus.PENDING_PAYMENT.value,
)


class BookingManager:
    """Handle booking-related operations"""

    @staticmethod
    def generate_payment_reference() -> str:
        """Reference like TX-4F9K2Q-1700000000000"""
        chars = ''.join(random.choices(string.ascii_uppercase + string.digits, k=6))
        return f"TX-{chars}-{int(time.time() * 1000)}"

    @staticmethod
    def record_payment(booking, payment_reference: Optional[str] = None) -> str:
        """Attach a payment reference; a Pending booking moves to Pending Payment"""
        booking.payment_reference = payment_reference or BookingManager.generate_payment_reference()
        if (booking.status or '').lower() == BookingStatus.PENDING.value.lower():
            booking.status = BookingStatus.PENDING_PAYMENT.value
        return booking.payment_reference

    @staticmethod
    def update_status(booking, status: str, decline_reason: Optional[str] = None):
        """Set a new status; the decline reason is kept only for Declined"""
        previous = booking.status
        booking.status = status
        if status == BookingStatus.DECLINED.value:
            booking.decline_reason = decline_reason
        return previous

    @staticmethod
    def serialize(booking, rates, now=None) -> dict:
        """Booking with its list buckets, badge color and price"""
        data = booking.to_dict()
        data['buckets'] = sorted(b.value for b in BookingClassifier.classify(booking, now))
        data['badgeColor'] = BookingClassifier.badge_color(booking.status).value
        try:
            data['price'] = PricingCalculator.price_flight(
                booking.flight, rates, booking.effective_travel_class
            ).to_dict()
        except PricingError as e:
            logger.warning(f"Cannot price booking {booking.id}: {e}")
            data['price'] = None
        return data
