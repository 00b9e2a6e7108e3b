"""
In-app notifications derived from booking status.

The inbox is an immutable snapshot; every operation returns a new
NotificationInbox. NotificationService persists snapshots per user.
"""
import logging
import random
import string
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from skyway.models.enums import BookingStatus, NotificationType
from skyway.services.booking_status import as_utc

logger = logging.getLogger(__name__)

DESTINATION_PLACEHOLDER = 'your destination'


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    timestamp: datetime
    type: NotificationType
    read: bool = False
    booking_id: Optional[int] = None

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'message': self.message,
            'read': self.read,
            'timestamp': self.timestamp.isoformat(),
            'type': self.type.value,
            'bookingId': self.booking_id
        }


def _destination_name(booking) -> str:
    flight = getattr(booking, 'flight', None)
    destination = getattr(flight, 'destination', None)
    return getattr(destination, 'name', None) or DESTINATION_PLACEHOLDER


def booking_notification(booking) -> Optional[Notification]:
    """The notification a booking's current status calls for, if any"""
    destination = _destination_name(booking)
    timestamp = as_utc(booking.booking_date)

    if booking.status == BookingStatus.PENDING_PAYMENT.value:
        return Notification(
            id=f"booking-payment-{booking.id}",
            title='Payment Required',
            message=f"Your booking to {destination} needs payment to be confirmed.",
            timestamp=timestamp,
            type=NotificationType.PAYMENT,
            booking_id=booking.id
        )

    if booking.status == BookingStatus.CONFIRMED.value:
        return Notification(
            id=f"booking-confirmed-{booking.id}",
            title='Booking Confirmed',
            message=f"Your booking to {destination} has been confirmed!",
            timestamp=timestamp,
            type=NotificationType.BOOKING,
            booking_id=booking.id
        )

    if booking.status == BookingStatus.DECLINED.value:
        message = f"Your booking to {destination} has been declined."
        if booking.decline_reason:
            message += f" Reason: {booking.decline_reason}"
        return Notification(
            id=f"booking-declined-{booking.id}",
            title='Booking Declined',
            message=message,
            timestamp=timestamp,
            type=NotificationType.BOOKING,
            booking_id=booking.id
        )

    return None


def _random_id() -> str:
    suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"notification-{int(time.time() * 1000)}-{suffix}"


@dataclass(frozen=True)
class NotificationInbox:
    notifications: Tuple[Notification, ...] = field(default_factory=tuple)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.read)

    def ids(self):
        return {n.id for n in self.notifications}

    def get(self, notification_id: str) -> Optional[Notification]:
        return next((n for n in self.notifications if n.id == notification_id), None)

    def derive_and_merge(self, bookings: Iterable) -> 'NotificationInbox':
        """Add notifications for bookings not seen yet, newest first.

        Ids already in the inbox are skipped, so re-running with the same
        bookings is a no-op and read flags survive.
        """
        existing = self.ids()
        fresh = []
        for booking in bookings:
            candidate = booking_notification(booking)
            if candidate is not None and candidate.id not in existing:
                fresh.append(candidate)
                existing.add(candidate.id)

        merged = sorted(
            self.notifications + tuple(fresh),
            key=lambda n: n.timestamp,
            reverse=True
        )
        return NotificationInbox(tuple(merged))

    def mark_as_read(self, notification_id: str) -> 'NotificationInbox':
        return NotificationInbox(tuple(
            replace(n, read=True) if n.id == notification_id else n
            for n in self.notifications
        ))

    def mark_all_as_read(self) -> 'NotificationInbox':
        return NotificationInbox(tuple(replace(n, read=True) for n in self.notifications))

    def add(self, title: str, message: str, type=NotificationType.SYSTEM,
            booking_id: Optional[int] = None) -> 'NotificationInbox':
        """Prepend an ad hoc notification"""
        notification = Notification(
            id=_random_id(),
            title=title,
            message=message,
            timestamp=datetime.now(timezone.utc),
            type=NotificationType(type),
            booking_id=booking_id
        )
        return NotificationInbox((notification,) + self.notifications)

    def to_dict(self):
        return {
            'notifications': [n.to_dict() for n in self.notifications],
            'unreadCount': self.unread_count
        }


class NotificationService:
    """Load and store a user's inbox snapshot"""

    @staticmethod
    def load_inbox(user_id: int) -> NotificationInbox:
        from skyway.models import NotificationRecord

        records = NotificationRecord.query.filter_by(user_id=user_id).all()
        notifications = [
            Notification(
                id=record.id,
                title=record.title,
                message=record.message,
                timestamp=as_utc(record.timestamp),
                type=NotificationType(record.type),
                read=record.read,
                booking_id=record.booking_id
            )
            for record in records
        ]
        notifications.sort(key=lambda n: n.timestamp, reverse=True)
        return NotificationInbox(tuple(notifications))

    @staticmethod
    def save_inbox(user_id: int, inbox: NotificationInbox) -> bool:
        """Upsert every notification of the snapshot.

        Returns False when a concurrent request stored one of the same
        notifications first; the session is rolled back in that case.
        """
        from sqlalchemy.exc import IntegrityError
        from skyway.extensions import db
        from skyway.models import NotificationRecord

        for notification in inbox.notifications:
            record = db.session.get(NotificationRecord, (notification.id, user_id))
            if record is None:
                record = NotificationRecord(id=notification.id, user_id=user_id)
                db.session.add(record)
            record.type = notification.type.value
            record.title = notification.title
            record.message = notification.message
            record.booking_id = notification.booking_id
            record.read = notification.read
            record.timestamp = notification.timestamp

        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"Inbox of user {user_id} changed while saving: {e.orig}")
            return False
        return True

    @staticmethod
    def sync_for_user(user_id: int, bookings: List) -> NotificationInbox:
        inbox = NotificationService.load_inbox(user_id)
        updated = inbox.derive_and_merge(bookings)

        added = len(updated.notifications) - len(inbox.notifications)
        if added:
            logger.info(f"Derived {added} new notification(s) for user {user_id}")
            if not NotificationService.save_inbox(user_id, updated):
                return NotificationService.load_inbox(user_id).derive_and_merge(bookings)

        return updated
