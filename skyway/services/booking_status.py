from dataclasses import dataclass
from datetime import datetime, timezone
from typing import FrozenSet, Optional

from skyway.models.enums import BadgeColor, BookingStatus, Bucket

PENDING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.PENDING_PAYMENT})

_KNOWN_STATUSES = {status.value: status for status in BookingStatus if status is not BookingStatus.UNKNOWN}


@dataclass(frozen=True)
class ParsedStatus:
    """A booking status string mapped onto BookingStatus, raw text kept"""

    kind: BookingStatus
    raw: str

    @property
    def is_pending(self) -> bool:
        return self.kind in PENDING_STATUSES


def parse_status(raw: Optional[str]) -> ParsedStatus:
    raw = raw or ''
    if raw in _KNOWN_STATUSES:
        return ParsedStatus(_KNOWN_STATUSES[raw], raw)
    # Legacy statuses such as "Pending Review" belong to the pending family
    if 'Pending' in raw:
        return ParsedStatus(BookingStatus.PENDING, raw)
    return ParsedStatus(BookingStatus.UNKNOWN, raw)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; those are stored as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_BADGE_RULES = (
    (lambda s: s.kind is BookingStatus.CONFIRMED, BadgeColor.GREEN),
    (lambda s: s.is_pending, BadgeColor.YELLOW),
    (lambda s: s.kind is BookingStatus.DECLINED, BadgeColor.RED),
    (lambda s: s.kind is BookingStatus.PAID, BadgeColor.BLUE),
    (lambda s: s.kind is BookingStatus.COMPLETED, BadgeColor.GRAY),
)


class BookingClassifier:
    """Sort bookings into the list-view buckets"""

    @staticmethod
    def classify(booking, now: Optional[datetime] = None) -> FrozenSet[Bucket]:
        """Buckets the booking belongs to (never includes Bucket.ALL).

        Departure comparisons are strict: a flight leaving exactly at `now`
        is neither upcoming nor past.
        """
        now = as_utc(now or datetime.now(timezone.utc))
        status = parse_status(booking.status)
        departure = as_utc(booking.flight.departure_time)

        buckets = set()
        if departure > now and (status.kind is BookingStatus.CONFIRMED or status.is_pending):
            buckets.add(Bucket.UPCOMING)
        if departure < now:
            buckets.add(Bucket.PAST)
        if status.is_pending:
            buckets.add(Bucket.PENDING)
        if status.kind is BookingStatus.CONFIRMED:
            buckets.add(Bucket.CONFIRMED)

        return frozenset(buckets)

    @staticmethod
    def in_bucket(booking, bucket, now: Optional[datetime] = None) -> bool:
        bucket = Bucket(bucket)
        if bucket is Bucket.ALL:
            return True
        return bucket in BookingClassifier.classify(booking, now)

    @staticmethod
    def badge_color(status: Optional[str]) -> BadgeColor:
        parsed = parse_status(status)
        for matches, color in _BADGE_RULES:
            if matches(parsed):
                return color
        return BadgeColor.GRAY
