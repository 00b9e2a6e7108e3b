import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Sequence

from skyway.models.enums import Bucket
from skyway.services.booking_status import BookingClassifier, as_utc


@dataclass(frozen=True)
class BookingPage:
    items: Sequence
    total: int
    pages: int
    page: int
    per_page: int

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self, serialize=None):
        serialize = serialize or (lambda item: item.to_dict())
        return {
            'items': [serialize(item) for item in self.items],
            'pagination': pagination_block(
                self.page, self.per_page, self.pages, self.total, self.has_next, self.has_prev
            )
        }


def pagination_block(page, per_page, pages, total, has_next, has_prev):
    return {
        'page': page,
        'perPage': per_page,
        'totalPages': pages,
        'totalItems': total,
        'hasNext': has_next,
        'hasPrev': has_prev
    }


def _route_label(location) -> str:
    if location is None:
        return ''
    return f"{location.city} {location.code}"


class SearchHelper:
    """Search and filtering helpers"""

    @staticmethod
    def paginate_query(query, page: int = 1, per_page: int = 20):
        """Paginate SQLAlchemy query"""
        pagination = query.paginate(
            page=page,
            per_page=per_page,
            error_out=False
        )

        return {
            'items': [item.to_dict() for item in pagination.items],
            'pagination': pagination_block(
                page, per_page, pagination.pages, pagination.total,
                pagination.has_next, pagination.has_prev
            )
        }

    @staticmethod
    def paginate(items: Sequence, page: int, per_page: int) -> BookingPage:
        """Slice an already filtered list; pages past the end come back empty"""
        if page < 1:
            raise ValueError(f"page must be positive, got {page}")
        if per_page < 1:
            raise ValueError(f"per_page must be positive, got {per_page}")

        total = len(items)
        start = (page - 1) * per_page
        return BookingPage(
            items=list(items[start:start + per_page]),
            total=total,
            pages=math.ceil(total / per_page),
            page=page,
            per_page=per_page
        )

    @staticmethod
    def matches_search(booking, search: str) -> bool:
        """Case-insensitive match on route, status or #BK- reference"""
        if not search:
            return True

        needle = search.lower()
        flight = booking.flight
        haystacks = (
            _route_label(flight.origin),
            _route_label(flight.destination),
            booking.status or '',
            f"#BK-{booking.id}",
        )
        return any(needle in text.lower() for text in haystacks)

    @staticmethod
    def query_bookings(bookings: Iterable, bucket=Bucket.ALL, search: str = '',
                       page: int = 1, per_page: int = 5,
                       now: Optional[datetime] = None) -> BookingPage:
        """Bucket filter AND text search, then one page of the result"""
        now = now or datetime.now(timezone.utc)
        bucket = Bucket(bucket)

        matched = [
            booking for booking in bookings
            if BookingClassifier.in_bucket(booking, bucket, now)
            and SearchHelper.matches_search(booking, search)
        ]
        return SearchHelper.paginate(matched, page, per_page)

    @staticmethod
    def departure_window(date_range: str, now: datetime,
                         start_date: Optional[date] = None,
                         end_date: Optional[date] = None):
        """Resolve an admin date-range choice into (start, end) bounds.

        Both bounds are inclusive. "thisWeek" starts on Sunday.
        """
        now = as_utc(now)
        today = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
        one_tick = timedelta(microseconds=1)

        if date_range == 'today':
            return today, today + timedelta(days=1) - one_tick
        if date_range == 'thisWeek':
            week_start = today - timedelta(days=(today.weekday() + 1) % 7)
            return week_start, week_start + timedelta(days=7) - one_tick
        if date_range == 'thisMonth':
            month_start = today.replace(day=1)
            next_month = (month_start + timedelta(days=32)).replace(day=1)
            return month_start, next_month - one_tick
        if date_range == 'custom':
            start = datetime.combine(start_date, time.min, tzinfo=timezone.utc) if start_date else None
            end = datetime.combine(end_date, time.max, tzinfo=timezone.utc) if end_date else None
            return start, end
        return None, None

    @staticmethod
    def filter_admin_bookings(bookings: Iterable, search: str = '', status: Optional[str] = None,
                              origin_code: Optional[str] = None,
                              destination_code: Optional[str] = None,
                              date_range: Optional[str] = None,
                              start_date: Optional[date] = None,
                              end_date: Optional[date] = None,
                              now: Optional[datetime] = None) -> List:
        """Filters of the admin bookings screen, all combined with AND"""
        now = now or datetime.now(timezone.utc)
        window_start, window_end = SearchHelper.departure_window(
            date_range or 'all', now, start_date, end_date
        )
        needle = (search or '').lower()

        result = []
        for booking in bookings:
            flight = booking.flight

            if needle:
                fields = (
                    f"#BK-{booking.id}",
                    booking.passenger_first_name,
                    booking.passenger_last_name,
                    booking.passenger_email,
                    flight.origin.code,
                    flight.destination.code,
                    flight.origin.city,
                    flight.destination.city,
                )
                if not any(needle in (value or '').lower() for value in fields):
                    continue

            if status and booking.status != status:
                continue
            if origin_code and flight.origin.code != origin_code:
                continue
            if destination_code and flight.destination.code != destination_code:
                continue

            departure = as_utc(flight.departure_time)
            if window_start and departure < window_start:
                continue
            if window_end and departure > window_end:
                continue

            result.append(booking)

        return result
