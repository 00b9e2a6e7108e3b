from enum import Enum


class BookingStatus(str, Enum):
    PENDING = 'Pending'
    PENDING_PAYMENT = 'Pending Payment'
    PAID = 'Paid'
    CONFIRMED = 'Confirmed'
    DECLINED = 'Declined'
    COMPLETED = 'Completed'
    UNKNOWN = 'Unknown'


class TravelClass(str, Enum):
    ECONOMY = 'Economy'
    BUSINESS = 'Business'
    FIRST_CLASS = 'First Class'


class NotificationType(str, Enum):
    BOOKING = 'booking'
    PAYMENT = 'payment'
    SYSTEM = 'system'


class Bucket(str, Enum):
    """Filter buckets offered on the bookings list"""
    ALL = 'all'
    UPCOMING = 'upcoming'
    PAST = 'past'
    PENDING = 'pending'
    CONFIRMED = 'confirmed'


class BadgeColor(str, Enum):
    GREEN = 'green'
    YELLOW = 'yellow'
    RED = 'red'
    BLUE = 'blue'
    GRAY = 'gray'
