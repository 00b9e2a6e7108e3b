from skyway.models.user import User
from skyway.models.location import Location
from skyway.models.flight import Flight
from skyway.models.booking import Booking
from skyway.models.payment_account import PaymentAccount
from skyway.models.notification import NotificationRecord
from skyway.models.content import PageContent, SiteSetting
