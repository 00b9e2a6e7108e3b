import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

from skyway import create_app
from skyway.extensions import db as _db
from skyway.models import User, Location, Flight, Booking
from skyway.api.auth.access import issue_token
from config import Config

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-secret-key-that-is-long-enough-for-hs256'
    BOOKINGS_PER_PAGE = 5
    ADMIN_BOOKINGS_PER_PAGE = 10
    MAIL_SERVER = None

@pytest.fixture
def app():
    app = create_app(TestConfig)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def db(app):
    return _db


# ===== Model factories =====

@pytest.fixture
def make_user(db):
    def _make_user(username, is_admin=False):
        user = User(
            username=username,
            email=f"{username}@example.com",
            first_name=username.capitalize(),
            last_name='Tester',
            is_admin=is_admin
        )
        user.set_password('password123')
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user

@pytest.fixture
def customer(make_user):
    return make_user('alice')

@pytest.fixture
def admin_user(make_user):
    return make_user('admin', is_admin=True)

@pytest.fixture
def auth_headers(customer):
    return {"Authorization": f"Bearer {issue_token(customer)}"}

@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {issue_token(admin_user)}"}

@pytest.fixture
def locations(db):
    paris = Location(code='PAR', name='Charles de Gaulle Airport', city='Paris', country='France')
    tokyo = Location(code='TYO', name='Narita International Airport', city='Tokyo', country='Japan')
    london = Location(code='LON', name='Heathrow Airport', city='London', country='United Kingdom')
    db.session.add_all([paris, tokyo, london])
    db.session.commit()
    return {'PAR': paris, 'TYO': tokyo, 'LON': london}

@pytest.fixture
def make_flight(db, locations):
    def _make_flight(origin='PAR', destination='TYO', departure=None, economy='100.00'):
        departure = departure or datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=10)
        economy = Decimal(economy)
        flight = Flight(
            origin_id=locations[origin].id,
            destination_id=locations[destination].id,
            departure_time=departure,
            arrival_time=departure + timedelta(hours=12),
            economy_price=economy,
            business_price=economy * 3,
            first_class_price=economy * 5,
            capacity=180
        )
        db.session.add(flight)
        db.session.commit()
        return flight
    return _make_flight

@pytest.fixture
def make_booking(db):
    def _make_booking(user, flight, status='Pending', booking_date=None, **kwargs):
        booking = Booking(
            user_id=user.id,
            flight_id=flight.id,
            booking_date=booking_date or datetime.now(timezone.utc),
            passenger_first_name=user.first_name,
            passenger_last_name=user.last_name,
            passenger_email=user.email,
            passenger_phone='+15550100',
            status=status,
            **kwargs
        )
        db.session.add(booking)
        db.session.commit()
        return booking
    return _make_booking


# ===== Plain stand-ins for the pure helpers =====

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

def stub_location(code, city, name=None):
    return SimpleNamespace(code=code, city=city, name=name or f"{city} Airport")

def stub_booking(id, status, departure=None, origin=('PAR', 'Paris'), destination=('TYO', 'Tokyo'),
                 booking_date=None, decline_reason=None, **passenger):
    flight = SimpleNamespace(
        departure_time=departure or NOW + timedelta(days=3),
        origin=stub_location(*origin),
        destination=stub_location(*destination)
    )
    return SimpleNamespace(
        id=id,
        status=status,
        flight=flight,
        booking_date=booking_date or NOW - timedelta(days=id),
        decline_reason=decline_reason,
        passenger_first_name=passenger.get('first_name', 'Jane'),
        passenger_last_name=passenger.get('last_name', 'Doe'),
        passenger_email=passenger.get('email', 'jane@example.com')
    )
