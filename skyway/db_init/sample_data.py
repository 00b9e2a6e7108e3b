"""
Sample Data Generation
Creates realistic sample data for testing and development
"""
import logging
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from skyway.extensions import db
from skyway.models import User, Location, Flight, Booking, PaymentAccount, PageContent, SiteSetting
from skyway.models.enums import BookingStatus, TravelClass

logger = logging.getLogger(__name__)

SAMPLE_LOCATIONS = [
    ('JFK', 'John F. Kennedy International Airport', 'New York', 'United States'),
    ('LHR', 'Heathrow Airport', 'London', 'United Kingdom'),
    ('CDG', 'Charles de Gaulle Airport', 'Paris', 'France'),
    ('NRT', 'Narita International Airport', 'Tokyo', 'Japan'),
    ('DXB', 'Dubai International Airport', 'Dubai', 'United Arab Emirates'),
    ('NBO', 'Jomo Kenyatta International Airport', 'Nairobi', 'Kenya'),
]


def create_sample_users():
    """An admin and two customers, all with password 'password123'"""
    logger.info("Creating users...")
    
    people = [
        ('admin', 'admin@skyway.example', 'Site', 'Admin', True),
        ('jdoe', 'john.doe@example.com', 'John', 'Doe', False),
        ('jsmith', 'jane.smith@example.com', 'Jane', 'Smith', False),
    ]
    
    users = []
    for username, email, first_name, last_name, is_admin in people:
        user = User(
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            is_admin=is_admin
        )
        user.set_password('password123')
        db.session.add(user)
        users.append(user)
    
    db.session.commit()
    return users


def create_sample_locations():
    logger.info("Creating locations...")
    
    locations = [
        Location(code=code, name=name, city=city, country=country)
        for code, name, city, country in SAMPLE_LOCATIONS
    ]
    db.session.add_all(locations)
    db.session.commit()
    return locations


def create_sample_flights(locations, count=20):
    """Random flights between the sample locations, spread over -30..+60 days"""
    logger.info("Creating flights...")
    
    now = datetime.now(timezone.utc).replace(tzinfo=None, minute=0, second=0, microsecond=0)
    flights = []
    for _ in range(count):
        origin, destination = random.sample(locations, 2)
        departure = now + timedelta(days=random.randint(-30, 60), hours=random.randint(0, 23))
        economy = Decimal(random.randrange(150, 900))
        
        flights.append(Flight(
            origin_id=origin.id,
            destination_id=destination.id,
            departure_time=departure,
            arrival_time=departure + timedelta(hours=random.randint(2, 14)),
            economy_price=economy,
            business_price=economy * 3,
            first_class_price=economy * 5,
            capacity=random.choice([120, 180, 250])
        ))
    
    db.session.add_all(flights)
    db.session.commit()
    return flights


def create_sample_bookings(users, flights):
    logger.info("Creating bookings...")
    
    customers = [user for user in users if not user.is_admin]
    statuses = [
        BookingStatus.PENDING,
        BookingStatus.PENDING_PAYMENT,
        BookingStatus.CONFIRMED,
        BookingStatus.PAID,
        BookingStatus.DECLINED,
        BookingStatus.COMPLETED,
    ]
    
    bookings = []
    for customer in customers:
        for flight in random.sample(flights, min(6, len(flights))):
            status = random.choice(statuses)
            bookings.append(Booking(
                user_id=customer.id,
                flight_id=flight.id,
                booking_date=flight.departure_time - timedelta(days=random.randint(5, 40)),
                passenger_first_name=customer.first_name,
                passenger_last_name=customer.last_name,
                passenger_email=customer.email,
                passenger_phone='+15550100',
                status=status.value,
                travel_class=random.choice(list(TravelClass)).value,
                decline_reason='Payment could not be verified' if status is BookingStatus.DECLINED else None
            ))
    
    db.session.add_all(bookings)
    db.session.commit()
    return bookings


def create_sample_payment_account():
    logger.info("Creating payment account...")
    
    account = PaymentAccount(
        bank_name='First Sample Bank',
        account_name='Skyway Travel Ltd',
        account_number='0123456789',
        swift_code='FSBKUS33',
        mobile_provider='M-Pesa',
        mobile_number='+254700000000',
        tax_rate=0.13,
        service_fee_rate=0.04
    )
    db.session.add(account)
    db.session.commit()
    return account


def create_sample_site_content(admin):
    """About/terms pages and the basic site settings"""
    logger.info("Creating site content...")
    
    pages = [
        PageContent(
            slug='about-us',
            title='About Us',
            content='Skyway connects travellers with scheduled flights around the world.',
            updated_by=admin.id
        ),
        PageContent(
            slug='terms',
            title='Terms and Conditions',
            content='Bookings are confirmed once payment has been reviewed by our team.',
            updated_by=admin.id
        ),
    ]
    settings = [
        SiteSetting(key='site_name', value='Skyway'),
        SiteSetting(key='contact_email', value='support@skyway.example'),
    ]
    db.session.add_all(pages + settings)
    db.session.commit()
    return pages
