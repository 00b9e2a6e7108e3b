"""
Database Initialization Script
Creates tables and initializes the database with sample data for testing
"""
import logging

from skyway.extensions import db

logger = logging.getLogger(__name__)


def clear_database():
    """Drop all tables and recreate them"""
    logger.info("Dropping all tables...")
    db.drop_all()
    
    logger.info("Creating tables...")
    db.create_all()


def seed_database():
    """Populate an empty database with sample data; returns row counts"""
    from .sample_data import (
        create_sample_users,
        create_sample_locations,
        create_sample_flights,
        create_sample_bookings,
        create_sample_payment_account,
        create_sample_site_content
    )
    
    # Create data in order (respecting foreign keys)
    users = create_sample_users()
    locations = create_sample_locations()
    flights = create_sample_flights(locations)
    bookings = create_sample_bookings(users, flights)
    create_sample_payment_account()
    pages = create_sample_site_content(users[0])
    
    return {
        'users': len(users),
        'locations': len(locations),
        'flights': len(flights),
        'bookings': len(bookings),
        'pages': len(pages),
    }


def init_database(with_sample_data=True):
    """
    Initialize the database with tables and optionally sample data
    
    Args:
        with_sample_data (bool): Whether to populate with sample data
    """
    logger.info("Creating tables...")
    db.create_all()
    
    if not with_sample_data:
        return {}
    
    counts = seed_database()
    logger.info(f"Sample data created: {counts}")
    return counts


def reset_database():
    """Drop everything and start again with sample data"""
    clear_database()
    return seed_database()
