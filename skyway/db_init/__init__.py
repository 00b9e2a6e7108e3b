"""
Database Initialization Package
Provides CLI commands and utilities for initializing the database with sample data
"""

from .init_db import init_database, clear_database, reset_database
from .sample_data import (
    create_sample_users,
    create_sample_locations,
    create_sample_flights,
    create_sample_bookings,
    create_sample_payment_account,
)

__all__ = [
    'init_database',
    'clear_database',
    'reset_database',
    'create_sample_users',
    'create_sample_locations',
    'create_sample_flights',
    'create_sample_bookings',
    'create_sample_payment_account',
]
