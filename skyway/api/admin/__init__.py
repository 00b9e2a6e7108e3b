"""
Admin API Blueprint
Handles the back-office: bookings review, flights, locations, users, payment settings and site content
"""
from flask import Blueprint

# Create admin blueprint with /api/admin prefix
admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

# Import routes after blueprint creation to avoid circular imports
from . import bookings, flights, payment_accounts, users, content
