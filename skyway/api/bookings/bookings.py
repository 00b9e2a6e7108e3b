from datetime import datetime, timezone
from flask import request, current_app
from flask_jwt_extended import jwt_required, get_jwt

from skyway.extensions import db
from skyway.models import User, Flight, Booking, PaymentAccount
from skyway.models.enums import BookingStatus
from skyway.services.pricing import RateConfiguration
from skyway.api.bookings.schemas import BookingSchemas
from skyway.utils.api_response import APIResponse
from skyway.utils.booking import BookingManager
from skyway.utils.decorators import current_user_id
from skyway.utils.search_n_filters import SearchHelper

from skyway.api.bookings import bookings_bp


def user_bookings(user_id):
    return Booking.query.filter_by(user_id=user_id).order_by(Booking.booking_date.desc()).all()


@bookings_bp.route('', methods=['GET'])
@jwt_required()
def get_bookings():
    """
    Get the caller's bookings with bucket filter, search and pagination
    
    Query params:
        - filter: all, upcoming, past, pending, confirmed
        - search: text matched against route, status and #BK- reference
        - page, perPage: Pagination
    """
    user_id = current_user_id()
    
    is_valid, errors, cleaned_data = BookingSchemas.validate_booking_filters(
        request.args.to_dict(), current_app.config['BOOKINGS_PER_PAGE']
    )
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    now = datetime.now(timezone.utc)
    result = SearchHelper.query_bookings(
        user_bookings(user_id),
        bucket=cleaned_data['bucket'],
        search=cleaned_data['search'],
        page=cleaned_data['page'],
        per_page=cleaned_data['per_page'],
        now=now
    )
    
    rates = RateConfiguration.from_account(PaymentAccount.current())
    return APIResponse.paginated(
        'bookings',
        result.to_dict(lambda booking: BookingManager.serialize(booking, rates, now)),
        message='Bookings retrieved successfully'
    )


@bookings_bp.route('', methods=['POST'])
@jwt_required()
def create_booking():
    """Book a flight; new bookings start as Pending"""
    user_id = current_user_id()
    if not db.session.get(User, user_id):
        return APIResponse.unauthorized('User not found')
    
    is_valid, errors, cleaned_data = BookingSchemas.validate_booking_create(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    flight = db.session.get(Flight, cleaned_data['flight_id'])
    if not flight:
        return APIResponse.not_found('Flight not found')
    
    try:
        booking = Booking(
            user_id=user_id,
            status=BookingStatus.PENDING.value,
            booking_date=datetime.now(timezone.utc),
            **cleaned_data
        )
        db.session.add(booking)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Create booking error: {str(e)}")
        return APIResponse.server_error('Failed to create booking')
    
    current_app.logger.info(f"Booking {booking.reference} created for flight {flight.id}")
    
    rates = RateConfiguration.from_account(PaymentAccount.current())
    return APIResponse.created(
        {'booking': BookingManager.serialize(booking, rates)},
        message='Booking created successfully'
    )


@bookings_bp.route('/<int:booking_id>', methods=['GET'])
@jwt_required()
def get_booking(booking_id):
    """Booking details; visible to its owner and to admins"""
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return APIResponse.not_found('Booking not found')
    
    if booking.user_id != current_user_id() and not get_jwt().get('is_admin', False):
        return APIResponse.forbidden("You don't have permission to view this booking")
    
    rates = RateConfiguration.from_account(PaymentAccount.current())
    return APIResponse.success({'booking': BookingManager.serialize(booking, rates)})
