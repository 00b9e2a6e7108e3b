from datetime import datetime, timezone
from flask import request, current_app
from flask_jwt_extended import get_jwt_identity

from skyway.api.admin import admin_bp
from skyway.extensions import db
from skyway.models import Booking, PaymentAccount
from skyway.models.enums import BookingStatus
from skyway.services.pricing import RateConfiguration
from skyway.services.receipt import ReceiptBuilder, receipt_filename
from skyway.utils.decorators import admin_required
from skyway.utils.api_response import APIResponse
from skyway.utils.booking import BookingManager
from skyway.utils.email import EmailService
from skyway.utils.search_n_filters import SearchHelper
from skyway.api.admin.schemas import AdminSchemas

# ===== BOOKING MANAGEMENT =====

def _notify_passenger(booking, previous):
    """Email the passenger about a status change; a failed email never fails the update"""
    try:
        if booking.status == BookingStatus.PAID.value:
            rates = RateConfiguration.from_account(PaymentAccount.current())
            receipt = ReceiptBuilder.build(booking, rates, issued_at=booking.receipt_issued_at)
            EmailService.send_payment_confirmation_email(booking, receipt.getvalue(), receipt_filename(booking))
        else:
            EmailService.send_status_update_email(booking, previous)
    except Exception as e:
        current_app.logger.error(f"Booking {booking.id} email error: {str(e)}")


@admin_bp.route('/bookings', methods=['GET'])
@admin_required()
def get_bookings():
    """
    Get paginated list of bookings with filtering
    
    Query params:
        - page, perPage: Pagination
        - search: booking reference, passenger name/email, route
        - status: exact status
        - originCode, destinationCode: route filters
        - dateRange: all, today, thisWeek, thisMonth, custom (with startDate, endDate)
    """
    args = request.args.to_dict()
    pagination = AdminSchemas.validate_pagination(args, current_app.config['ADMIN_BOOKINGS_PER_PAGE'])
    
    is_valid, errors, filters = AdminSchemas.validate_booking_filters(args)
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    now = datetime.now(timezone.utc)
    bookings = Booking.query.order_by(Booking.booking_date.desc()).all()
    matched = SearchHelper.filter_admin_bookings(bookings, now=now, **filters)
    page = SearchHelper.paginate(matched, pagination['page'], pagination['per_page'])
    
    rates = RateConfiguration.from_account(PaymentAccount.current())
    
    def serialize(booking):
        data = BookingManager.serialize(booking, rates, now)
        data['customer'] = booking.user.to_dict() if booking.user else None
        return data
    
    return APIResponse.paginated('bookings', page.to_dict(serialize), message='Bookings retrieved successfully')


@admin_bp.route('/bookings/<int:booking_id>/status', methods=['PUT'])
@admin_required()
def update_booking_status(booking_id):
    """
    Review a booking
    
    Request Body:
        {"status": "Declined", "declineReason": "Payment not received"}
    """
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return APIResponse.not_found("Booking not found")
    
    is_valid, errors, cleaned_data = AdminSchemas.validate_status_update(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    try:
        previous = BookingManager.update_status(
            booking, cleaned_data['status'], cleaned_data['decline_reason']
        )
        if booking.status == BookingStatus.PAID.value and previous != BookingStatus.PAID.value:
            booking.receipt_issued_at = datetime.now(timezone.utc)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update booking status error: {str(e)}")
        return APIResponse.server_error("Failed to update booking status")
    
    current_app.logger.info(
        f"Admin {get_jwt_identity()} moved {booking.reference} from {previous} to {booking.status}"
    )
    
    if previous != booking.status:
        _notify_passenger(booking, previous)
    
    return APIResponse.success({
        'booking': booking.to_dict()
    }, message='Booking status updated')
