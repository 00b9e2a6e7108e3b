from flask import request, current_app
from flask_jwt_extended import jwt_required

from skyway.extensions import db
from skyway.models import Booking
from skyway.utils.api_response import APIResponse
from skyway.utils.booking import BookingManager
from skyway.utils.decorators import current_user_id

from skyway.api.bookings import bookings_bp


@bookings_bp.route('/<int:booking_id>/payment', methods=['POST'])
@jwt_required()
def submit_payment(booking_id):
    """
    Record the customer's manual payment reference for admin review
    
    Request Body:
        {"paymentReference": "optional, generated when missing"}
    """
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return APIResponse.not_found('Booking not found')
    
    if booking.user_id != current_user_id():
        return APIResponse.forbidden("You don't have permission to update this booking")
    
    data = request.get_json(silent=True) or {}
    reference = str(data.get('paymentReference') or '').strip() or None
    
    try:
        reference = BookingManager.record_payment(booking, reference)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Submit payment error: {str(e)}")
        return APIResponse.server_error('Failed to update payment')
    
    current_app.logger.info(f"Payment reference {reference} recorded for {booking.reference}")
    
    return APIResponse.success(
        {'booking': booking.to_dict()},
        message='Payment submitted for review'
    )
