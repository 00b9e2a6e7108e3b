from datetime import datetime, timezone
from flask import current_app, send_file, url_for
from flask_jwt_extended import jwt_required, get_jwt

from skyway.extensions import db
from skyway.models import Booking, PaymentAccount
from skyway.services.pricing import RateConfiguration
from skyway.services.receipt import ReceiptBuilder, can_issue_receipt, receipt_filename
from skyway.utils.api_response import APIResponse
from skyway.utils.decorators import current_user_id

from skyway.api.bookings import bookings_bp


def _receipt_booking(booking_id):
    """Return (booking, None) when a receipt may be issued, else (None, error response)"""
    booking = db.session.get(Booking, booking_id)
    if not booking:
        return None, APIResponse.not_found('Booking not found')

    if booking.user_id != current_user_id() and not get_jwt().get('is_admin', False):
        return None, APIResponse.forbidden("You don't have permission to access this booking")

    if not can_issue_receipt(booking):
        return None, APIResponse.error('Receipt can only be generated for paid bookings')

    return booking, None


@bookings_bp.route('/<int:booking_id>/receipt', methods=['POST'])
@jwt_required()
def issue_receipt(booking_id):
    """
    Issue the receipt of a Paid or Completed booking

    Returns:
        200: issue date and the download URL
        400: booking not paid yet
        403: not the owner and not an admin
    """
    booking, error = _receipt_booking(booking_id)
    if error:
        return error

    try:
        if booking.receipt_issued_at is None:
            booking.receipt_issued_at = datetime.now(timezone.utc)
            db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Issue receipt error: {str(e)}")
        return APIResponse.server_error('Failed to generate receipt')

    return APIResponse.success({
        'receiptUrl': url_for('bookings.download_receipt', booking_id=booking.id),
        'receiptIssuedAt': booking.receipt_issued_at.isoformat()
    }, message='Receipt generated')


@bookings_bp.route('/<int:booking_id>/receipt', methods=['GET'])
@jwt_required()
def download_receipt(booking_id):
    """Download the receipt PDF, issuing it first if needed"""
    booking, error = _receipt_booking(booking_id)
    if error:
        return error

    try:
        if booking.receipt_issued_at is None:
            booking.receipt_issued_at = datetime.now(timezone.utc)
            db.session.commit()

        rates = RateConfiguration.from_account(PaymentAccount.current())
        buffer = ReceiptBuilder.build(booking, rates, issued_at=booking.receipt_issued_at)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Generate receipt error: {str(e)}")
        return APIResponse.server_error('Failed to download receipt')

    return send_file(
        buffer,
        as_attachment=True,
        download_name=receipt_filename(booking),
        mimetype='application/pdf'
    )
