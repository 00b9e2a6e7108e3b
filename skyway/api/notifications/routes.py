"""
Notification inbox routes

Every read re-derives notifications from the caller's bookings, so new
status changes show up without a separate trigger.
"""
from flask import current_app
from flask_jwt_extended import jwt_required

from skyway.models import Booking
from skyway.services.notification import NotificationService
from skyway.utils.api_response import APIResponse
from skyway.utils.decorators import current_user_id

from skyway.api.notifications import notifications_bp


@notifications_bp.route('', methods=['GET'])
@jwt_required()
def get_notifications():
    user_id = current_user_id()
    bookings = Booking.query.filter_by(user_id=user_id).all()
    
    inbox = NotificationService.sync_for_user(user_id, bookings)
    return APIResponse.success(inbox.to_dict())


@notifications_bp.route('/<notification_id>/read', methods=['POST'])
@jwt_required()
def mark_notification_read(notification_id):
    user_id = current_user_id()
    inbox = NotificationService.load_inbox(user_id)
    
    if inbox.get(notification_id) is None:
        return APIResponse.not_found('Notification not found')
    
    inbox = inbox.mark_as_read(notification_id)
    NotificationService.save_inbox(user_id, inbox)
    
    return APIResponse.success(inbox.to_dict(), message='Notification marked as read')


@notifications_bp.route('/read-all', methods=['POST'])
@jwt_required()
def mark_all_notifications_read():
    user_id = current_user_id()
    inbox = NotificationService.load_inbox(user_id).mark_all_as_read()
    NotificationService.save_inbox(user_id, inbox)
    
    current_app.logger.info(f"User {user_id} marked all notifications as read")
    return APIResponse.success(inbox.to_dict(), message='All notifications marked as read')
