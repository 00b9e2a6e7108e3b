from flask import request, current_app
from flask_jwt_extended import jwt_required

from skyway.extensions import db
from skyway.models import User
from skyway.api.auth.schemas import AuthSchemas
from skyway.utils.api_response import APIResponse
from skyway.utils.decorators import current_user_id

from skyway.api.auth import auth_bp


@auth_bp.route('/profile', methods=['PUT'])
@jwt_required()
def update_profile():
    """
    Update the caller's own name and email
    
    Request Body:
        {"firstName": "Jane", "lastName": "Doe", "email": "jane@example.com"}
    
    Returns:
        200: Profile updated
        409: Email used by another account
        422: Validation error
    """
    user = db.session.get(User, current_user_id())
    if not user:
        return APIResponse.unauthorized('User not found')
    
    is_valid, errors, cleaned_data = AuthSchemas.validate_profile_update(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    email = cleaned_data.get('email')
    if email and User.query.filter(User.email == email, User.id != user.id).first():
        return APIResponse.conflict('Email already registered')
    
    for key, value in cleaned_data.items():
        setattr(user, key, value)
    
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update profile error: {str(e)}")
        return APIResponse.server_error('An error occurred while updating profile')
    
    return APIResponse.success({'user': user.to_dict()}, message='Profile updated successfully')


@auth_bp.route('/password', methods=['PUT'])
@jwt_required()
def change_password():
    """
    Change the caller's password
    
    Request Body:
        {"currentPassword": "old-secret", "newPassword": "new-secret", "confirmPassword": "new-secret"}
    
    Returns:
        200: Password changed
        401: Current password is wrong
        422: Validation error
    """
    user = db.session.get(User, current_user_id())
    if not user:
        return APIResponse.unauthorized('User not found')
    
    is_valid, errors, cleaned_data = AuthSchemas.validate_password_change(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    if not user.check_password(cleaned_data['current_password']):
        current_app.logger.warning(f"Wrong current password on password change for user {user.id}")
        return APIResponse.unauthorized('Current password is incorrect')
    
    try:
        user.set_password(cleaned_data['new_password'])
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Change password error: {str(e)}")
        return APIResponse.server_error('An error occurred while changing password')
    
    return APIResponse.success(message='Password changed successfully')
