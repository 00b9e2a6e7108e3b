from flask import request, current_app
from sqlalchemy.exc import IntegrityError

from skyway.extensions import db
from skyway.models import User
from skyway.api.auth.schemas import AuthSchemas
from skyway.api.auth.access import issue_token
from skyway.utils.api_response import APIResponse

from skyway.api.auth import auth_bp


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create a customer account and log it in"""
    data = request.get_json(silent=True)
    
    is_valid, errors, cleaned_data = AuthSchemas.validate_registration(data)
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    user = User(
        username=cleaned_data['username'],
        email=cleaned_data['email'],
        first_name=cleaned_data['first_name'],
        last_name=cleaned_data['last_name'],
        is_admin=False
    )
    user.set_password(cleaned_data['password'])
    
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return APIResponse.conflict('Username or email already registered')
    
    current_app.logger.info(f"Registered user {user.username}")
    
    return APIResponse.created({
        'user': user.to_dict(),
        'accessToken': issue_token(user)
    }, message='Registration successful')
