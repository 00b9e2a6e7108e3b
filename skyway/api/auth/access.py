from flask import request, current_app
from flask_jwt_extended import create_access_token, jwt_required

from skyway.extensions import db
from skyway.models import User
from skyway.api.auth.schemas import AuthSchemas
from skyway.utils.api_response import APIResponse
from skyway.utils.decorators import current_user_id

from skyway.api.auth import auth_bp


def issue_token(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={'is_admin': user.is_admin}
    )


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Login with username and password
    
    Request Body:
        {"username": "jdoe", "password": "secret1"}
    
    Returns:
        200: Login successful with access token
        401: Invalid credentials
        422: Validation error
    """
    data = request.get_json(silent=True)
    
    is_valid, errors, cleaned_data = AuthSchemas.validate_login(data)
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    user = User.query.filter_by(username=cleaned_data['username']).first()
    if not user or not user.check_password(cleaned_data['password']):
        current_app.logger.warning(f"Failed login attempt for {cleaned_data['username']}")
        return APIResponse.unauthorized('Invalid username or password')
    
    return APIResponse.success({
        'user': user.to_dict(),
        'accessToken': issue_token(user)
    }, message='Login successful')


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    user = db.session.get(User, current_user_id())
    if not user:
        return APIResponse.unauthorized('User not found')
    
    return APIResponse.success({'user': user.to_dict()})
