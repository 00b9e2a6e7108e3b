from functools import wraps
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from skyway.utils.api_response import APIResponse


def current_user_id():
    """Id of the user behind the request's access token"""
    return int(get_jwt_identity())


def admin_required():
    """Decorator to require a valid token carrying the admin claim"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            verify_jwt_in_request()
            
            if not get_jwt().get('is_admin', False):
                return APIResponse.forbidden("You don't have permission to access this resource")
            
            return f(*args, **kwargs)
        return decorated_function
    return decorator
