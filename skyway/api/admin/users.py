from flask import request, current_app
from flask_jwt_extended import get_jwt_identity
from sqlalchemy import or_

from skyway.api.admin import admin_bp
from skyway.extensions import db
from skyway.models import User, NotificationRecord, PageContent
from skyway.utils.decorators import admin_required, current_user_id
from skyway.utils.api_response import APIResponse
from skyway.utils.search_n_filters import SearchHelper
from skyway.api.admin.schemas import AdminSchemas

# ===== USER MANAGEMENT =====

def _taken(cleaned_data, user_id=None):
    """Error for a username or email already used by another account"""
    for key, label in (('username', 'Username'), ('email', 'Email')):
        if key not in cleaned_data:
            continue
        query = User.query.filter(getattr(User, key) == cleaned_data[key])
        if user_id is not None:
            query = query.filter(User.id != user_id)
        if query.first():
            return f"{label} already exists"
    return None


@admin_bp.route('/users', methods=['GET'])
@admin_required()
def get_users():
    """
    Get paginated list of users, newest first

    Query params:
        - page, perPage: Pagination
        - search: Search in username/name/email
    """
    args = request.args.to_dict()
    pagination = AdminSchemas.validate_pagination(args)

    query = User.query
    search = args.get('search', '').strip()
    if search:
        search_term = f"%{search}%"
        query = query.filter(
            or_(
                User.username.ilike(search_term),
                User.first_name.ilike(search_term),
                User.last_name.ilike(search_term),
                User.email.ilike(search_term)
            )
        )

    query = query.order_by(User.created_at.desc(), User.id.desc())
    return APIResponse.paginated(
        'users', SearchHelper.paginate_query(query, pagination['page'], pagination['per_page'])
    )


@admin_bp.route('/users', methods=['POST'])
@admin_required()
def create_user():
    is_valid, errors, cleaned_data = AdminSchemas.validate_user(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    taken = _taken(cleaned_data)
    if taken:
        return APIResponse.conflict(taken)

    password = cleaned_data.pop('password')
    user = User(**cleaned_data)
    user.set_password(password)

    try:
        db.session.add(user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Create user error: {str(e)}")
        return APIResponse.server_error("Failed to create user")

    current_app.logger.info(f"Admin {get_jwt_identity()} created user {user.username}")
    return APIResponse.created({'user': user.to_dict()}, message='User created')


@admin_bp.route('/users/<int:user_id>', methods=['PUT'])
@admin_required()
def update_user(user_id):
    """Update account fields; a given password is re-hashed"""
    user = db.session.get(User, user_id)
    if not user:
        return APIResponse.not_found("User not found")

    is_valid, errors, cleaned_data = AdminSchemas.validate_user(request.get_json(silent=True), partial=True)
    if not is_valid:
        return APIResponse.validation_error(errors)

    taken = _taken(cleaned_data, user_id=user.id)
    if taken:
        return APIResponse.conflict(taken)

    password = cleaned_data.pop('password', None)
    for key, value in cleaned_data.items():
        setattr(user, key, value)
    if password:
        user.set_password(password)

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update user error: {str(e)}")
        return APIResponse.server_error("Failed to update user")

    return APIResponse.success({'user': user.to_dict()}, message='User updated')


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@admin_required()
def delete_user(user_id):
    """Delete an account without bookings; admins cannot delete themselves"""
    if user_id == current_user_id():
        return APIResponse.error("Cannot delete your own account")

    user = db.session.get(User, user_id)
    if not user:
        return APIResponse.not_found("User not found")

    if user.bookings.count():
        return APIResponse.conflict("Cannot delete a user that has bookings")

    try:
        NotificationRecord.query.filter_by(user_id=user.id).delete()
        PageContent.query.filter_by(updated_by=user.id).update({'updated_by': None})
        db.session.delete(user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Delete user error: {str(e)}")
        return APIResponse.server_error("Failed to delete user")

    current_app.logger.info(f"Admin {get_jwt_identity()} deleted user {user_id}")
    return APIResponse.success(message='User deleted')
