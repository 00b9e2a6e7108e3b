from flask import request, current_app
from sqlalchemy.exc import IntegrityError

from skyway.api.admin import admin_bp
from skyway.extensions import db
from skyway.models import PageContent, SiteSetting
from skyway.utils.decorators import admin_required, current_user_id
from skyway.utils.api_response import APIResponse
from skyway.api.admin.schemas import AdminSchemas

# ===== PAGE CONTENTS =====

@admin_bp.route('/page-contents', methods=['POST'])
@admin_required()
def create_page_content():
    is_valid, errors, cleaned_data = AdminSchemas.validate_page_content(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    page = PageContent(updated_by=current_user_id(), **cleaned_data)
    try:
        db.session.add(page)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return APIResponse.conflict(f"A page with slug {cleaned_data['slug']} already exists")
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Create page content error: {str(e)}")
        return APIResponse.server_error("Failed to create page content")

    return APIResponse.created({'page': page.to_dict()}, message='Page created')


@admin_bp.route('/page-contents/<int:page_id>', methods=['PUT'])
@admin_required()
def update_page_content(page_id):
    page = db.session.get(PageContent, page_id)
    if not page:
        return APIResponse.not_found("Page content not found")

    is_valid, errors, cleaned_data = AdminSchemas.validate_page_content(
        request.get_json(silent=True), partial=True
    )
    if not is_valid:
        return APIResponse.validation_error(errors)

    for key, value in cleaned_data.items():
        setattr(page, key, value)
    page.updated_by = current_user_id()

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return APIResponse.conflict(f"A page with slug {cleaned_data.get('slug')} already exists")
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update page content error: {str(e)}")
        return APIResponse.server_error("Failed to update page content")

    return APIResponse.success({'page': page.to_dict()}, message='Page updated')


@admin_bp.route('/page-contents/<int:page_id>', methods=['DELETE'])
@admin_required()
def delete_page_content(page_id):
    page = db.session.get(PageContent, page_id)
    if not page:
        return APIResponse.not_found("Page content not found")

    try:
        db.session.delete(page)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Delete page content error: {str(e)}")
        return APIResponse.server_error("Failed to delete page content")

    return APIResponse.success(message='Page deleted')


# ===== SITE SETTINGS =====

@admin_bp.route('/site-settings', methods=['POST'])
@admin_required()
def save_site_setting():
    """Create or overwrite a setting by key"""
    is_valid, errors, cleaned_data = AdminSchemas.validate_site_setting(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    setting = db.session.get(SiteSetting, cleaned_data['key'])
    created = setting is None
    if created:
        setting = SiteSetting(key=cleaned_data['key'])
        db.session.add(setting)
    setting.value = cleaned_data['value']

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Save site setting error: {str(e)}")
        return APIResponse.server_error("Failed to update site setting")

    if created:
        return APIResponse.created({'setting': setting.to_dict()}, message='Setting created')
    return APIResponse.success({'setting': setting.to_dict()}, message='Setting updated')


@admin_bp.route('/site-settings/<key>', methods=['DELETE'])
@admin_required()
def delete_site_setting(key):
    setting = db.session.get(SiteSetting, key)
    if not setting:
        return APIResponse.not_found("Setting not found")

    try:
        db.session.delete(setting)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Delete site setting error: {str(e)}")
        return APIResponse.server_error("Failed to delete site setting")

    return APIResponse.success(message='Setting deleted')
