"""
Public catalog routes: locations, payment details and site content
"""
from skyway.extensions import db
from skyway.models import Location, PageContent, PaymentAccount, SiteSetting
from skyway.utils.api_response import APIResponse

from skyway.api.main import main_bp


@main_bp.route('/locations', methods=['GET'])
def get_locations():
    locations = Location.query.order_by(Location.city.asc()).all()
    return APIResponse.success({'locations': [location.to_dict() for location in locations]})


@main_bp.route('/payment-accounts', methods=['GET'])
def get_payment_accounts():
    """Payment accounts, newest first, with tax and fee rates resolved"""
    accounts = PaymentAccount.query.order_by(PaymentAccount.id.desc()).all()
    return APIResponse.success({'accounts': [account.to_dict() for account in accounts]})


@main_bp.route('/page-contents', methods=['GET'])
def get_page_contents():
    pages = PageContent.query.order_by(PageContent.slug.asc()).all()
    return APIResponse.success({'pages': [page.to_dict() for page in pages]})


@main_bp.route('/page-contents/<slug>', methods=['GET'])
def get_page_content(slug):
    page = PageContent.query.filter_by(slug=slug.lower()).first()
    if not page:
        return APIResponse.not_found('Page content not found')
    return APIResponse.success({'page': page.to_dict()})


@main_bp.route('/site-settings', methods=['GET'])
def get_site_settings():
    settings = SiteSetting.query.order_by(SiteSetting.key.asc()).all()
    return APIResponse.success({'settings': [setting.to_dict() for setting in settings]})


@main_bp.route('/site-settings/<key>', methods=['GET'])
def get_site_setting(key):
    setting = db.session.get(SiteSetting, key)
    if not setting:
        return APIResponse.not_found('Setting not found')
    return APIResponse.success({'setting': setting.to_dict()})
