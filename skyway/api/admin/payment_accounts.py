from flask import request, current_app

from skyway.api.admin import admin_bp
from skyway.extensions import db
from skyway.models import PaymentAccount
from skyway.utils.decorators import admin_required
from skyway.utils.api_response import APIResponse
from skyway.api.admin.schemas import AdminSchemas

# ===== PAYMENT SETTINGS =====

@admin_bp.route('/payment-accounts', methods=['POST'])
@admin_required()
def save_payment_account():
    """
    Create a payment account (201), or update one when an id is given (200)
    
    Rates omitted on creation fall back to the 13% tax / 4% fee defaults.
    """
    is_valid, errors, cleaned_data = AdminSchemas.validate_payment_account(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    account_id = cleaned_data.pop('id', None)
    if account_id is not None:
        account = db.session.get(PaymentAccount, account_id)
        if not account:
            return APIResponse.not_found("Payment account not found")
    else:
        account = PaymentAccount()
        db.session.add(account)
    
    for key, value in cleaned_data.items():
        setattr(account, key, value)
    
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Save payment account error: {str(e)}")
        return APIResponse.server_error("Failed to update payment accounts")
    
    current_app.logger.info(
        f"Payment account {account.id} saved (tax_rate={account.tax_rate}, "
        f"service_fee_rate={account.service_fee_rate})"
    )
    
    if account_id is not None:
        return APIResponse.success({'account': account.to_dict()}, message='Payment account updated')
    return APIResponse.created({'account': account.to_dict()}, message='Payment account saved')
