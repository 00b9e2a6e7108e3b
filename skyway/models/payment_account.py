from datetime import datetime, timezone
from skyway.extensions import db

class PaymentAccount(db.Model):
    """Payout details shown to customers, plus the pricing rates"""
    __tablename__ = 'payment_accounts'
    
    id = db.Column(db.Integer, primary_key=True)
    
    # Bank transfer
    bank_name = db.Column(db.String(200))
    account_name = db.Column(db.String(200))
    account_number = db.Column(db.String(100))
    swift_code = db.Column(db.String(20))
    
    # Mobile money
    mobile_provider = db.Column(db.String(100))
    mobile_number = db.Column(db.String(30))
    
    # Fractions of the base fare; NULL means "use the default"
    tax_rate = db.Column(db.Float, nullable=True)
    service_fee_rate = db.Column(db.Float, nullable=True)
    
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )
    
    @staticmethod
    def current():
        """Newest account, or None when nothing is configured yet"""
        return PaymentAccount.query.order_by(PaymentAccount.id.desc()).first()
    
    def to_dict(self):
        from skyway.services.pricing import RateConfiguration
        
        rates = RateConfiguration.from_account(self)
        return {
            'id': self.id,
            'bankName': self.bank_name,
            'accountName': self.account_name,
            'accountNumber': self.account_number,
            'swiftCode': self.swift_code,
            'mobileProvider': self.mobile_provider,
            'mobileNumber': self.mobile_number,
            'taxRate': float(rates.effective_tax_rate),
            'serviceFeeRate': float(rates.effective_service_fee_rate)
        }
