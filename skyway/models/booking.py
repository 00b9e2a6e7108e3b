from datetime import datetime, timezone
from skyway.extensions import db
from skyway.models.enums import BookingStatus, TravelClass

class Booking(db.Model):
    __tablename__ = 'bookings'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    flight_id = db.Column(db.Integer, db.ForeignKey('flights.id'), nullable=False, index=True)
    booking_date = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    
    # Passenger
    passenger_first_name = db.Column(db.String(100), nullable=False)
    passenger_last_name = db.Column(db.String(100), nullable=False)
    passenger_email = db.Column(db.String(120), nullable=False)
    passenger_phone = db.Column(db.String(30), nullable=False)
    
    # Kept as the raw string; parse with booking_status.parse_status
    status = db.Column(db.String(50), default=BookingStatus.PENDING.value, nullable=False)
    travel_class = db.Column(db.String(20), default=TravelClass.ECONOMY.value)
    
    # Manual payment review
    payment_reference = db.Column(db.String(100))
    decline_reason = db.Column(db.Text)
    receipt_issued_at = db.Column(db.DateTime)
    
    @property
    def effective_travel_class(self):
        return self.travel_class or TravelClass.ECONOMY.value
    
    @property
    def reference(self):
        return f"#BK-{self.id}"
    
    def to_dict(self, include_flight: bool = True):
        data = {
            'id': self.id,
            'reference': self.reference,
            'userId': self.user_id,
            'flightId': self.flight_id,
            'bookingDate': self.booking_date.isoformat() if self.booking_date else None,
            'passengerFirstName': self.passenger_first_name,
            'passengerLastName': self.passenger_last_name,
            'passengerEmail': self.passenger_email,
            'passengerPhone': self.passenger_phone,
            'status': self.status,
            'travelClass': self.effective_travel_class,
            'paymentReference': self.payment_reference,
            'declineReason': self.decline_reason,
            'receiptIssuedAt': self.receipt_issued_at.isoformat() if self.receipt_issued_at else None
        }
        
        if include_flight:
            data['flight'] = self.flight.to_dict() if self.flight else None
        
        return data
