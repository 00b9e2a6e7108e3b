from skyway.extensions import db

class Flight(db.Model):
    __tablename__ = 'flights'
    
    id = db.Column(db.Integer, primary_key=True)
    origin_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=False)
    destination_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=False)
    
    departure_time = db.Column(db.DateTime, nullable=False, index=True)
    arrival_time = db.Column(db.DateTime, nullable=False)
    
    # Base fares per travel class, before tax and service fee
    economy_price = db.Column(db.Numeric(10, 2), nullable=False)
    business_price = db.Column(db.Numeric(10, 2), nullable=False)
    first_class_price = db.Column(db.Numeric(10, 2), nullable=False)
    
    capacity = db.Column(db.Integer, nullable=False)
    
    origin = db.relationship('Location', foreign_keys=[origin_id])
    destination = db.relationship('Location', foreign_keys=[destination_id])
    bookings = db.relationship('Booking', backref='flight', lazy='dynamic')
    
    def to_dict(self):
        return {
            'id': self.id,
            'origin': self.origin.to_dict() if self.origin else None,
            'destination': self.destination.to_dict() if self.destination else None,
            'departureTime': self.departure_time.isoformat() if self.departure_time else None,
            'arrivalTime': self.arrival_time.isoformat() if self.arrival_time else None,
            'economyPrice': float(self.economy_price) if self.economy_price is not None else None,
            'businessPrice': float(self.business_price) if self.business_price is not None else None,
            'firstClassPrice': float(self.first_class_price) if self.first_class_price is not None else None,
            'capacity': self.capacity
        }
