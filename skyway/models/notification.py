from skyway.extensions import db

class NotificationRecord(db.Model):
    """Persisted copy of a user's notification inbox"""
    __tablename__ = 'notifications'
    
    id = db.Column(db.String(100), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), primary_key=True, index=True)
    
    type = db.Column(db.String(20), nullable=False)  # booking, payment, system
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    
    booking_id = db.Column(db.Integer, db.ForeignKey('bookings.id'))
    
    read = db.Column(db.Boolean, default=False, nullable=False)
    timestamp = db.Column(db.DateTime, nullable=False)
