from app.extensions.extension import db
from app.utils.ids import new_object_id
from datetime import datetime

class Payment(db.Model):
    __tablename__ = 'payments'

    payment_id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    user_id = db.Column(db.String(24), nullable=False, index=True)
    status = db.Column(db.Integer, nullable=False, default=1)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    method = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'payment_id': self.payment_id,
            'user_id': self.user_id,
            'status': self.status,
            'amount': float(self.amount) if self.amount is not None else None,
            'method': self.method,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Payment {self.payment_id}>'
