from app.extensions.extension import db
from app.utils.ids import new_object_id
from datetime import datetime

WITHDRAWAL_STATUSES = (1, 2, 3)
DEFAULT_WITHDRAWAL_STATUS = 1

class Withdrawal(db.Model):
    __tablename__ = 'withdrawals'

    withdrawal_id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    user_id = db.Column(db.String(24), nullable=False, index=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    status = db.Column(db.Integer, nullable=False, default=DEFAULT_WITHDRAWAL_STATUS)
    method = db.Column(db.String(100), nullable=False)
    account = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'withdrawal_id': self.withdrawal_id,
            'user_id': self.user_id,
            'amount': float(self.amount) if self.amount is not None else None,
            'status': self.status,
            'method': self.method,
            'account': self.account,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Withdrawal {self.withdrawal_id}>'
