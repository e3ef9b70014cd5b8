from app.extensions.extension import db
from app.utils.ids import new_object_id
from datetime import datetime

TRANSACTION_STATUSES = (1, 2, 3, 4, 5, 6)
TRANSACTION_TYPES = (1, 2)
FEE_TYPES = (1, 2, 3)
DEFAULT_TRANSACTION_STATUS = 1

class Transaction(db.Model):
    __tablename__ = 'transactions'

    transaction_id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    # Seller and buyer, stored as stable user ids
    user_id = db.Column(db.String(24), nullable=False, index=True)
    customer_id = db.Column(db.String(24), nullable=False, index=True)
    status = db.Column(db.Integer, nullable=False, default=DEFAULT_TRANSACTION_STATUS)
    type = db.Column(db.Integer, nullable=False)
    product_id = db.Column(db.String(24), index=True)
    product_number = db.Column(db.Integer)
    address_id = db.Column(db.String(24))
    payment_id = db.Column(db.String(24))
    shipping = db.Column(db.String(100))
    shipping_price = db.Column(db.Numeric(12, 2))
    shipping_number = db.Column(db.String(100))
    shipping_details = db.Column(db.Text)
    shipping_image_id = db.Column(db.String(24))
    delivered_at = db.Column(db.DateTime, nullable=True)
    delivered_details = db.Column(db.Text)
    fee = db.Column(db.Numeric(12, 2))
    fee_type = db.Column(db.Integer)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'transaction_id': self.transaction_id,
            'user_id': self.user_id,
            'customer_id': self.customer_id,
            'status': self.status,
            'type': self.type,
            'product_id': self.product_id,
            'product_number': self.product_number,
            'address_id': self.address_id,
            'payment_id': self.payment_id,
            'shipping': self.shipping,
            'shipping_price': float(self.shipping_price) if self.shipping_price is not None else None,
            'shipping_number': self.shipping_number,
            'shipping_details': self.shipping_details,
            'shipping_image_id': self.shipping_image_id,
            'delivered_at': self.delivered_at.isoformat() if self.delivered_at else None,
            'delivered_details': self.delivered_details,
            'fee': float(self.fee) if self.fee is not None else None,
            'fee_type': self.fee_type,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Transaction {self.transaction_id}>'
