from app.extensions.extension import db
from app.utils.ids import new_object_id
from datetime import datetime

class Product(db.Model):
    __tablename__ = 'products'

    product_id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    user_id = db.Column(db.String(24), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    status = db.Column(db.Integer, nullable=False, default=1)
    type = db.Column(db.Integer, nullable=False)
    description = db.Column(db.String(1000))
    price = db.Column(db.Numeric(12, 2), nullable=False)
    image_id = db.Column(db.JSON, default=list)
    video_id = db.Column(db.String(24))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'product_id': self.product_id,
            'user_id': self.user_id,
            'name': self.name,
            'status': self.status,
            'type': self.type,
            'description': self.description,
            'price': float(self.price) if self.price is not None else None,
            'image_id': self.image_id or [],
            'video_id': self.video_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Product {self.product_id}>'
