from app.extensions.extension import db
from app.utils.ids import new_object_id
from datetime import datetime

class Address(db.Model):
    __tablename__ = 'addresses'

    address_id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    user_id = db.Column(db.String(24), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    status = db.Column(db.Integer, nullable=False, default=1)
    type = db.Column(db.Integer, nullable=False)
    full_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    address_1 = db.Column(db.String(1000), nullable=False)
    address_2 = db.Column(db.String(1000))
    subdistrict = db.Column(db.String(100), nullable=False)
    district = db.Column(db.String(100), nullable=False)
    province = db.Column(db.String(100), nullable=False)
    country = db.Column(db.String(100), nullable=False)
    postal_code = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    FIELDS = (
        'name', 'status', 'type', 'full_name', 'phone', 'address_1', 'address_2',
        'subdistrict', 'district', 'province', 'country', 'postal_code'
    )

    def to_dict(self):
        data = {'address_id': self.address_id, 'user_id': self.user_id}
        data.update({field: getattr(self, field) for field in self.FIELDS})
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        data['updated_at'] = self.updated_at.isoformat() if self.updated_at else None
        return data

    def __repr__(self):
        return f'<Address {self.address_id}>'
