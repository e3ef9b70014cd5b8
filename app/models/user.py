from app.extensions.extension import db
from app.utils.ids import new_object_id
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
import enum

class UserType(enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"

class User(db.Model):
    __tablename__ = 'users'

    user_id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    username = db.Column(db.String(50), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    user_type = db.Column(db.String(10), nullable=False, default=UserType.USER.value)
    status = db.Column(db.Integer, nullable=False, default=1)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    balance = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    image_id = db.Column(db.String(24), nullable=True)
    address_id = db.Column(db.String(24), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def password(self):
        raise AttributeError('password is not a readable attribute')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.user_type == UserType.ADMIN.value

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'username': self.username,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'user_type': self.user_type,
            'status': self.status,
            'phone': self.phone,
            'balance': float(self.balance) if self.balance is not None else 0,
            'image_id': self.image_id,
            'address_id': self.address_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<User {self.username}>'
