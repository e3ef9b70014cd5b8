import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from app.extensions.extension import db
from app.models.address import Address
from app.models.product import Product
from app.models.user import User, UserType


def make_user(username, user_type=UserType.USER.value, balance=0, status=1):
    user = User(
        username=username,
        email=f'{username}@example.com',
        first_name=username.capitalize(),
        last_name='Tester',
        phone='0800000000',
        user_type=user_type,
        status=status,
        balance=balance
    )
    user.password = 'password123'
    db.session.add(user)
    db.session.commit()
    return user


def make_product(owner, name='Vintage camera', status=1):
    product = Product(user_id=owner.user_id, name=name, type=1, price=120, status=status)
    db.session.add(product)
    db.session.commit()
    return product


def make_address(owner, status=1):
    address = Address(
        user_id=owner.user_id, name='Home', type=1, full_name='Home Owner', phone='0800000000',
        address_1='1 Main Street', subdistrict='Centre', district='Old Town',
        province='Bangkok', country='Thailand', postal_code='10100', status=status
    )
    db.session.add(address)
    db.session.commit()
    return address


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    return {
        'admin': make_user('adminuser', user_type=UserType.ADMIN.value),
        'alice': make_user('alice01', balance=100),
        'bob': make_user('bobby01', balance=50),
        'seller': make_user('seller01', balance=0),
    }


@pytest.fixture
def auth_headers(users):
    def headers_for(name):
        token = create_access_token(identity=users[name].user_id)
        return {'Authorization': f'Bearer {token}'}
    return headers_for
