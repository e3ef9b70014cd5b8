from flask import Blueprint, jsonify
from http import HTTPStatus
import logging
from flask_jwt_extended import create_access_token
from app.extensions.extension import db
from app.models.user import User, UserType
from app.routes.auth.auth_utils import validate_registration_input, validate_login_input
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.utils.auth import token_required
from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

def ensure_unique_identity(email, username, exclude_user_id=None):
    """Raise email_error / username_error when another user already holds them."""
    if email is not None:
        query = User.query.filter(User.email == email)
        if exclude_user_id:
            query = query.filter(User.user_id != exclude_user_id)
        if query.first():
            raise ValidationError('email_error')
    if username is not None:
        query = User.query.filter(User.username == username)
        if exclude_user_id:
            query = query.filter(User.user_id != exclude_user_id)
        if query.first():
            raise ValidationError('username_error')

def build_user(data, user_type=UserType.USER.value):
    user = User(
        username=data['username'],
        email=data['email'],
        first_name=data['first_name'],
        last_name=data['last_name'],
        phone=data['phone'],
        user_type=user_type,
        status=1,
        balance=0,
        image_id=data.get('image_id'),
        address_id=data.get('address_id')
    )
    user.password = data['password']
    return user

@auth_bp.route('/users/signup', methods=['POST'])
@handle_errors
def signup():
    data = get_json_body()
    require_valid(validate_registration_input(data))
    ensure_unique_identity(data['email'], data['username'])

    user = build_user(data)
    db.session.add(user)
    db.session.commit()
    logger.info(f"User {user.user_id} signed up")

    token = create_access_token(identity=user.user_id)

    return jsonify({
        'message': 'User registered successfully',
        'token': token,
        'user': user.to_dict()
    }), HTTPStatus.OK

@auth_bp.route('/users/login', methods=['POST'])
@handle_errors
def login():
    data = get_json_body()
    require_valid(validate_login_input(data))

    user = User.query.filter_by(email=data.get('email')).first()

    if not user or not user.verify_password(data.get('password')):
        return jsonify({'error': 'login or password is incorrect'}), HTTPStatus.UNAUTHORIZED

    token = create_access_token(identity=user.user_id)
    logger.info(f"User {user.user_id} logged in")

    response = user.to_dict()
    response['token'] = token
    return jsonify(response), HTTPStatus.OK

@auth_bp.route('/auth/verify', methods=['GET'])
@token_required
def verify(current_user):
    return jsonify({'user_type': current_user.user_type}), HTTPStatus.OK
