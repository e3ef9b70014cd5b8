from flask import Blueprint, jsonify, request
from http import HTTPStatus
import logging
from app.extensions.extension import db
from app.middleware.admin_auth import admin_required
from app.models.user import User, UserType
from app.routes.auth.auth import build_user, ensure_unique_identity
from app.routes.auth.auth_utils import validate_registration_input, validate_password_change
from app.routes.user.user_utils import (
    ADMIN_ONLY_USER_FIELDS, validate_user_update, get_json_body, require_valid, handle_errors
)
from app.services.authorization import Permission, principal_from_user, user_permissions, require
from app.utils.auth import token_required
from app.utils.errors import NotFoundError, ValidationError
from app.utils.pagination import paginate

# Set up logging
logger = logging.getLogger(__name__)

user_bp = Blueprint('user', __name__, url_prefix='/users')

UPDATABLE_USER_FIELDS = (
    'username', 'email', 'first_name', 'last_name', 'phone',
    'user_type', 'status', 'balance', 'image_id', 'address_id'
)

def get_user_or_404(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError('user not found')
    return user

@user_bp.route('/me', methods=['GET'])
@token_required
@handle_errors
def get_current_user(current_user):
    return jsonify(current_user.to_dict()), HTTPStatus.OK

@user_bp.route('/username', methods=['GET'])
@token_required
@handle_errors
def get_username_by_id(current_user):
    """Public profile of a user, used to display the parties of a transaction"""
    user = get_user_or_404(request.args.get('user_id'))
    profile = user.to_dict()
    for field in ('status', 'balance', 'address_id', 'created_at', 'updated_at'):
        profile.pop(field)
    return jsonify(profile), HTTPStatus.OK

@user_bp.route('', methods=['GET'])
@admin_required
@handle_errors
def get_users(current_user):
    return jsonify(paginate(User.query, User.created_at, 'user_items')), HTTPStatus.OK

@user_bp.route('/<user_id>', methods=['GET'])
@token_required
@handle_errors
def get_user(current_user, user_id):
    user = get_user_or_404(user_id)
    permissions = user_permissions(principal_from_user(current_user), user)
    require(permissions, Permission.READ, 'Unauthorized to access this resource')
    return jsonify(user.to_dict()), HTTPStatus.OK

@user_bp.route('', methods=['POST'])
@admin_required
@handle_errors
def create_user(current_user):
    data = get_json_body()
    require_valid(validate_registration_input(data, allow_user_type=True))
    ensure_unique_identity(data['email'], data['username'])

    user = build_user(data, user_type=data.get('user_type') or UserType.USER.value)
    if data.get('status') is not None:
        user.status = data['status']
    db.session.add(user)
    db.session.commit()
    logger.info(f"User {user.user_id} created by admin {current_user.user_id}")

    return jsonify(user.to_dict()), HTTPStatus.OK

@user_bp.route('/<user_id>', methods=['PUT'])
@token_required
@handle_errors
def update_user(current_user, user_id):
    logger.info(f"Update requested for user ID: {user_id}")
    user = get_user_or_404(user_id)
    permissions = user_permissions(principal_from_user(current_user), user)
    require(permissions, Permission.UPDATE, 'you are not authorized to update this user')

    data = get_json_body()
    require_valid(validate_user_update(data))

    if not current_user.is_admin:
        forbidden = [field for field in ADMIN_ONLY_USER_FIELDS if field in data]
        if forbidden:
            raise ValidationError(f"Only admins can change: {', '.join(forbidden)}")

    ensure_unique_identity(
        data.get('email') if data.get('email') != user.email else None,
        data.get('username') if data.get('username') != user.username else None,
        exclude_user_id=user.user_id
    )

    for field in UPDATABLE_USER_FIELDS:
        if field in data and data[field] is not None:
            setattr(user, field, data[field])
    if data.get('password'):
        user.password = data['password']

    db.session.commit()
    logger.info(f"User {user.user_id} updated successfully")

    return jsonify({
        'message': 'User updated successfully',
        'user': user.to_dict()
    }), HTTPStatus.OK

@user_bp.route('/<user_id>/password', methods=['PUT'])
@token_required
@handle_errors
def update_password(current_user, user_id):
    user = get_user_or_404(user_id)
    if not current_user.is_admin and user.user_id != current_user.user_id:
        return jsonify({'error': "you are not authorized to update this user's password"}), HTTPStatus.FORBIDDEN

    data = get_json_body()
    require_valid(validate_password_change(data))

    if not user.verify_password(data['current_password']):
        return jsonify({'error': 'invalid_password'}), HTTPStatus.BAD_REQUEST

    user.password = data['new_password']
    db.session.commit()
    logger.info(f"Password updated for user {user.user_id}")

    return jsonify({'message': 'Password updated successfully'}), HTTPStatus.OK

@user_bp.route('/<user_id>', methods=['DELETE'])
@admin_required
@handle_errors
def delete_user(current_user, user_id):
    user = get_user_or_404(user_id)
    db.session.delete(user)
    db.session.commit()
    logger.info(f"User {user_id} deleted by admin {current_user.user_id}")
    return jsonify({'message': 'User deleted successfully', 'user_id': user_id}), HTTPStatus.OK
