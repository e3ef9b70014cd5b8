from flask import Blueprint, jsonify, request
from http import HTTPStatus
import logging
from app.extensions.extension import db
from app.models.address import Address
from app.routes.addresses.address_utils import validate_address_input
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.services.authorization import (
    Permission, owned_record_permissions, owner_list_scope, principal_from_user, require
)
from app.services.reference_validator import resolve_owner_id
from app.utils.auth import token_required
from app.utils.errors import NotFoundError
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

addresses_bp = Blueprint('addresses', __name__, url_prefix='/addresses')

REMOVED_STATUS = 2

def get_address_or_404(address_id):
    address = db.session.get(Address, address_id)
    if not address:
        raise NotFoundError('address not found')
    return address

@addresses_bp.route('', methods=['GET'])
@token_required
@handle_errors
def get_addresses(current_user):
    scope = owner_list_scope(
        principal_from_user(current_user), user_id=request.args.get('user_id'), active_only=True
    )
    query = Address.query.filter_by(**scope)
    return jsonify(paginate(query, Address.created_at, 'address_items')), HTTPStatus.OK

@addresses_bp.route('/<address_id>', methods=['GET'])
@token_required
@handle_errors
def get_address(current_user, address_id):
    address = get_address_or_404(address_id)
    permissions = owned_record_permissions(
        principal_from_user(current_user), address,
        transaction_context=request.args.get('transaction') == 'true'
    )
    require(permissions, Permission.READ, 'you are not authorized to view this address')
    return jsonify(address.to_dict()), HTTPStatus.OK

@addresses_bp.route('', methods=['POST'])
@token_required
@handle_errors
def create_address(current_user):
    data = get_json_body()
    require_valid(validate_address_input(data))

    principal = principal_from_user(current_user)
    permissions = owned_record_permissions(principal)
    address = Address(user_id=resolve_owner_id(principal, permissions, data.get('user_id')))
    for field in Address.FIELDS:
        if data.get(field) is not None:
            setattr(address, field, data[field])
    if address.status is None:
        address.status = 1

    db.session.add(address)
    db.session.commit()
    logger.info(f"Address {address.address_id} created for user {address.user_id}")

    return jsonify(address.to_dict()), HTTPStatus.OK

@addresses_bp.route('/<address_id>', methods=['PUT'])
@token_required
@handle_errors
def update_address(current_user, address_id):
    address = get_address_or_404(address_id)
    principal = principal_from_user(current_user)
    permissions = owned_record_permissions(principal, address)
    require(permissions, Permission.UPDATE, 'you are not authorized to update this address')

    data = get_json_body()
    require_valid(validate_address_input(data, partial=True))

    if Permission.SET_OWNER in permissions:
        if data.get('user_id'):
            address.user_id = resolve_owner_id(principal, permissions, data.get('user_id'))
    else:
        # Owners cannot change status here; use remove instead
        data.pop('status', None)

    for field in Address.FIELDS:
        if data.get(field) is not None:
            setattr(address, field, data[field])

    db.session.commit()
    logger.info(f"Address {address_id} updated by {current_user.user_id}")
    return jsonify(address.to_dict()), HTTPStatus.OK

@addresses_bp.route('/remove/<address_id>', methods=['POST'])
@token_required
@handle_errors
def remove_address(current_user, address_id):
    address = get_address_or_404(address_id)
    permissions = owned_record_permissions(principal_from_user(current_user), address)
    require(permissions, Permission.REMOVE, 'you are not authorized to remove this address')

    address.status = REMOVED_STATUS
    db.session.commit()
    logger.info(f"Address {address_id} removed by {current_user.user_id}")
    return jsonify(address.to_dict()), HTTPStatus.OK

@addresses_bp.route('/<address_id>', methods=['DELETE'])
@token_required
@handle_errors
def delete_address(current_user, address_id):
    require(
        owned_record_permissions(principal_from_user(current_user)), Permission.DELETE,
        'Unauthorized to access this resource'
    )
    address = get_address_or_404(address_id)
    db.session.delete(address)
    db.session.commit()
    logger.info(f"Address {address_id} deleted by admin {current_user.user_id}")
    return jsonify({'message': 'Address deleted successfully', 'address_id': address_id}), HTTPStatus.OK
