from flask import Blueprint, jsonify, request
from http import HTTPStatus
import logging
from app.extensions.extension import db
from app.models.product import Product
from app.routes.products.product_utils import PRODUCT_FIELDS, validate_product_input
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.services.authorization import (
    Permission, owned_record_permissions, owner_list_scope, principal_from_user, require
)
from app.services.reference_validator import resolve_owner_id
from app.utils.auth import token_required
from app.utils.errors import NotFoundError
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

products_bp = Blueprint('products', __name__, url_prefix='/products')

REMOVED_STATUS = 2

def get_product_or_404(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFoundError('product not found')
    return product

@products_bp.route('', methods=['GET'])
@token_required
@handle_errors
def get_products(current_user):
    scope = owner_list_scope(
        principal_from_user(current_user), user_id=request.args.get('user_id'), active_only=True
    )
    query = Product.query.filter_by(**scope)
    return jsonify(paginate(query, Product.created_at, 'product_items')), HTTPStatus.OK

@products_bp.route('/<product_id>', methods=['GET'])
@token_required
@handle_errors
def get_product(current_user, product_id):
    product = get_product_or_404(product_id)
    permissions = owned_record_permissions(
        principal_from_user(current_user), product,
        transaction_context=request.args.get('transaction') == 'true'
    )
    require(permissions, Permission.READ, 'you are not authorized to view this product')
    return jsonify(product.to_dict()), HTTPStatus.OK

@products_bp.route('', methods=['POST'])
@token_required
@handle_errors
def create_product(current_user):
    data = get_json_body()
    require_valid(validate_product_input(data))

    principal = principal_from_user(current_user)
    permissions = owned_record_permissions(principal)
    product = Product(user_id=resolve_owner_id(principal, permissions, data.get('user_id')))
    for field in PRODUCT_FIELDS:
        if data.get(field) is not None:
            setattr(product, field, data[field])
    if product.status is None:
        product.status = 1

    db.session.add(product)
    db.session.commit()
    logger.info(f"Product {product.product_id} created for user {product.user_id}")

    return jsonify(product.to_dict()), HTTPStatus.OK

@products_bp.route('/<product_id>', methods=['PUT'])
@token_required
@handle_errors
def update_product(current_user, product_id):
    product = get_product_or_404(product_id)
    principal = principal_from_user(current_user)
    permissions = owned_record_permissions(principal, product)
    require(permissions, Permission.UPDATE, 'you are not authorized to update this product')

    data = get_json_body()
    require_valid(validate_product_input(data, partial=True))

    if Permission.SET_OWNER in permissions:
        if data.get('user_id'):
            product.user_id = resolve_owner_id(principal, permissions, data.get('user_id'))
    else:
        # Owners cannot change status here; use remove instead
        data.pop('status', None)

    for field in PRODUCT_FIELDS:
        if data.get(field) is not None:
            setattr(product, field, data[field])

    db.session.commit()
    logger.info(f"Product {product_id} updated by {current_user.user_id}")
    return jsonify(product.to_dict()), HTTPStatus.OK

@products_bp.route('/remove/<product_id>', methods=['POST'])
@token_required
@handle_errors
def remove_product(current_user, product_id):
    product = get_product_or_404(product_id)
    permissions = owned_record_permissions(principal_from_user(current_user), product)
    require(permissions, Permission.REMOVE, 'you are not authorized to remove this product')

    product.status = REMOVED_STATUS
    db.session.commit()
    logger.info(f"Product {product_id} removed by {current_user.user_id}")
    return jsonify(product.to_dict()), HTTPStatus.OK

@products_bp.route('/<product_id>', methods=['DELETE'])
@token_required
@handle_errors
def delete_product(current_user, product_id):
    require(
        owned_record_permissions(principal_from_user(current_user)), Permission.DELETE,
        'Unauthorized to access this resource'
    )
    product = get_product_or_404(product_id)
    db.session.delete(product)
    db.session.commit()
    logger.info(f"Product {product_id} deleted by admin {current_user.user_id}")
    return jsonify({'message': 'Product deleted successfully', 'product_id': product_id}), HTTPStatus.OK
