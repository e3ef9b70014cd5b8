from flask import Blueprint, jsonify, request
from http import HTTPStatus
import logging
from app.extensions.extension import db
from app.models.payment import Payment
from app.routes.payments.payment_utils import PAYMENT_FIELDS, validate_payment_input
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.services.authorization import (
    Permission, owned_record_permissions, owner_list_scope, payment_permissions,
    principal_from_user, require
)
from app.services.reference_validator import resolve_owner_id
from app.utils.auth import token_required
from app.utils.errors import NotFoundError
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

payments_bp = Blueprint('payments', __name__, url_prefix='/payments')

def get_payment_or_404(payment_id):
    payment = db.session.get(Payment, payment_id)
    if not payment:
        raise NotFoundError('payment not found')
    return payment

@payments_bp.route('', methods=['GET'])
@token_required
@handle_errors
def get_payments(current_user):
    scope = owner_list_scope(principal_from_user(current_user), user_id=request.args.get('user_id'))
    query = Payment.query.filter_by(**scope)
    return jsonify(paginate(query, Payment.created_at, 'payment_items')), HTTPStatus.OK

@payments_bp.route('/<payment_id>', methods=['GET'])
@token_required
@handle_errors
def get_payment(current_user, payment_id):
    payment = get_payment_or_404(payment_id)
    permissions = payment_permissions(principal_from_user(current_user), payment)
    require(permissions, Permission.READ, 'you are not authorized to view this payment')
    return jsonify(payment.to_dict()), HTTPStatus.OK

@payments_bp.route('', methods=['POST'])
@token_required
@handle_errors
def create_payment(current_user):
    data = get_json_body()
    require_valid(validate_payment_input(data))

    principal = principal_from_user(current_user)
    permissions = payment_permissions(principal)
    payment = Payment(user_id=resolve_owner_id(principal, permissions, data.get('user_id')))
    for field in PAYMENT_FIELDS:
        if data.get(field) is not None:
            setattr(payment, field, data[field])
    if payment.status is None:
        payment.status = 1

    db.session.add(payment)
    db.session.commit()
    logger.info(f"Payment {payment.payment_id} created for user {payment.user_id}")

    return jsonify({'payment_id': payment.payment_id}), HTTPStatus.OK

@payments_bp.route('/<payment_id>', methods=['PUT'])
@token_required
@handle_errors
def update_payment(current_user, payment_id):
    payment = get_payment_or_404(payment_id)
    principal = principal_from_user(current_user)
    permissions = payment_permissions(principal, payment)
    require(permissions, Permission.UPDATE, 'you are not authorized to update this payment')

    data = get_json_body()
    require_valid(validate_payment_input(data, partial=True))

    if Permission.SET_OWNER in permissions and data.get('user_id'):
        payment.user_id = resolve_owner_id(principal, permissions, data['user_id'])

    for field in PAYMENT_FIELDS:
        if data.get(field) is not None:
            setattr(payment, field, data[field])

    db.session.commit()
    logger.info(f"Payment {payment_id} updated by {current_user.user_id}")
    return jsonify(payment.to_dict()), HTTPStatus.OK

@payments_bp.route('/<payment_id>', methods=['DELETE'])
@token_required
@handle_errors
def delete_payment(current_user, payment_id):
    require(
        owned_record_permissions(principal_from_user(current_user)), Permission.DELETE,
        'Unauthorized to access this resource'
    )
    payment = get_payment_or_404(payment_id)
    db.session.delete(payment)
    db.session.commit()
    logger.info(f"Payment {payment_id} deleted by admin {current_user.user_id}")
    return jsonify({'message': 'Payment deleted successfully', 'payment_id': payment_id}), HTTPStatus.OK
