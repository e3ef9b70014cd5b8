from flask import Blueprint, jsonify, request
from http import HTTPStatus
import logging
from app.routes.transactions.transaction_utils import validate_transaction_input
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.services import transaction_service
from app.services.authorization import CURRENT, principal_from_user
from app.utils.auth import token_required

logger = logging.getLogger(__name__)

transactions_bp = Blueprint('transactions', __name__, url_prefix='/transactions')

@transactions_bp.route('', methods=['GET'])
@token_required
@handle_errors
def get_transactions(current_user):
    result = transaction_service.list_transactions(
        principal_from_user(current_user),
        user_id=request.args.get('user_id'),
        customer_id=request.args.get('customer_id')
    )
    return jsonify(result), HTTPStatus.OK

@transactions_bp.route('/<transaction_id>', methods=['GET'])
@token_required
@handle_errors
def get_transaction(current_user, transaction_id):
    transaction = transaction_service.get_transaction(
        principal_from_user(current_user), transaction_id,
        as_user=request.args.get('user_id') == CURRENT,
        as_customer=request.args.get('customer_id') == CURRENT
    )
    return jsonify(transaction.to_dict()), HTTPStatus.OK

@transactions_bp.route('', methods=['POST'])
@token_required
@handle_errors
def create_transaction(current_user):
    data = get_json_body()
    require_valid(validate_transaction_input(data))

    transaction = transaction_service.create_transaction(principal_from_user(current_user), data)
    return jsonify({'transaction_id': transaction.transaction_id}), HTTPStatus.OK

@transactions_bp.route('/<transaction_id>', methods=['PUT'])
@token_required
@handle_errors
def update_transaction(current_user, transaction_id):
    data = get_json_body()
    require_valid(validate_transaction_input(data, partial=True))

    transaction = transaction_service.update_transaction(
        principal_from_user(current_user), transaction_id, data
    )
    return jsonify(transaction.to_dict()), HTTPStatus.OK

@transactions_bp.route('/<transaction_id>', methods=['DELETE'])
@token_required
@handle_errors
def delete_transaction(current_user, transaction_id):
    transaction_service.delete_transaction(principal_from_user(current_user), transaction_id)
    return jsonify({
        'message': 'Transaction deleted successfully',
        'transaction_id': transaction_id
    }), HTTPStatus.OK
