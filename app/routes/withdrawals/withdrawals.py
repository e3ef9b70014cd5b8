from flask import Blueprint, jsonify, request
from http import HTTPStatus
import logging
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.routes.withdrawals.withdrawal_utils import validate_withdrawal_input
from app.services import ledger_service
from app.services.authorization import principal_from_user
from app.utils.auth import token_required

logger = logging.getLogger(__name__)

withdrawals_bp = Blueprint('withdrawals', __name__, url_prefix='/withdrawals')

@withdrawals_bp.route('', methods=['GET'])
@token_required
@handle_errors
def get_withdrawals(current_user):
    result = ledger_service.list_withdrawals(
        principal_from_user(current_user), user_id=request.args.get('user_id')
    )
    return jsonify(result), HTTPStatus.OK

@withdrawals_bp.route('/<withdrawal_id>', methods=['GET'])
@token_required
@handle_errors
def get_withdrawal(current_user, withdrawal_id):
    withdrawal = ledger_service.get_withdrawal(principal_from_user(current_user), withdrawal_id)
    return jsonify(withdrawal.to_dict()), HTTPStatus.OK

@withdrawals_bp.route('', methods=['POST'])
@token_required
@handle_errors
def create_withdrawal(current_user):
    data = get_json_body()
    require_valid(validate_withdrawal_input(data))

    withdrawal = ledger_service.create_withdrawal(principal_from_user(current_user), data)
    return jsonify({'withdrawal_id': withdrawal.withdrawal_id}), HTTPStatus.OK

@withdrawals_bp.route('/<withdrawal_id>', methods=['PUT'])
@token_required
@handle_errors
def update_withdrawal(current_user, withdrawal_id):
    data = get_json_body()
    require_valid(validate_withdrawal_input(data, partial=True))

    withdrawal = ledger_service.update_withdrawal(
        principal_from_user(current_user), withdrawal_id, data
    )
    return jsonify(withdrawal.to_dict()), HTTPStatus.OK

@withdrawals_bp.route('/<withdrawal_id>', methods=['DELETE'])
@token_required
@handle_errors
def delete_withdrawal(current_user, withdrawal_id):
    ledger_service.delete_withdrawal(principal_from_user(current_user), withdrawal_id)
    return jsonify({
        'message': 'Withdrawal deleted successfully',
        'withdrawal_id': withdrawal_id
    }), HTTPStatus.OK
