from app.models.withdrawal import WITHDRAWAL_STATUSES
from app.utils.validators import is_int_in, is_number, is_string, missing_fields

def validate_withdrawal_input(data, partial=False):
    if not partial:
        missing = missing_fields(data, ('amount', 'method', 'account'))
        if missing:
            return False, f"Missing required fields: {', '.join(missing)}"

    if data.get('amount') is not None and (not is_number(data['amount']) or data['amount'] <= 0):
        return False, "amount must be greater than 0"

    if data.get('status') is not None and not is_int_in(data['status'], WITHDRAWAL_STATUSES):
        return False, "status must be 1, 2 or 3"

    for field in ('method', 'account'):
        if data.get(field) is not None and not is_string(data[field], 1, 100):
            return False, f"{field} must be between 1 and 100 characters long"

    return True, None
