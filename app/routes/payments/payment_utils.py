from app.utils.validators import is_int_in, is_number, is_string, missing_fields

PAYMENT_STATUSES = (1, 2, 3)
PAYMENT_FIELDS = ('status', 'amount', 'method')

def validate_payment_input(data, partial=False):
    if not partial:
        missing = missing_fields(data, ('amount', 'method'))
        if missing:
            return False, f"Missing required fields: {', '.join(missing)}"

    if data.get('status') is not None and not is_int_in(data['status'], PAYMENT_STATUSES):
        return False, "status must be 1, 2 or 3"

    if data.get('amount') is not None and (not is_number(data['amount']) or data['amount'] <= 0):
        return False, "amount must be greater than 0"

    if data.get('method') is not None and not is_string(data['method'], 1, 100):
        return False, "Method must not exceed 100 characters"

    return True, None

def validate_checkout_input(data):
    amount = data.get('amount')
    if not is_number(amount) or amount <= 0:
        return False, "amount must be greater than 0"
    if data.get('currency') is not None and not is_string(data['currency'], 3, 3):
        return False, "currency must be a 3-letter code"
    if data.get('method') is not None and not is_string(data['method'], 0, 100):
        return False, "Method must not exceed 100 characters"
    return True, None
