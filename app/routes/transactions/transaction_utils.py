from app.models.transaction import TRANSACTION_STATUSES, TRANSACTION_TYPES, FEE_TYPES
from app.utils.validators import is_int_in, is_number, is_string

TEXT_LIMITS = {
    'shipping': 100,
    'shipping_number': 100,
    'shipping_details': 1000,
    'delivered_details': 1000,
    'shipping_image_id': 24,
}

def validate_transaction_input(data, partial=False):
    """Shape checks only. References are resolved by the transaction service."""
    if not partial and data.get('type') is None:
        return False, "Missing required fields: type"

    if data.get('status') is not None and not is_int_in(data['status'], TRANSACTION_STATUSES):
        return False, "status must be between 1 and 6"

    if data.get('type') is not None and not is_int_in(data['type'], TRANSACTION_TYPES):
        return False, "type must be 1 or 2"

    if data.get('fee_type') is not None and not is_int_in(data['fee_type'], FEE_TYPES):
        return False, "fee_type must be 1, 2 or 3"

    for field in ('fee', 'shipping_price'):
        if data.get(field) is not None and (not is_number(data[field]) or data[field] < 0):
            return False, f"{field} must be a non-negative number"

    product_number = data.get('product_number')
    if product_number is not None and (
        not isinstance(product_number, int) or isinstance(product_number, bool) or product_number < 1
    ):
        return False, "product_number must be a positive integer"

    for field, limit in TEXT_LIMITS.items():
        if data.get(field) is not None and not is_string(data[field], 0, limit):
            return False, f"{field} must not exceed {limit} characters"

    if data.get('delivered_at') is not None and not isinstance(data['delivered_at'], str):
        return False, "delivered_at must be an ISO-8601 timestamp"

    return True, None
