from app.utils.validators import is_int_in, is_string, missing_fields

ADDRESS_STATUSES = (1, 2)
ADDRESS_TYPES = (1, 2)
REQUIRED_ADDRESS_FIELDS = (
    'name', 'type', 'full_name', 'phone', 'address_1',
    'subdistrict', 'district', 'province', 'country', 'postal_code'
)
# field -> (min length, max length)
ADDRESS_TEXT_LIMITS = {
    'name': (2, 100),
    'full_name': (2, 100),
    'phone': (1, 20),
    'address_1': (1, 1000),
    'address_2': (0, 1000),
    'subdistrict': (1, 100),
    'district': (1, 100),
    'province': (1, 100),
    'country': (1, 100),
    'postal_code': (1, 100),
}

def validate_address_input(data, partial=False):
    if not partial:
        missing = missing_fields(data, REQUIRED_ADDRESS_FIELDS)
        if missing:
            return False, f"Missing required fields: {', '.join(missing)}"

    for field, (min_length, max_length) in ADDRESS_TEXT_LIMITS.items():
        if data.get(field) is not None and not is_string(data[field], min_length, max_length):
            return False, f"{field} must be between {min_length} and {max_length} characters long"

    if data.get('status') is not None and not is_int_in(data['status'], ADDRESS_STATUSES):
        return False, "status must be 1 or 2"

    if 'type' in data and not is_int_in(data['type'], ADDRESS_TYPES):
        return False, "type must be 1 or 2"

    return True, None
