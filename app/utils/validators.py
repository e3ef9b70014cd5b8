import math
import re

EMAIL_PATTERN = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')

def is_int_in(value, allowed):
    # bool is an int subclass; reject it explicitly
    return isinstance(value, int) and not isinstance(value, bool) and value in allowed

def is_number(value):
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value)

def is_string(value, min_length=0, max_length=None):
    if not isinstance(value, str) or len(value) < min_length:
        return False
    return max_length is None or len(value) <= max_length

def is_email(value):
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None

def missing_fields(data, fields):
    return [field for field in fields if data.get(field) in (None, '')]
