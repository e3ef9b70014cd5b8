# app/routes/user/user_utils.py
import logging
from flask import jsonify, request
from functools import wraps
from http import HTTPStatus
from app.extensions.extension import db
from app.models.user import UserType
from app.utils.errors import FlexcrowError, ValidationError
from app.utils.validators import is_email, is_int_in, is_number, is_string

logger = logging.getLogger(__name__)

USER_STATUSES = (1, 2)
ADMIN_ONLY_USER_FIELDS = ('user_type', 'status', 'balance')

def validate_user_update(data):
    if 'username' in data and not is_string(data['username'], 5, 50):
        return False, "Username must be between 5 and 50 characters long"

    if 'email' in data and not is_email(data['email']):
        return False, "Email is not valid"

    if 'password' in data and data['password'] and not is_string(data['password'], 6):
        return False, "Password must be at least 6 characters long"

    for field in ('first_name', 'last_name'):
        if field in data and not is_string(data[field], 2, 100):
            return False, f"{field} must be between 2 and 100 characters long"

    if 'phone' in data and not is_string(data['phone'], 1, 20):
        return False, "Phone is required"

    if 'user_type' in data and data['user_type'] not in [t.value for t in UserType]:
        return False, "user_type must be ADMIN or USER"

    if 'status' in data and not is_int_in(data['status'], USER_STATUSES):
        return False, "status must be 1 or 2"

    if 'balance' in data and (not is_number(data['balance']) or data['balance'] < 0):
        return False, "balance must be a non-negative number"

    return True, None

def get_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('No input data provided')
    return data

def require_valid(result):
    valid, message = result
    if not valid:
        raise ValidationError(message)

def handle_errors(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except FlexcrowError as e:
            db.session.rollback()
            return jsonify({"error": e.message}), e.status_code
        except Exception as e:
            db.session.rollback()
            logger.exception(f"Unhandled error in {f.__name__}: {str(e)}")
            return jsonify({"error": str(e)}), HTTPStatus.INTERNAL_SERVER_ERROR
    return decorated_function
