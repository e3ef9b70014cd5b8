# app/routes/auth/auth_utils.py
from app.models.user import UserType
from app.utils.validators import is_email, is_string, missing_fields

REGISTRATION_FIELDS = ('username', 'email', 'password', 'first_name', 'last_name', 'phone')

def validate_registration_input(data, allow_user_type=False):
    missing = missing_fields(data, REGISTRATION_FIELDS)
    if missing:
        return False, f"Missing required fields: {', '.join(missing)}"

    if not is_string(data.get('username'), 5, 50):
        return False, "Username must be between 5 and 50 characters long"

    if not is_email(data.get('email')):
        return False, "Email is not valid"

    if not is_string(data.get('password'), 6):
        return False, "Password must be at least 6 characters long"

    for field in ('first_name', 'last_name'):
        if not is_string(data.get(field), 2, 100):
            return False, f"{field} must be between 2 and 100 characters long"

    if not is_string(data.get('phone'), 1, 20):
        return False, "Phone is not valid"

    user_type = data.get('user_type')
    if user_type is not None:
        if not allow_user_type and user_type != UserType.USER.value:
            return False, "Only USER accounts can sign up"
        if user_type not in [t.value for t in UserType]:
            return False, "user_type must be ADMIN or USER"

    return True, None

def validate_login_input(data):
    if not all(data.get(key) for key in ('email', 'password')):
        return False, "Missing required fields"
    return True, None

def validate_password_change(data):
    if not data.get('current_password') or not data.get('new_password'):
        return False, "Missing required fields"
    if not is_string(data.get('new_password'), 6):
        return False, "Password must be at least 6 characters long"
    return True, None
