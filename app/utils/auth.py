from functools import wraps
from flask import jsonify
from http import HTTPStatus
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from app.extensions.extension import db
from app.models.user import User

class AuthenticationFailed(Exception):
    pass

def load_current_user():
    """Verify the bearer token and return the user it names."""
    try:
        verify_jwt_in_request()
    except (JWTExtendedException, PyJWTError) as e:
        raise AuthenticationFailed(f'Invalid token: {str(e)}')

    current_user = db.session.get(User, get_jwt_identity())
    if not current_user:
        raise AuthenticationFailed('Invalid token: User not found')
    return current_user

def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            current_user = load_current_user()
        except AuthenticationFailed as e:
            return jsonify({'message': str(e)}), HTTPStatus.UNAUTHORIZED

        return f(current_user, *args, **kwargs)

    return decorated
