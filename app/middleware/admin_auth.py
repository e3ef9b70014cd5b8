from functools import wraps
from flask import jsonify
from http import HTTPStatus
import logging
from app.utils.auth import AuthenticationFailed, load_current_user

logger = logging.getLogger(__name__)

def admin_required(f):
    """
    Like token_required, but answers 403 unless the token holder is an ADMIN.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            current_user = load_current_user()
        except AuthenticationFailed as e:
            return jsonify({'message': str(e)}), HTTPStatus.UNAUTHORIZED

        if not current_user.is_admin:
            logger.warning(f"User {current_user.user_id} denied access to {f.__name__}")
            return jsonify({'error': 'Unauthorized to access this resource'}), HTTPStatus.FORBIDDEN

        return f(current_user, *args, **kwargs)

    return decorated
