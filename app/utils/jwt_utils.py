import os
import logging
from flask import current_app
from app.extensions.extension import jwt, db
from app.models.user import User

logger = logging.getLogger(__name__)

def read_key_file(file_path):
    try:
        with open(file_path, 'r') as key_file:
            return key_file.read()
    except Exception as e:
        logger.error(f"Failed to read key file {file_path}: {str(e)}")
        raise

def _uses_key_pair():
    return current_app.config['JWT_ALGORITHM'].startswith(('RS', 'ES', 'PS'))

@jwt.additional_claims_loader
def add_user_type_claim(identity):
    user = db.session.get(User, identity)
    if not user:
        return {}
    return {'user_type': user.user_type, 'username': user.username}

@jwt.encode_key_loader
def get_jwt_encode_key(identity):
    if not _uses_key_pair():
        return current_app.config['JWT_SECRET_KEY']
    private_key_path = os.environ.get('JWT_PRIVATE_KEY_PATH', 'app/ssl/private_key.pem')
    return read_key_file(private_key_path)

@jwt.decode_key_loader
def get_jwt_decode_key(jwt_header, jwt_data):
    if not _uses_key_pair():
        return current_app.config['JWT_SECRET_KEY']
    public_key_path = os.environ.get('JWT_PUBLIC_KEY_PATH', 'app/ssl/public_key.pem')
    return read_key_file(public_key_path)
