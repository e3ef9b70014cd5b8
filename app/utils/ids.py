import secrets


def new_object_id():
    """Opaque 24-character hex id used as the natural key of every record"""
    return secrets.token_hex(12)
