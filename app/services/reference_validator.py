import logging

from app.models.address import Address
from app.models.payment import Payment
from app.models.product import Product
from app.models.user import User
from app.services.authorization import Permission
from app.utils.errors import DanglingReferenceError

logger = logging.getLogger(__name__)

# reference name -> (model, lookup column, identity column, error code)
REFERENCE_LOOKUPS = {
    'user': (User, 'username', 'user_id', 'user_error'),
    'customer': (User, 'username', 'user_id', 'customer_error'),
    'product_id': (Product, 'product_id', 'product_id', 'product_error'),
    'address_id': (Address, 'address_id', 'address_id', 'address_error'),
    'payment_id': (Payment, 'payment_id', 'payment_id', 'payment_error'),
}

def _is_empty(value):
    return value is None or value == ''

def validate_references(references, required=()):
    """Resolve each non-empty reference by its natural key.

    `references` maps a name from REFERENCE_LOOKUPS to the submitted value.
    Empty values are skipped unless the name is in `required`. Returns the
    resolved records keyed by reference name; raises DanglingReferenceError
    with the field-specific code on the first reference that does not
    resolve to a complete record.
    """
    resolved = {}
    for name, (model, lookup_column, identity_column, error_code) in REFERENCE_LOOKUPS.items():
        if name not in references and name not in required:
            continue

        value = references.get(name)
        if _is_empty(value):
            if name in required:
                raise DanglingReferenceError(error_code)
            continue

        if not isinstance(value, str):
            raise DanglingReferenceError(error_code)

        record = model.query.filter(getattr(model, lookup_column) == value).first()
        if record is None or not getattr(record, identity_column):
            logger.info(f"Reference {name}={value!r} did not resolve")
            raise DanglingReferenceError(error_code)

        resolved[name] = record

    return resolved

def resolve_owner_id(principal, permissions, username):
    """Admins assign ownership by username; everyone else owns what they create."""
    if Permission.SET_OWNER in permissions and username:
        return validate_references({'user': username}, required=('user',))['user'].user_id
    return principal.identity
