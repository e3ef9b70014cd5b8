"""Role and ownership decisions for every resource.

All role branching lives here so that handlers only ask for a permission
set and check membership. Nothing in this module touches the database.
"""
from collections import namedtuple
import enum
import logging

from app.models.user import UserType
from app.utils.errors import AuthorizationError

logger = logging.getLogger(__name__)

CURRENT = 'current'
ACTIVE_STATUS = 1

Principal = namedtuple('Principal', ['identity', 'role'])


class Permission(enum.Enum):
    LIST_ALL = 'list_all'
    READ = 'read'
    CREATE = 'create'
    SET_OWNER = 'set_owner'
    UPDATE = 'update'
    REMOVE = 'remove'
    DELETE = 'delete'


def principal_from_user(user):
    return Principal(identity=user.user_id, role=user.user_type)


def is_admin(principal):
    return principal.role == UserType.ADMIN.value


def _admin_permissions():
    return {
        Permission.LIST_ALL, Permission.READ, Permission.CREATE, Permission.SET_OWNER,
        Permission.UPDATE, Permission.REMOVE, Permission.DELETE
    }


def transaction_permissions(principal, transaction=None, as_user=False, as_customer=False):
    """Permissions of `principal` over a transaction.

    Reading needs the caller to state which side they are asking from
    (`as_user` for the seller, `as_customer` for the buyer). Updating is
    open to either party with no restriction on which fields they touch.
    """
    if is_admin(principal):
        return frozenset(_admin_permissions())

    permissions = {Permission.CREATE}
    if transaction is not None:
        is_seller = transaction.user_id == principal.identity
        is_buyer = transaction.customer_id == principal.identity
        if (as_user and is_seller) or (as_customer and is_buyer):
            permissions.add(Permission.READ)
        if is_seller or is_buyer:
            permissions.add(Permission.UPDATE)
    return frozenset(permissions)


def transaction_list_scope(principal, user_id=None, customer_id=None):
    """Column filters for a transaction listing.

    'current' resolves to the caller. Any other value, or no filter at all,
    is reserved to admins.
    """
    if user_id == CURRENT:
        return {'user_id': principal.identity}
    if user_id:
        require_admin(principal)
        return {'user_id': user_id}
    if customer_id == CURRENT:
        return {'customer_id': principal.identity}
    if customer_id:
        require_admin(principal)
        return {'customer_id': customer_id}
    require_admin(principal)
    return {}


def withdrawal_permissions(principal, withdrawal=None):
    """Owners may read their withdrawals; everything else past creation is admin only."""
    if is_admin(principal):
        return frozenset(_admin_permissions())

    permissions = {Permission.CREATE}
    if withdrawal is not None and withdrawal.user_id == principal.identity:
        permissions.add(Permission.READ)
    return frozenset(permissions)


def owned_record_permissions(principal, record=None, transaction_context=False):
    """Products, addresses and payments.

    Non-admin owners keep access only while the record is active. The
    `transaction_context` flag lets any user read an active record, which
    is how a buyer sees the product of a transaction.
    """
    if is_admin(principal):
        return frozenset(_admin_permissions())

    permissions = {Permission.CREATE}
    if record is not None:
        active = record.status is None or record.status == ACTIVE_STATUS
        is_owner = record.user_id == principal.identity
        if active and (is_owner or transaction_context):
            permissions.add(Permission.READ)
        if active and is_owner:
            permissions.update({Permission.UPDATE, Permission.REMOVE})
    return frozenset(permissions)


def payment_permissions(principal, payment=None):
    """Payments are readable by their owner whatever their status."""
    permissions = set(owned_record_permissions(principal, payment))
    if payment is not None and payment.user_id == principal.identity:
        permissions.add(Permission.READ)
    return frozenset(permissions)


def user_permissions(principal, user=None):
    if is_admin(principal):
        return frozenset(_admin_permissions())

    permissions = set()
    if user is not None and user.user_id == principal.identity:
        permissions.add(Permission.READ)
        if user.status is None or user.status == ACTIVE_STATUS:
            permissions.add(Permission.UPDATE)
    return frozenset(permissions)


def owner_list_scope(principal, user_id=None, active_only=False):
    """Admins list everything or filter by owner; users list only their own records."""
    if is_admin(principal):
        return {'user_id': user_id} if user_id else {}
    scope = {'user_id': principal.identity}
    if active_only:
        scope['status'] = ACTIVE_STATUS
    return scope


def require(permissions, permission, message=None):
    if permission not in permissions:
        raise AuthorizationError(message or f'you are not authorized to {permission.value} this record')


def require_admin(principal):
    if not is_admin(principal):
        logger.warning(f"Admin-only operation denied for user {principal.identity}")
        raise AuthorizationError('Unauthorized to access this resource')
