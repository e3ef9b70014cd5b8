import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from app.extensions.extension import db
from app.models.transaction import Transaction, DEFAULT_TRANSACTION_STATUS
from app.services.authorization import (
    Permission, transaction_permissions, transaction_list_scope, require
)
from app.services.reference_validator import validate_references
from app.utils.errors import NotFoundError, PersistenceError, ValidationError
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

# Fields a sparse update may carry. Absent keys leave storage untouched.
MUTABLE_FIELDS = (
    'status', 'type', 'product_id', 'product_number', 'address_id', 'payment_id',
    'shipping', 'shipping_price', 'shipping_number', 'shipping_details',
    'shipping_image_id', 'delivered_details', 'fee', 'fee_type'
)
NON_NULLABLE_FIELDS = ('status', 'type')


def parse_timestamp(value):
    """ISO-8601 string (or datetime) to a naive UTC datetime."""
    if value is None or isinstance(value, datetime) and value.tzinfo is None:
        return value
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f'Invalid timestamp: {value}')
    if not isinstance(value, datetime):
        raise ValidationError(f'Invalid timestamp: {value}')
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def build_transaction_update(data, now=None):
    """Stage the column changes for a sparse transaction update.

    Every mutable field present in `data` is staged, including an explicit
    null. delivered_at is always staged: set when supplied, cleared when
    not. updated_at is always refreshed.
    """
    changes = {}
    for field in MUTABLE_FIELDS:
        if field not in data:
            continue
        if data[field] is None and field in NON_NULLABLE_FIELDS:
            raise ValidationError(f'{field} cannot be null')
        changes[field] = data[field]

    changes['delivered_at'] = parse_timestamp(data.get('delivered_at'))
    changes['updated_at'] = now or datetime.utcnow()
    return changes


def get_transaction_or_404(transaction_id):
    transaction = db.session.get(Transaction, transaction_id)
    if transaction is None:
        raise NotFoundError('transaction not found')
    return transaction


def list_transactions(principal, user_id=None, customer_id=None):
    scope = transaction_list_scope(principal, user_id=user_id, customer_id=customer_id)
    query = Transaction.query.filter_by(**scope)
    return paginate(query, Transaction.created_at, 'transaction_items')


def get_transaction(principal, transaction_id, as_user=False, as_customer=False):
    transaction = get_transaction_or_404(transaction_id)
    permissions = transaction_permissions(
        principal, transaction, as_user=as_user, as_customer=as_customer
    )
    require(permissions, Permission.READ, 'you are not authorized to view this transaction')
    return transaction


def create_transaction(principal, data):
    """Create a transaction between a seller and a buyer.

    The buyer is always resolved from the submitted customer username. Only
    admins choose the seller; everyone else becomes the seller themselves.
    """
    permissions = transaction_permissions(principal)
    require(permissions, Permission.CREATE)

    references = validate_references(
        {
            'user': data.get('user_id'),
            'customer': data.get('customer_id'),
            'product_id': data.get('product_id'),
            'address_id': data.get('address_id'),
            'payment_id': data.get('payment_id'),
        },
        required=('customer', 'product_id')
    )

    if Permission.SET_OWNER in permissions and 'user' in references:
        seller_id = references['user'].user_id
    else:
        seller_id = principal.identity

    now = datetime.utcnow()
    transaction = Transaction(
        user_id=seller_id,
        customer_id=references['customer'].user_id,
        created_at=now,
        updated_at=now
    )
    for field in MUTABLE_FIELDS:
        if data.get(field) is not None:
            setattr(transaction, field, data[field])
    if transaction.status is None:
        transaction.status = DEFAULT_TRANSACTION_STATUS
    transaction.delivered_at = parse_timestamp(data.get('delivered_at'))

    try:
        db.session.add(transaction)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating transaction: {str(e)}")
        raise PersistenceError('failed to create transaction')

    logger.info(
        f"Transaction {transaction.transaction_id} created: seller={seller_id} "
        f"customer={transaction.customer_id}"
    )
    return transaction


def update_transaction(principal, transaction_id, data):
    transaction = get_transaction_or_404(transaction_id)

    permissions = transaction_permissions(principal, transaction)
    require(permissions, Permission.UPDATE, 'you are not authorized to update this transaction')

    validate_references({
        name: data[name] for name in ('product_id', 'address_id', 'payment_id') if name in data
    })

    changes = build_transaction_update(data)
    for field, value in changes.items():
        setattr(transaction, field, value)

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating transaction {transaction_id}: {str(e)}")
        raise PersistenceError('failed to update transaction')

    logger.info(f"Transaction {transaction_id} updated by {principal.identity}: {sorted(changes)}")
    return transaction


def delete_transaction(principal, transaction_id):
    require(transaction_permissions(principal), Permission.DELETE, 'Unauthorized to access this resource')

    transaction = get_transaction_or_404(transaction_id)
    try:
        db.session.delete(transaction)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting transaction {transaction_id}: {str(e)}")
        raise PersistenceError('failed to delete transaction')

    logger.info(f"Transaction {transaction_id} deleted by {principal.identity}")
