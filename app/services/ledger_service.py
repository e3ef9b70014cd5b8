import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from app.extensions.extension import db
from app.models.user import User
from app.models.withdrawal import Withdrawal, DEFAULT_WITHDRAWAL_STATUS
from app.services.authorization import (
    Permission, withdrawal_permissions, owner_list_scope, require
)
from app.services.reference_validator import resolve_owner_id
from app.utils.errors import (
    InsufficientFundsError, NotFoundError, PersistenceError, ValidationError
)
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

WITHDRAWAL_UPDATE_FIELDS = ('status', 'amount', 'method', 'account')
CENT = Decimal('0.01')


def to_amount(value):
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError('Invalid amount')
    if not amount.is_finite() or amount <= 0:
        raise ValidationError('Amount must be greater than 0')
    if amount != amount.quantize(CENT):
        raise ValidationError('Amount must not have more than 2 decimal places')
    return amount


def debit_balance(user_id, amount):
    """Atomically take `amount` from the user's balance.

    The guard and the decrement are one statement, so two concurrent
    debits can never both pass a stale balance check. Returns False when
    the balance no longer covers the amount. Does not commit.
    """
    stmt = (
        update(User)
        .where(User.user_id == user_id, User.balance >= amount)
        .values(balance=User.balance - amount, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    result = db.session.execute(stmt)
    return result.rowcount == 1


def create_withdrawal(principal, data):
    """Record a withdrawal and debit the owner's balance in one unit of work.

    Non-admins always withdraw from their own balance; admins name the
    owner by username. The insert and the debit commit together or not at
    all.
    """
    permissions = withdrawal_permissions(principal)
    require(permissions, Permission.CREATE)

    amount = to_amount(data.get('amount'))
    user = db.session.get(User, resolve_owner_id(principal, permissions, data.get('user_id')))
    if user is None:
        raise NotFoundError('user not found')

    if user.balance is None or Decimal(user.balance) < amount:
        logger.warning(
            f"Withdrawal of {amount} rejected for user {user.user_id}: balance {user.balance}"
        )
        raise InsufficientFundsError()

    user_id = user.user_id
    try:
        if not debit_balance(user_id, amount):
            db.session.rollback()
            logger.warning(
                f"Withdrawal of {amount} rejected for user {user_id}: balance changed concurrently"
            )
            raise InsufficientFundsError()

        now = datetime.utcnow()
        withdrawal = Withdrawal(
            user_id=user_id,
            amount=amount,
            status=data.get('status') or DEFAULT_WITHDRAWAL_STATUS,
            method=data.get('method'),
            account=data.get('account'),
            created_at=now,
            updated_at=now
        )
        db.session.add(withdrawal)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating withdrawal for user {user_id}: {str(e)}")
        raise PersistenceError('failed to create withdrawal')

    logger.info(f"Withdrawal {withdrawal.withdrawal_id} of {amount} created for user {user_id}")
    return withdrawal


def get_withdrawal_or_404(withdrawal_id):
    withdrawal = db.session.get(Withdrawal, withdrawal_id)
    if withdrawal is None:
        raise NotFoundError('withdrawal not found')
    return withdrawal


def list_withdrawals(principal, user_id=None):
    scope = owner_list_scope(principal, user_id=user_id)
    query = Withdrawal.query.filter_by(**scope)
    return paginate(query, Withdrawal.created_at, 'withdrawal_items')


def get_withdrawal(principal, withdrawal_id):
    withdrawal = get_withdrawal_or_404(withdrawal_id)
    require(
        withdrawal_permissions(principal, withdrawal), Permission.READ,
        'you are not authorized to view this withdrawal'
    )
    return withdrawal


def update_withdrawal(principal, withdrawal_id, data):
    """Admin correction of a withdrawal record. The balance is not touched."""
    require(withdrawal_permissions(principal), Permission.UPDATE, 'Unauthorized to access this resource')

    withdrawal = get_withdrawal_or_404(withdrawal_id)
    for field in WITHDRAWAL_UPDATE_FIELDS:
        if data.get(field) is None:
            continue
        value = to_amount(data[field]) if field == 'amount' else data[field]
        setattr(withdrawal, field, value)
    withdrawal.updated_at = datetime.utcnow()

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating withdrawal {withdrawal_id}: {str(e)}")
        raise PersistenceError('failed to update withdrawal')
    return withdrawal


def delete_withdrawal(principal, withdrawal_id):
    require(withdrawal_permissions(principal), Permission.DELETE, 'Unauthorized to access this resource')

    withdrawal = get_withdrawal_or_404(withdrawal_id)
    try:
        db.session.delete(withdrawal)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting withdrawal {withdrawal_id}: {str(e)}")
        raise PersistenceError('failed to delete withdrawal')
    logger.info(f"Withdrawal {withdrawal_id} deleted by {principal.identity}")
