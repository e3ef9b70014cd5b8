from collections import namedtuple

import pytest

from app.services.authorization import (
    Permission, Principal, owned_record_permissions, owner_list_scope, payment_permissions,
    require, transaction_list_scope, transaction_permissions, user_permissions,
    withdrawal_permissions
)
from app.utils.errors import AuthorizationError

Record = namedtuple('Record', ['user_id', 'status'])
Deal = namedtuple('Deal', ['user_id', 'customer_id'])

ADMIN = Principal(identity='a' * 24, role='ADMIN')
SELLER = Principal(identity='s' * 24, role='USER')
BUYER = Principal(identity='b' * 24, role='USER')
STRANGER = Principal(identity='x' * 24, role='USER')

DEAL = Deal(user_id=SELLER.identity, customer_id=BUYER.identity)


def test_admin_holds_every_transaction_permission():
    assert transaction_permissions(ADMIN, DEAL) == frozenset(Permission)


def test_non_admin_may_create_but_not_choose_seller():
    permissions = transaction_permissions(STRANGER)
    assert Permission.CREATE in permissions
    assert Permission.SET_OWNER not in permissions


def test_seller_reads_only_from_seller_side():
    assert Permission.READ in transaction_permissions(SELLER, DEAL, as_user=True)
    assert Permission.READ not in transaction_permissions(SELLER, DEAL, as_customer=True)
    assert Permission.READ not in transaction_permissions(SELLER, DEAL)


def test_buyer_reads_only_from_buyer_side():
    assert Permission.READ in transaction_permissions(BUYER, DEAL, as_customer=True)
    assert Permission.READ not in transaction_permissions(BUYER, DEAL, as_user=True)


@pytest.mark.parametrize('principal', [SELLER, BUYER])
def test_both_parties_may_update(principal):
    assert Permission.UPDATE in transaction_permissions(principal, DEAL)


def test_stranger_cannot_read_update_or_delete():
    permissions = transaction_permissions(STRANGER, DEAL, as_user=True, as_customer=True)
    assert not permissions & {Permission.READ, Permission.UPDATE, Permission.DELETE}


def test_list_scope_resolves_current_to_caller():
    assert transaction_list_scope(SELLER, user_id='current') == {'user_id': SELLER.identity}
    assert transaction_list_scope(BUYER, customer_id='current') == {'customer_id': BUYER.identity}


def test_list_scope_without_filter_is_admin_only():
    assert transaction_list_scope(ADMIN) == {}
    with pytest.raises(AuthorizationError):
        transaction_list_scope(SELLER)


def test_list_scope_literal_identity_is_admin_only():
    assert transaction_list_scope(ADMIN, customer_id=BUYER.identity) == {'customer_id': BUYER.identity}
    with pytest.raises(AuthorizationError):
        transaction_list_scope(SELLER, user_id=SELLER.identity)


def test_withdrawal_owner_reads_but_cannot_update():
    withdrawal = Record(user_id=BUYER.identity, status=1)
    permissions = withdrawal_permissions(BUYER, withdrawal)
    assert Permission.READ in permissions
    assert Permission.UPDATE not in permissions
    assert Permission.READ not in withdrawal_permissions(STRANGER, withdrawal)


def test_removed_record_is_hidden_from_owner():
    removed = Record(user_id=SELLER.identity, status=2)
    assert Permission.READ not in owned_record_permissions(SELLER, removed)
    assert Permission.READ in owned_record_permissions(ADMIN, removed)


def test_transaction_context_opens_active_record_to_anyone():
    product = Record(user_id=SELLER.identity, status=1)
    assert Permission.READ not in owned_record_permissions(BUYER, product)
    permissions = owned_record_permissions(BUYER, product, transaction_context=True)
    assert Permission.READ in permissions
    assert Permission.UPDATE not in permissions


def test_payment_owner_reads_whatever_the_status():
    settled = Record(user_id=BUYER.identity, status=3)
    permissions = payment_permissions(BUYER, settled)
    assert Permission.READ in permissions
    assert Permission.UPDATE not in permissions


def test_user_permissions_follow_identity_and_status():
    me = Record(user_id=BUYER.identity, status=1)
    disabled = Record(user_id=BUYER.identity, status=2)
    assert {Permission.READ, Permission.UPDATE} <= user_permissions(BUYER, me)
    assert Permission.UPDATE not in user_permissions(BUYER, disabled)
    assert not user_permissions(STRANGER, me)


def test_owner_list_scope():
    assert owner_list_scope(ADMIN) == {}
    assert owner_list_scope(ADMIN, user_id=SELLER.identity) == {'user_id': SELLER.identity}
    assert owner_list_scope(BUYER, user_id=SELLER.identity, active_only=True) == {
        'user_id': BUYER.identity, 'status': 1
    }


def test_require_raises_with_message():
    with pytest.raises(AuthorizationError) as excinfo:
        require(frozenset(), Permission.DELETE, 'nope')
    assert excinfo.value.message == 'nope'
    assert excinfo.value.status_code == 403
