import pytest

from app.extensions.extension import db
from app.models.transaction import Transaction
from tests.conftest import make_address, make_product


@pytest.fixture
def product(users):
    return make_product(users['seller'])


@pytest.fixture
def deal(client, users, product, auth_headers):
    response = client.post('/transactions', headers=auth_headers('admin'), json={
        'user_id': 'seller01',
        'customer_id': 'alice01',
        'product_id': product.product_id,
        'type': 1,
        'fee': 3.5,
        'fee_type': 1
    })
    assert response.status_code == 200
    return db.session.get(Transaction, response.get_json()['transaction_id'])


def test_admin_create_defaults_status_and_resolves_customer(client, users, product, auth_headers):
    response = client.post('/transactions', headers=auth_headers('admin'), json={
        'customer_id': 'alice01', 'product_id': product.product_id, 'type': 2
    })
    assert response.status_code == 200
    transaction_id = response.get_json()['transaction_id']
    assert transaction_id

    transaction = db.session.get(Transaction, transaction_id)
    assert transaction.status == 1
    assert transaction.customer_id == users['alice'].user_id
    assert transaction.user_id == users['admin'].user_id


def test_admin_chooses_seller_by_username(deal, users):
    assert deal.user_id == users['seller'].user_id


def test_non_admin_always_becomes_seller(client, users, product, auth_headers):
    response = client.post('/transactions', headers=auth_headers('seller'), json={
        'user_id': 'bobby01', 'customer_id': 'alice01', 'product_id': product.product_id, 'type': 1
    })
    assert response.status_code == 200
    transaction = db.session.get(Transaction, response.get_json()['transaction_id'])
    assert transaction.user_id == users['seller'].user_id


def test_unknown_customer_is_rejected(client, users, product, auth_headers):
    response = client.post('/transactions', headers=auth_headers('seller'), json={
        'customer_id': 'ghost', 'product_id': product.product_id, 'type': 1
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'customer_error'
    assert Transaction.query.count() == 0


def test_missing_product_is_rejected(client, users, auth_headers):
    response = client.post('/transactions', headers=auth_headers('seller'), json={
        'customer_id': 'alice01', 'type': 1
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'product_error'


def test_unknown_address_is_rejected(client, users, product, auth_headers):
    response = client.post('/transactions', headers=auth_headers('seller'), json={
        'customer_id': 'alice01', 'product_id': product.product_id, 'type': 1,
        'address_id': 'f' * 24
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'address_error'


def test_invalid_status_is_rejected(client, users, product, auth_headers):
    response = client.post('/transactions', headers=auth_headers('seller'), json={
        'customer_id': 'alice01', 'product_id': product.product_id, 'type': 1, 'status': 7
    })
    assert response.status_code == 400


def test_update_sets_then_clears_delivered_at(client, deal, auth_headers):
    url = f'/transactions/{deal.transaction_id}'
    response = client.put(url, headers=auth_headers('seller'), json={
        'delivered_at': '2024-04-30T08:15:00Z', 'shipping_number': 'TH123'
    })
    assert response.status_code == 200
    assert response.get_json()['delivered_at'] == '2024-04-30T08:15:00'

    response = client.put(url, headers=auth_headers('seller'), json={'shipping': 'EMS'})
    assert response.status_code == 200
    body = response.get_json()
    assert body['delivered_at'] is None
    assert body['shipping_number'] == 'TH123'
    assert body['shipping'] == 'EMS'


def test_update_without_delivered_at_when_already_empty(client, deal, auth_headers):
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('seller'), json={})
    assert response.status_code == 200
    assert response.get_json()['delivered_at'] is None


def test_update_refreshes_updated_at(client, deal, auth_headers):
    before = deal.updated_at
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('seller'), json={
        'product_number': 2
    })
    assert response.status_code == 200
    assert response.get_json()['updated_at'] >= before.isoformat()


def test_buyer_can_rewrite_fee_and_status(client, deal, auth_headers):
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('alice'), json={
        'fee': 0, 'status': 6
    })
    assert response.status_code == 200
    body = response.get_json()
    assert body['fee'] == 0
    assert body['status'] == 6


def test_stranger_cannot_update(client, deal, auth_headers):
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('bob'), json={
        'status': 2
    })
    assert response.status_code == 403
    assert db.session.get(Transaction, deal.transaction_id).status == 1


def test_update_with_unknown_payment_is_rejected(client, deal, auth_headers):
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('seller'), json={
        'payment_id': 'f' * 24
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'payment_error'


def test_update_with_null_status_is_rejected(client, deal, auth_headers):
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('seller'), json={
        'status': None
    })
    assert response.status_code == 400


def test_update_attaches_address(client, deal, users, auth_headers):
    address = make_address(users['alice'])
    response = client.put(f'/transactions/{deal.transaction_id}', headers=auth_headers('alice'), json={
        'address_id': address.address_id
    })
    assert response.status_code == 200
    assert response.get_json()['address_id'] == address.address_id


def test_update_unknown_transaction_is_not_found(client, users, auth_headers):
    response = client.put(f"/transactions/{'f' * 24}", headers=auth_headers('admin'), json={})
    assert response.status_code == 404


def test_list_scoped_to_current_seller_and_buyer(client, deal, auth_headers):
    response = client.get('/transactions?user_id=current', headers=auth_headers('seller'))
    assert response.status_code == 200
    body = response.get_json()
    assert body['total_count'] == 1
    assert body['transaction_items'][0]['transaction_id'] == deal.transaction_id

    response = client.get('/transactions?customer_id=current', headers=auth_headers('alice'))
    assert response.get_json()['total_count'] == 1

    response = client.get('/transactions?user_id=current', headers=auth_headers('alice'))
    assert response.get_json()['total_count'] == 0


def test_unfiltered_list_is_admin_only(client, deal, auth_headers):
    assert client.get('/transactions', headers=auth_headers('seller')).status_code == 403

    response = client.get('/transactions', headers=auth_headers('admin'))
    assert response.status_code == 200
    assert response.get_json()['total_count'] == 1


def test_list_pagination(client, users, product, auth_headers):
    for _ in range(3):
        client.post('/transactions', headers=auth_headers('seller'), json={
            'customer_id': 'alice01', 'product_id': product.product_id, 'type': 1
        })
    response = client.get('/transactions?user_id=current&recordPerPage=2&page=2', headers=auth_headers('seller'))
    body = response.get_json()
    assert body['total_count'] == 3
    assert len(body['transaction_items']) == 1


def test_list_start_index_overrides_page(client, users, product, auth_headers):
    for _ in range(5):
        client.post('/transactions', headers=auth_headers('seller'), json={
            'customer_id': 'alice01', 'product_id': product.product_id, 'type': 1
        })
    response = client.get(
        '/transactions?user_id=current&recordPerPage=2&page=1&startIndex=4', headers=auth_headers('seller')
    )
    body = response.get_json()
    assert body['total_count'] == 5
    assert len(body['transaction_items']) == 1


def test_nan_fee_is_rejected(client, users, product, auth_headers):
    payload = '{"customer_id": "alice01", "product_id": "%s", "type": 1, "fee": NaN}' % product.product_id
    response = client.post(
        '/transactions', headers=auth_headers('seller'), data=payload, content_type='application/json'
    )
    assert response.status_code == 400
    assert Transaction.query.count() == 0


def test_read_requires_matching_side(client, deal, auth_headers):
    url = f'/transactions/{deal.transaction_id}'
    assert client.get(f'{url}?user_id=current', headers=auth_headers('seller')).status_code == 200
    assert client.get(f'{url}?customer_id=current', headers=auth_headers('alice')).status_code == 200
    assert client.get(url, headers=auth_headers('seller')).status_code == 403
    assert client.get(f'{url}?user_id=current', headers=auth_headers('alice')).status_code == 403
    assert client.get(url, headers=auth_headers('admin')).status_code == 200


def test_delete_is_admin_only(client, deal, auth_headers):
    url = f'/transactions/{deal.transaction_id}'
    assert client.delete(url, headers=auth_headers('seller')).status_code == 403
    assert client.delete(url, headers=auth_headers('admin')).status_code == 200
    assert Transaction.query.count() == 0
    assert client.delete(url, headers=auth_headers('admin')).status_code == 404


def test_requests_without_token_are_rejected(client, users):
    assert client.get('/transactions?user_id=current').status_code == 401
