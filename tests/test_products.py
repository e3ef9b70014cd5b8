from app.extensions.extension import db
from app.models.product import Product
from tests.conftest import make_product

NEW_PRODUCT = {'name': 'Film camera', 'type': 1, 'price': 250, 'description': 'Works fine'}


def test_create_product_owned_by_caller(client, users, auth_headers):
    response = client.post('/products', headers=auth_headers('seller'), json={**NEW_PRODUCT, 'user_id': 'alice01'})
    assert response.status_code == 200
    body = response.get_json()
    assert body['user_id'] == users['seller'].user_id
    assert body['status'] == 1


def test_admin_creates_product_for_named_user(client, users, auth_headers):
    response = client.post('/products', headers=auth_headers('admin'), json={**NEW_PRODUCT, 'user_id': 'alice01'})
    assert response.get_json()['user_id'] == users['alice'].user_id

    response = client.post('/products', headers=auth_headers('admin'), json={**NEW_PRODUCT, 'user_id': 'ghost'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'user_error'


def test_create_product_validates_input(client, users, auth_headers):
    response = client.post('/products', headers=auth_headers('seller'), json={'name': 'x', 'type': 1, 'price': 1})
    assert response.status_code == 400
    response = client.post('/products', headers=auth_headers('seller'), json={**NEW_PRODUCT, 'type': 3})
    assert response.status_code == 400


def test_list_shows_only_own_active_products(client, users, auth_headers):
    make_product(users['seller'])
    make_product(users['seller'], status=2)
    make_product(users['alice'])

    body = client.get('/products', headers=auth_headers('seller')).get_json()
    assert body['total_count'] == 1
    assert body['product_items'][0]['user_id'] == users['seller'].user_id

    assert client.get('/products', headers=auth_headers('admin')).get_json()['total_count'] == 3


def test_product_visible_to_buyer_in_transaction_context(client, users, auth_headers):
    product = make_product(users['seller'])
    url = f'/products/{product.product_id}'
    assert client.get(url, headers=auth_headers('alice')).status_code == 403
    assert client.get(f'{url}?transaction=true', headers=auth_headers('alice')).status_code == 200
    assert client.get(url, headers=auth_headers('seller')).status_code == 200


def test_owner_updates_but_cannot_change_status(client, users, auth_headers):
    product = make_product(users['seller'])
    response = client.put(f'/products/{product.product_id}', headers=auth_headers('seller'), json={
        'price': 99, 'status': 2
    })
    assert response.status_code == 200
    assert response.get_json()['price'] == 99
    assert response.get_json()['status'] == 1

    assert client.put(f'/products/{product.product_id}', headers=auth_headers('alice'), json={
        'price': 1
    }).status_code == 403


def test_remove_is_soft(client, users, auth_headers):
    product = make_product(users['seller'])
    response = client.post(f'/products/remove/{product.product_id}', headers=auth_headers('seller'))
    assert response.status_code == 200
    assert db.session.get(Product, product.product_id).status == 2

    # removed products are no longer visible to their owner
    assert client.get(f'/products/{product.product_id}', headers=auth_headers('seller')).status_code == 403
    assert client.get(f'/products/{product.product_id}', headers=auth_headers('admin')).status_code == 200


def test_delete_is_admin_only(client, users, auth_headers):
    product = make_product(users['seller'])
    url = f'/products/{product.product_id}'
    assert client.delete(url, headers=auth_headers('seller')).status_code == 403
    assert client.delete(url, headers=auth_headers('admin')).status_code == 200
    assert db.session.get(Product, product.product_id) is None
