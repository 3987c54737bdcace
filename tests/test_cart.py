from models import db
from models.cart import Cart, CartItem
from models.menu_item import MenuItem
from app.services import cart as cart_service
from app.version import API_PREFIX

CARTS = f"{API_PREFIX}/carts"


def add_item(client, headers, menu_item_id, quantity=1, **extra):
    body = {'menu_item_id': menu_item_id, 'quantity': quantity}
    body.update(extra)
    return client.post(f"{CARTS}/item", json=body, headers=headers)


def test_cart_requires_login(client):
    resp = client.get(f"{CARTS}/current")
    assert resp.status_code == 401
    assert resp.get_json()['kind'] == 'auth'


def test_empty_cart_sentinel(client, user_headers):
    resp = client.get(f"{CARTS}/current", headers=user_headers)
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data == {'cart_id': None, 'items': [], 'total_quantity': 0, 'total_price': 0.0}


def test_create_cart_is_idempotent(client, user_headers):
    first = client.post(CARTS, headers=user_headers)
    second = client.post(CARTS, headers=user_headers)
    assert first.status_code == 201
    assert first.get_json()['data']['cart_id'] == second.get_json()['data']['cart_id']
    assert Cart.query.count() == 1


def test_add_item_snapshots_base_plus_options(client, user_headers, menu):
    resp = add_item(client, user_headers, menu['curry_id'], 2, option_ids=[menu['extra_id']])
    assert resp.status_code == 201
    item = resp.get_json()['data']['item']
    assert item['unit_price'] == 550.0
    assert item['option_ids'] == [menu['extra_id']]
    assert item['menu_item']['name'] == 'Butter Chicken'


def test_add_item_uses_client_price_when_given(client, user_headers, menu):
    resp = add_item(client, user_headers, menu['paneer_id'], 1, unit_price=275.5)
    assert resp.status_code == 201
    assert resp.get_json()['data']['item']['unit_price'] == 275.5


def test_identical_adds_are_separate_lines(client, user_headers, menu):
    add_item(client, user_headers, menu['curry_id'], 1)
    add_item(client, user_headers, menu['curry_id'], 1)
    data = client.get(f"{CARTS}/current", headers=user_headers).get_json()['data']
    assert len(data['items']) == 2
    assert data['total_quantity'] == 2
    assert data['total_price'] == 1000.0


def test_add_unavailable_or_unknown_item_rejected(client, user_headers, menu):
    resp = add_item(client, user_headers, menu['naan_id'])
    assert resp.status_code == 404
    assert resp.get_json()['kind'] == 'not_found'
    resp = add_item(client, user_headers, 9999)
    assert resp.status_code == 404
    assert CartItem.query.count() == 0


def test_add_rejects_bad_quantity(client, user_headers, menu):
    resp = add_item(client, user_headers, menu['curry_id'], 0)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['kind'] == 'validation'
    assert body['errors']


def test_update_quantity_and_remove_on_zero(client, user_headers, menu):
    item_id = add_item(client, user_headers, menu['curry_id'], 1).get_json()['data']['item']['id']
    resp = client.put(f"{CARTS}/item/{item_id}", json={'quantity': 4}, headers=user_headers)
    assert resp.status_code == 200
    assert resp.get_json()['data']['quantity'] == 4

    resp = client.put(f"{CARTS}/item/{item_id}", json={'quantity': 0}, headers=user_headers)
    assert resp.status_code == 200
    assert db.session.get(CartItem, item_id) is None


def test_remove_item(client, user_headers, menu):
    item_id = add_item(client, user_headers, menu['curry_id']).get_json()['data']['item']['id']
    resp = client.delete(f"{CARTS}/item/{item_id}", headers=user_headers)
    assert resp.status_code == 200
    assert CartItem.query.count() == 0


def test_foreign_cart_item_is_forbidden(client, user_headers, other_headers, menu):
    item_id = add_item(client, user_headers, menu['curry_id']).get_json()['data']['item']['id']

    resp = client.put(f"{CARTS}/item/{item_id}", json={'quantity': 9}, headers=other_headers)
    assert resp.status_code == 403
    assert resp.get_json()['kind'] == 'forbidden'
    resp = client.delete(f"{CARTS}/item/{item_id}", headers=other_headers)
    assert resp.status_code == 403
    resp = client.delete(f"{CARTS}/item/424242", headers=other_headers)
    assert resp.status_code == 403

    assert db.session.get(CartItem, item_id).quantity == 1


def test_cart_line_survives_menu_item_deletion(client, user_headers, menu):
    add_item(client, user_headers, menu['paneer_id'], 1)
    db.session.delete(db.session.get(MenuItem, menu['paneer_id']))
    db.session.commit()
    data = client.get(f"{CARTS}/current", headers=user_headers).get_json()['data']
    assert len(data['items']) == 1
    assert data['items'][0]['menu_item'] is None
    assert data['total_price'] == 300.0


def test_totals_track_add_update_remove(client, user_headers, menu):
    a = add_item(client, user_headers, menu['curry_id'], 2).get_json()['data']['item']['id']
    add_item(client, user_headers, menu['paneer_id'], 1)
    data = client.get(f"{CARTS}/current", headers=user_headers).get_json()['data']
    assert (data['total_quantity'], data['total_price']) == (3, 1300.0)

    client.put(f"{CARTS}/item/{a}", json={'quantity': 3}, headers=user_headers)
    data = client.get(f"{CARTS}/current", headers=user_headers).get_json()['data']
    assert (data['total_quantity'], data['total_price']) == (4, 1800.0)

    client.delete(f"{CARTS}/item/{a}", headers=user_headers)
    data = client.get(f"{CARTS}/current", headers=user_headers).get_json()['data']
    assert (data['total_quantity'], data['total_price']) == (1, 300.0)


def test_add_item_reuses_cart_created_concurrently(client, user_headers, menu, monkeypatch):
    first = client.post(CARTS, headers=user_headers).get_json()['data']['cart_id']

    real_find_cart = cart_service.find_cart
    calls = []

    def stale_find_cart(user):
        # the first lookup runs before the other request's insert lands
        calls.append(user.id)
        if len(calls) == 1:
            return None
        return real_find_cart(user)

    monkeypatch.setattr(cart_service, "find_cart", stale_find_cart)
    resp = add_item(client, user_headers, menu['paneer_id'])
    assert resp.status_code == 201
    assert resp.get_json()['data']['cart_id'] == first
    assert len(calls) == 2
    assert Cart.query.count() == 1
    assert CartItem.query.count() == 1
