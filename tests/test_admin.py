from models import db
from models.user import User
from app.version import API_PREFIX

ADMIN = f"{API_PREFIX}/admin"


def place_order(client, headers, menu, quantity=1):
    client.post(f"{API_PREFIX}/carts/item", json={'menu_item_id': menu['curry_id'], 'quantity': quantity}, headers=headers)
    resp = client.post(f"{API_PREFIX}/orders", json={'address': '1 Main St'}, headers=headers)
    return resp.get_json()['data']['id']


def test_admin_routes_require_admin_role(client, user_headers):
    for path in ('/dashboard/stats', '/orders', '/users', '/categories', '/menu-items'):
        resp = client.get(f"{ADMIN}{path}", headers=user_headers)
        assert resp.status_code == 403, path
        assert resp.get_json()['kind'] == 'forbidden'


def test_admin_routes_require_token(client):
    resp = client.get(f"{ADMIN}/dashboard/stats")
    assert resp.status_code == 401


def test_dashboard_stats(client, user_headers, admin_headers, menu):
    place_order(client, user_headers, menu, quantity=2)
    place_order(client, user_headers, menu, quantity=1)

    resp = client.get(f"{ADMIN}/dashboard/stats", headers=admin_headers)
    assert resp.status_code == 200
    data = resp.get_json()['data']
    stats = data['stats']
    assert stats['total_orders'] == 2
    assert stats['today_orders'] == 2
    assert stats['pending_orders'] == 2
    assert stats['total_users'] == 2
    assert stats['total_menu_items'] == 3
    # 1000 + 100 + 200 and 500 + 50 + 200
    assert stats['total_revenue'] == 2050.0
    assert data['popular_items'][0] == {
        'menu_item_id': menu['curry_id'],
        'name': 'Butter Chicken',
        'quantity': 3,
    }


def test_order_listing_filter_and_pagination(client, user_headers, admin_headers, menu):
    ids = [place_order(client, user_headers, menu) for _ in range(3)]
    client.put(f"{ADMIN}/orders/{ids[0]}/status", json={'status': 'preparing'}, headers=admin_headers)

    resp = client.get(f"{ADMIN}/orders?limit=2&page=1", headers=admin_headers)
    data = resp.get_json()['data']
    assert [o['id'] for o in data['orders']] == [ids[2], ids[1]]
    assert data['pagination'] == {'page': 1, 'limit': 2, 'total': 3, 'pages': 2}
    assert data['orders'][0]['user']['email'] == 'diner@example.com'

    resp = client.get(f"{ADMIN}/orders?status=preparing", headers=admin_headers)
    assert [o['id'] for o in resp.get_json()['data']['orders']] == [ids[0]]

    resp = client.get(f"{ADMIN}/orders?status=all", headers=admin_headers)
    assert resp.get_json()['data']['pagination']['total'] == 3

    resp = client.get(f"{ADMIN}/orders?status=bogus", headers=admin_headers)
    assert resp.status_code == 400


def test_order_listing_clamps_limit(client, admin_headers):
    resp = client.get(f"{ADMIN}/orders?limit=5000&page=0", headers=admin_headers)
    assert resp.get_json()['data']['pagination']['limit'] == 100
    assert resp.get_json()['data']['pagination']['page'] == 1


def test_users_listing_with_counts(client, user_headers, admin_headers, menu):
    client.post(f"{API_PREFIX}/addresses", json={'street': 'a', 'city': 'b', 'zip_code': 'c'}, headers=user_headers)
    place_order(client, user_headers, menu)

    resp = client.get(f"{ADMIN}/users", headers=admin_headers)
    assert resp.status_code == 200
    by_email = {u['email']: u for u in resp.get_json()['data']}
    assert by_email['diner@example.com']['order_count'] == 1
    assert by_email['diner@example.com']['address_count'] == 1
    assert by_email['boss@example.com']['order_count'] == 0


def test_role_update_applies_without_new_login(client, user_headers, admin_headers):
    user_id = User.query.filter_by(email='diner@example.com').one().id
    assert client.get(f"{ADMIN}/users", headers=user_headers).status_code == 403

    resp = client.put(f"{ADMIN}/users/{user_id}/role", json={'role': 'admin'}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()['data']['role'] == 'admin'

    # same token, role now read from the database
    assert client.get(f"{ADMIN}/users", headers=user_headers).status_code == 200


def test_role_update_rejects_unknown_role(client, admin_headers):
    user_id = User.query.filter_by(email='boss@example.com').one().id
    resp = client.put(f"{ADMIN}/users/{user_id}/role", json={'role': 'superuser'}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()['kind'] == 'validation'
    assert db.session.get(User, user_id).role == 'admin'


def test_role_update_unknown_user(client, admin_headers):
    resp = client.put(f"{ADMIN}/users/9999/role", json={'role': 'user'}, headers=admin_headers)
    assert resp.status_code == 404


def test_admin_catalog_views(client, admin_headers, menu):
    resp = client.get(f"{ADMIN}/categories", headers=admin_headers)
    assert resp.get_json()['data'][0]['menu_item_count'] == 3

    resp = client.get(f"{ADMIN}/menu-items", headers=admin_headers)
    items = resp.get_json()['data']
    assert len(items) == 3
    assert items[0]['id'] == menu['naan_id']
    assert 'options' in items[0] and 'category' in items[0]


def test_admin_catalog_writes_under_admin_prefix(client, admin_headers, menu):
    resp = client.post(
        f"{ADMIN}/menu-items",
        json={'name': 'Mango Lassi', 'category_id': menu['category_id'], 'base_price': 120},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    item_id = resp.get_json()['data']['id']

    resp = client.post(
        f"{ADMIN}/item-options",
        json={'menu_item_id': item_id, 'name': 'Large', 'extra_price': 40},
        headers=admin_headers,
    )
    assert resp.status_code == 201

    resp = client.put(f"{ADMIN}/menu-items/{item_id}", json={'is_available': False}, headers=admin_headers)
    assert resp.get_json()['data']['is_available'] is False

    resp = client.get(f"{ADMIN}/item-options/{item_id}", headers=admin_headers)
    assert [o['name'] for o in resp.get_json()['data']] == ['Large']
