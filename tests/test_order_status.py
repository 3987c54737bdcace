import pytest
from models.order import Order, OrderStatusLog
from app.services.orders import check_transition
from app.services.errors import ConflictError, ValidationError
from app.version import API_PREFIX

ADMIN_ORDERS = f"{API_PREFIX}/admin/orders"


@pytest.fixture
def order_id(client, user_headers, menu):
    client.post(f"{API_PREFIX}/carts/item", json={'menu_item_id': menu['curry_id'], 'quantity': 1}, headers=user_headers)
    resp = client.post(f"{API_PREFIX}/orders", json={'address': '1 Main St'}, headers=user_headers)
    return resp.get_json()['data']['id']


def set_status(client, headers, order_id, status):
    return client.put(f"{ADMIN_ORDERS}/{order_id}/status", json={'status': status}, headers=headers)


def test_forward_progression_appends_history(client, admin_headers, order_id):
    for status in ('preparing', 'out_for_delivery', 'delivered'):
        resp = set_status(client, admin_headers, order_id, status)
        assert resp.status_code == 200
        assert resp.get_json()['data']['order_status'] == status

    logs = OrderStatusLog.query.filter_by(order_id=order_id).order_by(OrderStatusLog.id).all()
    assert [log.status for log in logs] == ['pending', 'preparing', 'out_for_delivery', 'delivered']


def test_unknown_status_is_rejected_without_change(client, admin_headers, order_id):
    resp = set_status(client, admin_headers, order_id, 'teleported')
    assert resp.status_code == 400
    assert resp.get_json()['kind'] == 'validation'
    order = Order.query.filter_by(id=order_id).one()
    assert order.order_status == 'pending'
    assert OrderStatusLog.query.filter_by(order_id=order_id).count() == 1


def test_regression_and_terminal_moves_conflict(client, admin_headers, order_id):
    set_status(client, admin_headers, order_id, 'preparing')
    resp = set_status(client, admin_headers, order_id, 'pending')
    assert resp.status_code == 400
    assert resp.get_json()['kind'] == 'conflict'

    set_status(client, admin_headers, order_id, 'cancelled')
    resp = set_status(client, admin_headers, order_id, 'preparing')
    assert resp.status_code == 400
    assert resp.get_json()['kind'] == 'conflict'


def test_unknown_order_is_not_found(client, admin_headers):
    resp = set_status(client, admin_headers, 9999, 'preparing')
    assert resp.status_code == 404


def test_customer_cannot_update_status(client, user_headers, order_id):
    resp = set_status(client, user_headers, order_id, 'preparing')
    assert resp.status_code == 403


@pytest.mark.parametrize('current,target', [
    ('pending', 'preparing'),
    ('pending', 'cancelled'),
    ('preparing', 'out_for_delivery'),
    ('out_for_delivery', 'delivered'),
    ('out_for_delivery', 'cancelled'),
])
def test_allowed_transitions(current, target):
    check_transition(current, target)


@pytest.mark.parametrize('current,target', [
    ('pending', 'pending'),
    ('preparing', 'pending'),
    ('pending', 'delivered'),
    ('delivered', 'pending'),
    ('cancelled', 'preparing'),
])
def test_rejected_transitions(current, target):
    with pytest.raises(ConflictError):
        check_transition(current, target)


def test_invalid_status_literal():
    with pytest.raises(ValidationError):
        check_transition('pending', 'PENDING')
