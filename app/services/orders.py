"""Checkout and the order status lifecycle.

Callers run each public function inside ``transactional()``; checkout
creates the order, its items, the first status log row and deletes the
cart in that one transaction.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from flask import current_app
from models import db
from models.address import Address
from models.cart import Cart, CartItem
from models.menu_item import MenuItem
from models.order import Order, OrderItem, OrderStatusLog, ORDER_STATUSES
from app.services.errors import ConflictError, NotFoundError, ValidationError

TWO_PLACES = Decimal("0.01")

# current status -> statuses it may move to
ALLOWED_TRANSITIONS = {
    "pending": {"preparing", "cancelled"},
    "preparing": {"out_for_delivery", "cancelled"},
    "out_for_delivery": {"delivered", "cancelled"},
    "delivered": set(),
    "cancelled": set(),
}

TERMINAL_STATUSES = {s for s, targets in ALLOWED_TRANSITIONS.items() if not targets}

logger = logging.getLogger(__name__)


def _money(value) -> Decimal:
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def tax_rate() -> Decimal:
    return Decimal(str(current_app.config.get("TAX_RATE", "0.10")))


def delivery_fee() -> Decimal:
    return _money(str(current_app.config.get("DELIVERY_FEE", "200")))


def compute_totals(cart_items) -> dict:
    subtotal = _money(
        sum((Decimal(ci.quantity) * Decimal(ci.unit_price) for ci in cart_items), Decimal("0"))
    )
    tax = _money(subtotal * tax_rate())
    fee = delivery_fee()
    return {
        "subtotal": subtotal,
        "tax": tax,
        "delivery_fee": fee,
        "total_amount": subtotal + tax + fee,
    }


def resolve_delivery_address(user, address: str = None, address_id: int = None) -> str:
    if address_id is not None:
        saved = Address.query.filter_by(id=address_id, user_id=user.id).first()
        if not saved:
            raise ValidationError("Saved address not found")
        return saved.as_delivery_text()
    text = (address or "").strip()
    if not text:
        raise ValidationError("A delivery address or saved address is required")
    return text


def _check_menu_items_exist(cart_items):
    """Refuse checkout while any line points at a menu item that was since deleted."""
    wanted = {ci.menu_item_id for ci in cart_items}
    found = {
        row.id for row in db.session.query(MenuItem.id).filter(MenuItem.id.in_(wanted)).all()
    }
    missing = sorted(ci.id for ci in cart_items if ci.menu_item_id not in found)
    if missing:
        raise ConflictError(
            "Some cart items are no longer on the menu, remove them and retry: "
            + ", ".join(str(i) for i in missing)
        )


def place_order(
    user,
    address: str = None,
    address_id: int = None,
    notes: str = None,
    payment_status: str = "pending",
    promo_code: str = None,
) -> Order:
    delivery_address = resolve_delivery_address(user, address, address_id)

    cart = Cart.query.filter_by(user_id=user.id).first()
    cart_items = CartItem.query.filter_by(cart_id=cart.id).order_by(CartItem.id).all() if cart else []
    if not cart_items:
        raise ValidationError("Cart is empty or does not exist")
    _check_menu_items_exist(cart_items)

    totals = compute_totals(cart_items)
    order = Order(
        user_id=user.id,
        address=delivery_address,
        notes=notes,
        promo_code=promo_code,
        payment_status=payment_status,
        order_status="pending",
        **totals,
    )
    for ci in cart_items:
        order.items.append(
            OrderItem(
                menu_item_id=ci.menu_item_id,
                option_ids=ci.option_ids,
                quantity=ci.quantity,
                price=ci.unit_price,
            )
        )
    order.status_history.append(OrderStatusLog(status="pending", updated_by=user.id))
    db.session.add(order)

    # cart items go with the cart through the delete-orphan cascade
    db.session.delete(cart)
    db.session.flush()
    logger.info(
        "order placed id=%s user_id=%s lines=%s total=%s",
        order.id, user.id, len(cart_items), order.total_amount,
    )
    return order


def get_order_for(user, order_id: int) -> Order:
    order = db.session.get(Order, order_id)
    if not order or (order.user_id != user.id and user.role != "admin"):
        raise NotFoundError("Order not found")
    return order


def list_user_orders(user):
    return (
        Order.query.filter_by(user_id=user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def check_transition(current: str, target: str):
    if target not in ORDER_STATUSES:
        raise ValidationError("Invalid status")
    if current in TERMINAL_STATUSES:
        raise ConflictError(f"Order is already {current}")
    if target == current:
        raise ConflictError(f"Order is already {current}")
    if target not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ConflictError(f"Cannot move order from {current} to {target}")


def update_order_status(actor, order_id: int, new_status: str) -> Order:
    order = db.session.get(Order, order_id)
    if not order:
        raise NotFoundError("Order not found")
    check_transition(order.order_status, new_status)
    previous = order.order_status
    order.order_status = new_status
    order.status_history.append(OrderStatusLog(status=new_status, updated_by=actor.id))
    db.session.flush()
    logger.info("order status changed id=%s %s -> %s by=%s", order.id, previous, new_status, actor.id)
    return order


def cancel_own_order(user, order_id: int) -> Order:
    order = db.session.get(Order, order_id)
    if not order or order.user_id != user.id:
        raise NotFoundError("Order not found")
    if order.order_status != "pending":
        raise ConflictError("Only pending orders can be cancelled")
    return update_order_status(user, order.id, "cancelled")


def list_orders_page(status=None, page: int = 1, limit: int = 20):
    query = Order.query
    if status and status != "all":
        if status not in ORDER_STATUSES:
            raise ValidationError("Invalid status")
        query = query.filter_by(order_status=status)
    total = query.count()
    orders = (
        query.order_by(Order.created_at.desc(), Order.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    pages = (total + limit - 1) // limit if limit else 0
    return orders, {"page": page, "limit": limit, "total": total, "pages": pages}


__all__ = [
    "ALLOWED_TRANSITIONS",
    "compute_totals",
    "resolve_delivery_address",
    "place_order",
    "get_order_for",
    "list_user_orders",
    "check_transition",
    "update_order_status",
    "cancel_own_order",
    "list_orders_page",
]
