import json
import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from models import db
from models.cart import Cart, CartItem
from models.menu_item import MenuItem
from app.services.errors import ForbiddenError, NotFoundError

TWO_PLACES = Decimal("0.01")

logger = logging.getLogger(__name__)


def find_cart(user) -> Optional[Cart]:
    return Cart.query.filter_by(user_id=user.id).first()


def ensure_cart(user) -> Cart:
    cart = find_cart(user)
    if cart is not None:
        return cart
    try:
        with db.session.begin_nested():
            cart = Cart(user_id=user.id)
            db.session.add(cart)
    except IntegrityError:
        # a concurrent request created it first
        logger.info("cart creation raced user_id=%s, reusing existing cart", user.id)
        cart = find_cart(user)
    return cart


def snapshot_unit_price(menu_item: MenuItem, option_ids: List[int]) -> Decimal:
    """Base price plus the extra price of each chosen option of this item."""
    chosen = set(option_ids)
    extras = sum(
        (Decimal(o.extra_price) for o in menu_item.options if o.id in chosen),
        Decimal("0"),
    )
    return (Decimal(menu_item.base_price) + extras).quantize(TWO_PLACES)


def add_item(user, menu_item_id: int, option_ids: List[int], quantity: int, unit_price=None):
    menu_item = db.session.get(MenuItem, menu_item_id)
    if not menu_item or not menu_item.is_available:
        raise NotFoundError("Menu item not available")
    cart = ensure_cart(user)
    if unit_price is None:
        price = snapshot_unit_price(menu_item, option_ids)
    else:
        price = Decimal(str(unit_price)).quantize(TWO_PLACES)
    # every add is its own line, even for an identical item + options
    cart_item = CartItem(
        cart_id=cart.id,
        menu_item_id=menu_item.id,
        option_ids=json.dumps(list(option_ids)),
        quantity=quantity,
        unit_price=price,
    )
    db.session.add(cart_item)
    db.session.flush()
    return cart, cart_item


def _owned_item(user, cart_item_id: int) -> CartItem:
    cart_item = (
        CartItem.query.join(Cart, CartItem.cart_id == Cart.id)
        .filter(CartItem.id == cart_item_id, Cart.user_id == user.id)
        .first()
    )
    if cart_item is None:
        # unknown and foreign ids look the same to the caller
        raise ForbiddenError("Not authorized to modify this cart item")
    return cart_item


def update_item_quantity(user, cart_item_id: int, quantity: int) -> Optional[CartItem]:
    """Overwrite the quantity; zero or less deletes the line and returns None."""
    cart_item = _owned_item(user, cart_item_id)
    if quantity <= 0:
        db.session.delete(cart_item)
        return None
    cart_item.quantity = quantity
    return cart_item


def remove_item(user, cart_item_id: int):
    cart_item = _owned_item(user, cart_item_id)
    db.session.delete(cart_item)


def cart_totals(items) -> dict:
    total_quantity = sum(ci.quantity for ci in items)
    total_price = sum(
        (Decimal(ci.quantity) * Decimal(ci.unit_price) for ci in items),
        Decimal("0"),
    )
    return {
        "total_quantity": total_quantity,
        "total_price": float(total_price.quantize(TWO_PLACES)),
    }


def empty_cart_view() -> dict:
    return {"cart_id": None, "items": [], "total_quantity": 0, "total_price": 0.0}


def cart_view(user) -> dict:
    cart = find_cart(user)
    if cart is None:
        return empty_cart_view()
    items = CartItem.query.filter_by(cart_id=cart.id).order_by(CartItem.id).all()
    view = {"cart_id": cart.id, "items": [ci.to_dict() for ci in items]}
    view.update(cart_totals(items))
    return view
