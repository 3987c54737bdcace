from flask import Blueprint, request
from app.version import API_PREFIX
from app.schemas.cart import AddCartItemRequest, UpdateCartItemRequest
from app.services import cart as cart_service
from app.services.errors import ServiceError
from app.utils import (
    ok,
    service_error,
    internal_error_response,
    auth_required,
    validate_schema,
    transactional,
)

cart_bp = Blueprint("cart", __name__, url_prefix=f"{API_PREFIX}/carts")


@cart_bp.before_request
@auth_required
def _enforce_login():
    """Every cart route acts on the caller's own cart."""
    return None


@cart_bp.route("", methods=["POST"])
def create_cart():
    try:
        with transactional("Failed to create cart"):
            cart = cart_service.ensure_cart(request.user)
    except Exception:
        return internal_error_response()
    return ok({"cart_id": cart.id}, message="Cart ready", status=201)


@cart_bp.route("/current", methods=["GET"])
def get_current_cart():
    return ok(cart_service.cart_view(request.user))


@cart_bp.route("/item", methods=["POST"])
@validate_schema(AddCartItemRequest)
def add_cart_item():
    data: AddCartItemRequest = request.validated_data
    try:
        with transactional("Failed to add item to cart"):
            cart, cart_item = cart_service.add_item(
                request.user,
                data.menu_item_id,
                data.option_ids,
                data.quantity,
                unit_price=data.unit_price,
            )
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(
        {"cart_id": cart.id, "item": cart_item.to_dict()},
        message="Item added to cart",
        status=201,
    )


@cart_bp.route("/item/<int:cart_item_id>", methods=["PUT"])
@validate_schema(UpdateCartItemRequest)
def update_cart_item(cart_item_id):
    data: UpdateCartItemRequest = request.validated_data
    try:
        with transactional("Failed to update cart item"):
            cart_item = cart_service.update_item_quantity(request.user, cart_item_id, data.quantity)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    if cart_item is None:
        return ok(message="Item removed from cart")
    return ok(cart_item.to_dict(), message="Cart item updated")


@cart_bp.route("/item/<int:cart_item_id>", methods=["DELETE"])
def remove_cart_item(cart_item_id):
    try:
        with transactional("Failed to remove cart item"):
            cart_service.remove_item(request.user, cart_item_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Item removed from cart")
