import logging
from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.metrics import ORDERS_PLACED, ORDER_STATUS_CHANGES
from app.schemas.orders import PlaceOrderRequest
from app.services import orders as order_service
from app.services.errors import ServiceError
from app.utils import (
    ok,
    service_error,
    internal_error_response,
    auth_required,
    role_required,
    validate_schema,
    transactional,
)

orders_bp = Blueprint("orders", __name__, url_prefix=f"{API_PREFIX}/orders")

PLACE_ORDER = ["user:place_order", "admin"]
CANCEL_OWN_ORDER = ["user:cancel_own_order", "admin"]


@orders_bp.before_request
@auth_required
def _enforce_login():
    return None


@orders_bp.route("", methods=["POST"])
@role_required(PLACE_ORDER)
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@validate_schema(PlaceOrderRequest)
def place_order():
    data: PlaceOrderRequest = request.validated_data
    try:
        with transactional("Order placement failed"):
            order = order_service.place_order(
                request.user,
                address=data.address,
                address_id=data.address_id,
                notes=data.notes,
                payment_status=data.payment_status,
                promo_code=data.promo_code,
            )
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    ORDERS_PLACED.inc()
    return ok(order.to_dict(with_items=True), message="Order placed successfully", status=201)


@orders_bp.route("/user/current", methods=["GET"])
def list_my_orders():
    orders = order_service.list_user_orders(request.user)
    return ok([o.to_dict(with_items=True) for o in orders])


@orders_bp.route("/<int:order_id>", methods=["GET"])
def get_order(order_id):
    try:
        order = order_service.get_order_for(request.user, order_id)
    except ServiceError as e:
        return service_error(e)
    return ok(order.to_dict(with_items=True, with_history=True))


@orders_bp.route("/<int:order_id>/cancel", methods=["POST"])
@role_required(CANCEL_OWN_ORDER)
def cancel_order(order_id):
    try:
        with transactional("Order cancellation failed"):
            order = order_service.cancel_own_order(request.user, order_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    ORDER_STATUS_CHANGES.labels(status="cancelled").inc()
    logging.info("order cancelled by owner id=%s", order.id)
    return ok(order.to_dict(with_items=True, with_history=True), message="Order cancelled")
