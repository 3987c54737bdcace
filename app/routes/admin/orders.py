from flask import request, current_app
from app.metrics import ORDER_STATUS_CHANGES
from app.schemas.orders import OrderStatusRequest
from app.services import orders as order_service
from app.services.errors import ServiceError
from app.utils import (
    ok,
    service_error,
    internal_error_response,
    validate_schema,
    transactional,
)
from . import admin_bp

MAX_PAGE_SIZE = 100


def _page_args():
    page = request.args.get("page", 1, type=int) or 1
    limit = request.args.get("limit", current_app.config["ADMIN_PAGE_SIZE"], type=int)
    return max(page, 1), min(max(limit or 1, 1), MAX_PAGE_SIZE)


@admin_bp.route("/orders", methods=["GET"])
def list_orders():
    page, limit = _page_args()
    try:
        orders, pagination = order_service.list_orders_page(
            status=request.args.get("status"), page=page, limit=limit
        )
    except ServiceError as e:
        return service_error(e)
    return ok(
        {
            "orders": [o.to_dict(with_items=True, with_user=True) for o in orders],
            "pagination": pagination,
        }
    )


@admin_bp.route("/orders/<int:order_id>", methods=["GET"])
def get_order(order_id):
    try:
        order = order_service.get_order_for(request.user, order_id)
    except ServiceError as e:
        return service_error(e)
    return ok(order.to_dict(with_items=True, with_history=True, with_user=True))


@admin_bp.route("/orders/<int:order_id>/status", methods=["PUT"])
@validate_schema(OrderStatusRequest)
def update_order_status(order_id):
    data: OrderStatusRequest = request.validated_data
    try:
        with transactional("Failed to update order status"):
            order = order_service.update_order_status(request.user, order_id, data.status)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    ORDER_STATUS_CHANGES.labels(status=order.order_status).inc()
    return ok(order.to_dict(with_items=True, with_history=True), message="Order status updated")
