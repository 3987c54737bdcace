import datetime as dt
from sqlalchemy import func
from models import db
from models.user import User
from models.menu_item import MenuItem
from models.order import Order, OrderItem


def _start_of_today():
    # created_at is stored as naive UTC
    now = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def dashboard_stats(top_n: int = 5) -> dict:
    today = _start_of_today()
    total_revenue = db.session.query(func.coalesce(func.sum(Order.total_amount), 0)).scalar()
    today_revenue = (
        db.session.query(func.coalesce(func.sum(Order.total_amount), 0))
        .filter(Order.created_at >= today)
        .scalar()
    )
    popular = (
        db.session.query(
            OrderItem.menu_item_id,
            MenuItem.name,
            func.sum(OrderItem.quantity).label("quantity"),
        )
        .join(MenuItem, MenuItem.id == OrderItem.menu_item_id)
        .group_by(OrderItem.menu_item_id, MenuItem.name)
        .order_by(func.sum(OrderItem.quantity).desc())
        .limit(top_n)
        .all()
    )
    return {
        "stats": {
            "total_orders": Order.query.count(),
            "today_orders": Order.query.filter(Order.created_at >= today).count(),
            "total_revenue": float(total_revenue or 0),
            "today_revenue": float(today_revenue or 0),
            "total_users": User.query.count(),
            "total_menu_items": MenuItem.query.count(),
            "pending_orders": Order.query.filter_by(order_status="pending").count(),
        },
        "popular_items": [
            {"menu_item_id": row.menu_item_id, "name": row.name, "quantity": int(row.quantity or 0)}
            for row in popular
        ],
    }
