import json
from sqlalchemy import Column, String, Numeric, Text, DateTime, ForeignKey, Integer
from sqlalchemy.sql import func
from models import db, BIGINT


ORDER_STATUSES = ("pending", "preparing", "out_for_delivery", "delivered", "cancelled")


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_user_created", "user_id", "created_at"),
        db.Index("ix_order_status", "order_status"),
    )
    id = Column(BIGINT, primary_key=True)
    user_id = Column(BIGINT, ForeignKey("user.id"), nullable=False)
    address = Column(Text, nullable=False)  # free-text snapshot
    notes = Column(Text, nullable=True)
    promo_code = Column(String(50), nullable=True)  # stored, never applied
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    order_status = Column(String(30), nullable=False, default="pending")
    payment_status = Column(String(30), nullable=False, default="pending")
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    items = db.relationship(
        "OrderItem", backref="order", cascade="all, delete-orphan", lazy=True, order_by="OrderItem.id"
    )
    status_history = db.relationship(
        "OrderStatusLog", backref="order", cascade="all, delete-orphan", lazy=True, order_by="OrderStatusLog.id"
    )

    __mapper_args__ = {"version_id_col": version}

    def to_dict(self, with_items=True, with_history=False, with_user=False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "address": self.address,
            "notes": self.notes,
            "promo_code": self.promo_code,
            "subtotal": float(self.subtotal),
            "tax": float(self.tax),
            "delivery_fee": float(self.delivery_fee),
            "total_amount": float(self.total_amount),
            "order_status": self.order_status,
            "payment_status": self.payment_status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if with_items:
            data["items"] = [oi.to_dict() for oi in self.items]
        if with_history:
            data["status_history"] = [log.to_dict() for log in self.status_history]
        if with_user and self.user is not None:
            data["user"] = self.user.summary()
        return data


class OrderItem(db.Model):
    __tablename__ = "order_item"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("order.id"), nullable=False, index=True)
    menu_item_id = db.Column(BIGINT, db.ForeignKey("menu_item.id"), nullable=False, index=True)
    option_ids = db.Column(db.Text, nullable=False, default="[]")
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)  # unit price actually charged

    menu_item = db.relationship("MenuItem", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "menu_item_id": self.menu_item_id,
            "name": self.menu_item.name if self.menu_item else None,
            "option_ids": json.loads(self.option_ids or "[]"),
            "quantity": self.quantity,
            "price": float(self.price),
            "subtotal": float(self.price * self.quantity),
        }


class OrderStatusLog(db.Model):
    __tablename__ = "order_status_log"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("order.id"), nullable=False, index=True)
    status = Column(String(30), nullable=False)
    updated_by = Column(BIGINT, nullable=False)
    timestamp = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "status": self.status,
            "updated_by": self.updated_by,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
