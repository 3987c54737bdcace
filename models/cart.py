import json
from sqlalchemy.sql import func
from models import db, BIGINT


class Cart(db.Model):
    __tablename__ = "cart"

    id = db.Column(BIGINT, primary_key=True)
    # one open cart per user
    user_id = db.Column(BIGINT, db.ForeignKey("user.id"), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=func.now())

    items = db.relationship(
        "CartItem",
        backref="cart",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="CartItem.id",
    )


class CartItem(db.Model):
    __tablename__ = "cart_item"

    id = db.Column(BIGINT, primary_key=True)
    cart_id = db.Column(BIGINT, db.ForeignKey("cart.id"), nullable=False, index=True)
    # Plain reference: the menu item may change or disappear after it was added
    menu_item_id = db.Column(BIGINT, nullable=False)
    option_ids = db.Column(db.Text, nullable=False, default="[]")  # JSON list
    quantity = db.Column(db.Integer, nullable=False, default=1)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)  # snapshot at add time
    added_at = db.Column(db.DateTime, default=func.now())

    menu_item = db.relationship(
        "MenuItem",
        primaryjoin="foreign(CartItem.menu_item_id) == MenuItem.id",
        viewonly=True,
        lazy="joined",
    )

    @property
    def option_id_list(self):
        return json.loads(self.option_ids or "[]")

    def to_dict(self):
        return {
            "id": self.id,
            "cart_id": self.cart_id,
            "menu_item_id": self.menu_item_id,
            "option_ids": self.option_id_list,
            "quantity": self.quantity,
            "unit_price": float(self.unit_price),
            "menu_item": self.menu_item.to_dict(with_category=False) if self.menu_item else None,
        }
