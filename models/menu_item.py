from sqlalchemy.sql import func
from models import db, BIGINT


class MenuItem(db.Model):
    __tablename__ = "menu_item"

    id = db.Column(BIGINT, primary_key=True)
    category_id = db.Column(BIGINT, db.ForeignKey("category.id"), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=True)
    base_price = db.Column(db.Numeric(10, 2), nullable=False)
    image_url = db.Column(db.String(255), nullable=True)
    is_available = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=func.now())
    updated_at = db.Column(db.DateTime, default=func.now(), onupdate=func.now())

    options = db.relationship(
        "ItemOption",
        backref="menu_item",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ItemOption.id",
    )

    def to_dict(self, with_category=True, with_options=True):
        data = {
            "id": self.id,
            "category_id": self.category_id,
            "name": self.name,
            "description": self.description,
            "base_price": float(self.base_price),
            "image_url": self.image_url,
            "is_available": self.is_available,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if with_category and self.category is not None:
            data["category"] = {"id": self.category.id, "name": self.category.name}
        if with_options:
            data["options"] = [o.to_dict() for o in self.options]
        return data


class ItemOption(db.Model):
    __tablename__ = "item_option"

    id = db.Column(BIGINT, primary_key=True)
    menu_item_id = db.Column(BIGINT, db.ForeignKey("menu_item.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    extra_price = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    def to_dict(self):
        return {
            "id": self.id,
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "extra_price": float(self.extra_price),
        }
