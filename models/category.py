from sqlalchemy.sql import func
from models import db, BIGINT


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=func.now())

    menu_items = db.relationship("MenuItem", backref="category", lazy=True)

    def to_dict(self, with_count=False):
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }
        if with_count:
            data["menu_item_count"] = len(self.menu_items)
        return data


# Names are unique regardless of case
db.Index("uq_category_name_lower", func.lower(Category.name), unique=True)
