from sqlalchemy.sql import func
from models import db, BIGINT


class Address(db.Model):
    __tablename__ = "address"
    __table_args__ = (
        # at most one default address per user
        db.Index(
            "uq_address_default_per_user",
            "user_id",
            unique=True,
            sqlite_where=db.text("is_default"),
            postgresql_where=db.text("is_default"),
        ),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("user.id"), nullable=False, index=True)
    street = db.Column(db.String(255), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    zip_code = db.Column(db.String(20), nullable=False)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=func.now())

    def as_delivery_text(self):
        return f"{self.street}, {self.city} {self.zip_code}"

    def to_dict(self):
        return {
            "id": self.id,
            "street": self.street,
            "city": self.city,
            "zip_code": self.zip_code,
            "is_default": self.is_default,
        }
