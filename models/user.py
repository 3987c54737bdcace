from sqlalchemy.sql import func
from models import db, BIGINT


class User(db.Model):
    __tablename__ = "user"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(20), nullable=False, default="user")  # user, admin
    created_at = db.Column(db.DateTime, default=func.now())
    updated_at = db.Column(db.DateTime, default=func.now(), onupdate=func.now())

    addresses = db.relationship("Address", backref="user", lazy=True, cascade="all, delete-orphan")
    orders = db.relationship("Order", backref="user", lazy=True)

    def summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
        }

    def to_dict(self):
        data = self.summary()
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    def __repr__(self):
        return f"<User id={self.id} role={self.role}>"
