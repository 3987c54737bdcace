import logging
from sqlalchemy import func
from werkzeug.security import generate_password_hash, check_password_hash
from models import db
from models.user import User
from models.address import Address
from models.order import Order
from app.services.errors import AuthError, ConflictError, NotFoundError, ValidationError

VALID_ROLES = ("user", "admin")

logger = logging.getLogger(__name__)


def find_by_email(email: str):
    return User.query.filter(func.lower(User.email) == email.strip().lower()).first()


def register_user(name: str, email: str, password: str, phone: str = None) -> User:
    email = email.strip().lower()
    if find_by_email(email):
        raise ConflictError("An account with this email already exists")
    user = User(
        name=name,
        email=email,
        phone=phone,
        password_hash=generate_password_hash(password),
        role="user",
    )
    db.session.add(user)
    db.session.flush()
    logger.info("user registered id=%s", user.id)
    return user


def authenticate(email: str, password: str) -> User:
    user = find_by_email(email)
    # same message for unknown email and wrong password
    if not user or not check_password_hash(user.password_hash, password):
        raise AuthError("Invalid email or password")
    return user


def update_profile(user: User, name: str = None, phone: str = None) -> User:
    if name is not None:
        user.name = name
    if phone is not None:
        user.phone = phone
    return user


def change_password(user: User, current_password: str, new_password: str):
    if not check_password_hash(user.password_hash, current_password):
        raise ValidationError("Current password is incorrect")
    user.password_hash = generate_password_hash(new_password)


def set_user_role(user_id: int, role: str) -> User:
    if role not in VALID_ROLES:
        raise ValidationError("Invalid role")
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    user.role = role
    logger.info("role changed user_id=%s role=%s", user.id, role)
    return user


def create_or_promote_admin(email: str, name: str, password: str) -> User:
    user = find_by_email(email)
    if user:
        user.role = "admin"
        return user
    user = User(
        name=name,
        email=email.strip().lower(),
        password_hash=generate_password_hash(password),
        role="admin",
    )
    db.session.add(user)
    return user


def list_users_with_counts():
    order_counts = (
        db.session.query(Order.user_id, func.count(Order.id))
        .group_by(Order.user_id)
        .all()
    )
    address_counts = (
        db.session.query(Address.user_id, func.count(Address.id))
        .group_by(Address.user_id)
        .all()
    )
    orders_by_user = dict(order_counts)
    addresses_by_user = dict(address_counts)
    result = []
    for user in User.query.order_by(User.name.asc()).all():
        data = user.summary()
        data["order_count"] = orders_by_user.get(user.id, 0)
        data["address_count"] = addresses_by_user.get(user.id, 0)
        result.append(data)
    return result
