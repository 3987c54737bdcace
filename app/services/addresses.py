"""Saved delivery addresses and the one-default-per-user rule.

Every path that moves the default clears the other rows with a single
UPDATE before the target row is flagged, inside the caller's transaction.
The partial unique index on ``address`` backs this up at the database.
"""
from models import db
from models.address import Address
from app.services.errors import NotFoundError


def list_addresses(user):
    return (
        Address.query.filter_by(user_id=user.id)
        .order_by(Address.is_default.desc(), Address.id.asc())
        .all()
    )


def get_user_address(user, address_id: int) -> Address:
    address = Address.query.filter_by(id=address_id, user_id=user.id).first()
    if not address:
        raise NotFoundError("Address not found")
    return address


def _clear_defaults(user, except_id=None):
    query = Address.query.filter(Address.user_id == user.id, Address.is_default.is_(True))
    if except_id is not None:
        query = query.filter(Address.id != except_id)
    query.update({Address.is_default: False}, synchronize_session="fetch")


def add_address(user, street, city, zip_code, is_default=False) -> Address:
    has_any = db.session.query(
        Address.query.filter_by(user_id=user.id).exists()
    ).scalar()
    make_default = is_default or not has_any
    if make_default:
        _clear_defaults(user)
    address = Address(
        user_id=user.id,
        street=street,
        city=city,
        zip_code=zip_code,
        is_default=make_default,
    )
    db.session.add(address)
    db.session.flush()
    return address


def update_address(user, address_id: int, street=None, city=None, zip_code=None, is_default=None) -> Address:
    address = get_user_address(user, address_id)
    if is_default:
        _clear_defaults(user, except_id=address.id)
        address.is_default = True
    # is_default=False is ignored: the default can only be moved, not dropped
    if street is not None:
        address.street = street
    if city is not None:
        address.city = city
    if zip_code is not None:
        address.zip_code = zip_code
    return address


def set_default_address(user, address_id: int) -> Address:
    address = get_user_address(user, address_id)
    _clear_defaults(user, except_id=address.id)
    address.is_default = True
    return address


def delete_address(user, address_id: int):
    address = get_user_address(user, address_id)
    was_default = address.is_default
    db.session.delete(address)
    db.session.flush()
    if was_default:
        successor = (
            Address.query.filter_by(user_id=user.id)
            .order_by(Address.created_at.desc(), Address.id.desc())
            .first()
        )
        if successor:
            successor.is_default = True
