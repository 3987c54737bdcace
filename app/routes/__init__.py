from .users import users_bp
from .catalog import catalog_bp
from .cart import cart_bp
from .orders import orders_bp
from .addresses import addresses_bp
from .admin import admin_bp


__all__ = [
    'users_bp',
    'catalog_bp',
    'cart_bp',
    'orders_bp',
    'addresses_bp',
    'admin_bp',
]
