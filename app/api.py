from app.routes import (
    users_bp,
    catalog_bp,
    cart_bp,
    orders_bp,
    addresses_bp,
    admin_bp,
)


def register_api(app):
    """Register blueprint routes under the API prefix."""
    app.register_blueprint(users_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(addresses_bp)
    app.register_blueprint(admin_bp)
