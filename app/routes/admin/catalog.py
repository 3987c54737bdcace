"""Back-office catalog views.

Reads here differ from the public ones (counts, unavailable items, newest
first); writes reuse the public handlers under the admin prefix.
"""
from flask import request
from app.routes import catalog as public
from app.services import catalog
from app.utils import ok
from . import admin_bp


@admin_bp.route("/categories", methods=["GET"])
def list_categories():
    return ok([c.to_dict(with_count=True) for c in catalog.list_categories()])


@admin_bp.route("/menu-items", methods=["GET"])
def list_menu_items():
    items = catalog.list_menu_items(
        category_id=request.args.get("category_id", type=int),
        available=public.parse_bool_arg("available"),
        newest_first=True,
    )
    return ok([i.to_dict() for i in items])


_WRITES = (
    ("/categories", public.create_category, ["POST"]),
    ("/categories/<int:category_id>", public.update_category, ["PUT"]),
    ("/categories/<int:category_id>", public.delete_category, ["DELETE"]),
    ("/menu-items", public.create_menu_item, ["POST"]),
    ("/menu-items/<int:menu_item_id>", public.update_menu_item, ["PUT"]),
    ("/menu-items/<int:menu_item_id>", public.delete_menu_item, ["DELETE"]),
    ("/item-options/<int:menu_item_id>", public.list_item_options, ["GET"]),
    ("/item-options", public.create_item_option, ["POST"]),
    ("/item-options/<int:option_id>", public.update_item_option, ["PUT"]),
    ("/item-options/<int:option_id>", public.delete_item_option, ["DELETE"]),
)

for rule, view, methods in _WRITES:
    admin_bp.add_url_rule(rule, endpoint=view.__name__, view_func=view, methods=methods)
