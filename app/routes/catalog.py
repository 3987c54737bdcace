"""Public catalog reads plus admin-scoped writes on the same paths."""
from flask import Blueprint, request
from app.version import API_PREFIX
from app.schemas.catalog import (
    CategoryRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
    ItemOptionCreateRequest,
    ItemOptionUpdateRequest,
)
from app.services import catalog
from app.services.errors import ServiceError
from app.utils import (
    ok,
    service_error,
    internal_error_response,
    auth_required,
    role_required,
    validate_schema,
    transactional,
)

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)

MANAGE_CATALOG = "admin:manage_catalog"


def parse_bool_arg(name):
    raw = request.args.get(name)
    if raw is None:
        return None
    return raw.strip().lower() in ("1", "true", "yes")


# ------------------- Categories -------------------

@catalog_bp.route("/categories", methods=["GET"])
def list_categories():
    return ok([c.to_dict() for c in catalog.list_categories()])


@catalog_bp.route("/categories/<int:category_id>", methods=["GET"])
def get_category(category_id):
    try:
        category = catalog.get_category(category_id)
    except ServiceError as e:
        return service_error(e)
    return ok(category.to_dict())


@catalog_bp.route("/categories", methods=["POST"])
@auth_required
@role_required(MANAGE_CATALOG)
@validate_schema(CategoryRequest)
def create_category():
    data: CategoryRequest = request.validated_data
    try:
        with transactional("Failed to create category"):
            category = catalog.create_category(data.name, data.description)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(category.to_dict(with_count=True), message="Category created", status=201)


@catalog_bp.route("/categories/<int:category_id>", methods=["PUT"])
@auth_required
@role_required(MANAGE_CATALOG)
@validate_schema(CategoryRequest)
def update_category(category_id):
    data: CategoryRequest = request.validated_data
    try:
        with transactional("Failed to update category"):
            category = catalog.update_category(category_id, data.name, data.description)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(category.to_dict(with_count=True), message="Category updated")


@catalog_bp.route("/categories/<int:category_id>", methods=["DELETE"])
@auth_required
@role_required(MANAGE_CATALOG)
def delete_category(category_id):
    try:
        with transactional("Failed to delete category"):
            catalog.delete_category(category_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Category deleted successfully")


# ------------------- Menu items -------------------

@catalog_bp.route("/menu-items", methods=["GET"])
def list_menu_items():
    items = catalog.list_menu_items(
        category_id=request.args.get("category_id", type=int),
        available=parse_bool_arg("available"),
    )
    return ok([i.to_dict() for i in items])


@catalog_bp.route("/menu-items/<int:menu_item_id>", methods=["GET"])
def get_menu_item(menu_item_id):
    try:
        item = catalog.get_menu_item(menu_item_id)
    except ServiceError as e:
        return service_error(e)
    return ok(item.to_dict())


@catalog_bp.route("/menu-items", methods=["POST"])
@auth_required
@role_required(MANAGE_CATALOG)
@validate_schema(MenuItemCreateRequest)
def create_menu_item():
    data: MenuItemCreateRequest = request.validated_data
    try:
        with transactional("Failed to create menu item"):
            item = catalog.create_menu_item(**data.model_dump())
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(item.to_dict(), message="Menu item created", status=201)


@catalog_bp.route("/menu-items/<int:menu_item_id>", methods=["PUT"])
@auth_required
@role_required(MANAGE_CATALOG)
@validate_schema(MenuItemUpdateRequest)
def update_menu_item(menu_item_id):
    data: MenuItemUpdateRequest = request.validated_data
    try:
        with transactional("Failed to update menu item"):
            item = catalog.update_menu_item(menu_item_id, **data.model_dump(exclude_unset=True))
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(item.to_dict(), message="Menu item updated")


@catalog_bp.route("/menu-items/<int:menu_item_id>", methods=["DELETE"])
@auth_required
@role_required(MANAGE_CATALOG)
def delete_menu_item(menu_item_id):
    try:
        with transactional("Failed to delete menu item"):
            catalog.delete_menu_item(menu_item_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Menu item deleted successfully")


# ------------------- Item options -------------------

@catalog_bp.route("/item-options/<int:menu_item_id>", methods=["GET"])
def list_item_options(menu_item_id):
    try:
        options = catalog.list_item_options(menu_item_id)
    except ServiceError as e:
        return service_error(e)
    return ok([o.to_dict() for o in options])


@catalog_bp.route("/item-options", methods=["POST"])
@auth_required
@role_required(MANAGE_CATALOG)
@validate_schema(ItemOptionCreateRequest)
def create_item_option():
    data: ItemOptionCreateRequest = request.validated_data
    try:
        with transactional("Failed to create item option"):
            option = catalog.create_item_option(data.menu_item_id, data.name, data.extra_price)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(option.to_dict(), message="Item option created", status=201)


@catalog_bp.route("/item-options/<int:option_id>", methods=["PUT"])
@auth_required
@role_required(MANAGE_CATALOG)
@validate_schema(ItemOptionUpdateRequest)
def update_item_option(option_id):
    data: ItemOptionUpdateRequest = request.validated_data
    try:
        with transactional("Failed to update item option"):
            option = catalog.update_item_option(option_id, data.name, data.extra_price)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(option.to_dict(), message="Item option updated")


@catalog_bp.route("/item-options/<int:option_id>", methods=["DELETE"])
@auth_required
@role_required(MANAGE_CATALOG)
def delete_item_option(option_id):
    try:
        with transactional("Failed to delete item option"):
            catalog.delete_item_option(option_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Item option deleted successfully")
