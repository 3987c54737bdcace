import logging
from decimal import Decimal
from sqlalchemy import func
from models import db
from models.category import Category
from models.menu_item import MenuItem, ItemOption
from models.order import OrderItem
from app.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def _price(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


# ------------------- Categories -------------------

def _name_taken(name: str, exclude_id=None) -> bool:
    query = Category.query.filter(func.lower(Category.name) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return db.session.query(query.exists()).scalar()


def get_category(category_id: int) -> Category:
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category


def create_category(name: str, description: str = None) -> Category:
    if _name_taken(name):
        raise ConflictError("Category with this name already exists")
    category = Category(name=name.strip(), description=description)
    db.session.add(category)
    db.session.flush()
    return category


def update_category(category_id: int, name: str, description: str = None) -> Category:
    category = get_category(category_id)
    if _name_taken(name, exclude_id=category.id):
        raise ConflictError("Another category with this name already exists")
    category.name = name.strip()
    category.description = description
    return category


def delete_category(category_id: int):
    category = get_category(category_id)
    item_count = MenuItem.query.filter_by(category_id=category.id).count()
    if item_count > 0:
        raise ConflictError("Cannot delete category with menu items. Move or delete items first.")
    db.session.delete(category)
    logger.info("category deleted id=%s", category_id)


def list_categories():
    return Category.query.order_by(Category.name.asc()).all()


# ------------------- Menu items -------------------

def get_menu_item(menu_item_id: int) -> MenuItem:
    item = db.session.get(MenuItem, menu_item_id)
    if not item:
        raise NotFoundError("Menu item not found")
    return item


def list_menu_items(category_id=None, available=None, newest_first=False):
    query = MenuItem.query
    if category_id is not None:
        query = query.filter_by(category_id=category_id)
    if available is not None:
        query = query.filter_by(is_available=available)
    if newest_first:
        query = query.order_by(MenuItem.created_at.desc(), MenuItem.id.desc())
    else:
        query = query.order_by(MenuItem.id.asc())
    return query.all()


def create_menu_item(name, category_id, base_price, description=None, image_url=None, is_available=True) -> MenuItem:
    get_category(category_id)
    item = MenuItem(
        name=name,
        category_id=category_id,
        base_price=_price(base_price),
        description=description,
        image_url=image_url,
        is_available=is_available,
    )
    db.session.add(item)
    db.session.flush()
    return item


def update_menu_item(menu_item_id: int, **changes) -> MenuItem:
    item = get_menu_item(menu_item_id)
    if changes.get("category_id") is not None:
        get_category(changes["category_id"])
        item.category_id = changes["category_id"]
    if changes.get("name") is not None:
        item.name = changes["name"]
    if changes.get("base_price") is not None:
        item.base_price = _price(changes["base_price"])
    if changes.get("description") is not None:
        item.description = changes["description"]
    if changes.get("image_url") is not None:
        item.image_url = changes["image_url"]
    if changes.get("is_available") is not None:
        item.is_available = changes["is_available"]
    return item


def delete_menu_item(menu_item_id: int):
    item = get_menu_item(menu_item_id)
    referenced = OrderItem.query.filter_by(menu_item_id=item.id).count()
    if referenced > 0:
        raise ConflictError(
            "Cannot delete menu item that exists in orders. Mark as unavailable instead."
        )
    db.session.delete(item)
    logger.info("menu item deleted id=%s", menu_item_id)


# ------------------- Item options -------------------

def get_item_option(option_id: int) -> ItemOption:
    option = db.session.get(ItemOption, option_id)
    if not option:
        raise NotFoundError("Item option not found")
    return option


def list_item_options(menu_item_id: int):
    get_menu_item(menu_item_id)
    return ItemOption.query.filter_by(menu_item_id=menu_item_id).order_by(ItemOption.id).all()


def create_item_option(menu_item_id: int, name: str, extra_price=0) -> ItemOption:
    get_menu_item(menu_item_id)
    option = ItemOption(menu_item_id=menu_item_id, name=name, extra_price=_price(extra_price))
    db.session.add(option)
    db.session.flush()
    return option


def update_item_option(option_id: int, name: str = None, extra_price=None) -> ItemOption:
    option = get_item_option(option_id)
    if name is not None:
        option.name = name
    if extra_price is not None:
        option.extra_price = _price(extra_price)
    return option


def delete_item_option(option_id: int):
    option = get_item_option(option_id)
    db.session.delete(option)
