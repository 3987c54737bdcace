from pydantic import BaseModel, Field, constr
from typing import Optional


class CategoryRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    description: Optional[constr(strip_whitespace=True)] = None


class MenuItemCreateRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=150)
    category_id: int
    base_price: float = Field(ge=0)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_available: bool = True


class MenuItemUpdateRequest(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1, max_length=150)] = None
    category_id: Optional[int] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None


class ItemOptionCreateRequest(BaseModel):
    menu_item_id: int
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    extra_price: float = Field(default=0, ge=0)


class ItemOptionUpdateRequest(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    extra_price: Optional[float] = Field(default=None, ge=0)
