from pydantic import BaseModel, Field
from typing import List, Optional


class AddCartItemRequest(BaseModel):
    menu_item_id: int
    option_ids: List[int] = Field(default_factory=list)
    quantity: int = Field(default=1, ge=1)
    unit_price: Optional[float] = Field(default=None, ge=0)


class UpdateCartItemRequest(BaseModel):
    # zero or less removes the line
    quantity: int
