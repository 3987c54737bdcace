from pydantic import BaseModel, constr
from typing import Optional


class PlaceOrderRequest(BaseModel):
    address: Optional[str] = None
    address_id: Optional[int] = None
    notes: Optional[str] = None
    payment_status: constr(strip_whitespace=True, min_length=1, max_length=30) = "pending"
    promo_code: Optional[constr(strip_whitespace=True, max_length=50)] = None


class OrderStatusRequest(BaseModel):
    # checked against the transition table in the service layer
    status: str
