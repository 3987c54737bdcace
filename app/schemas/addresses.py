from pydantic import BaseModel, constr
from typing import Optional


class AddressCreateRequest(BaseModel):
    street: constr(strip_whitespace=True, min_length=1, max_length=255)
    city: constr(strip_whitespace=True, min_length=1, max_length=100)
    zip_code: constr(strip_whitespace=True, min_length=1, max_length=20)
    is_default: bool = False


class AddressUpdateRequest(BaseModel):
    street: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = None
    city: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    zip_code: Optional[constr(strip_whitespace=True, min_length=1, max_length=20)] = None
    is_default: Optional[bool] = None
