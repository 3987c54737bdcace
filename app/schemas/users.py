from pydantic import BaseModel, constr, field_validator
from typing import Optional

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    email: constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)
    password: constr(min_length=6, max_length=128)
    phone: Optional[constr(strip_whitespace=True, max_length=20)] = None


class LoginRequest(BaseModel):
    email: constr(strip_whitespace=True, to_lower=True, min_length=1)
    password: constr(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: constr(min_length=1)


class ProfileUpdateRequest(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    phone: Optional[constr(strip_whitespace=True, max_length=20)] = None


class ChangePasswordRequest(BaseModel):
    current_password: constr(min_length=1)
    new_password: constr(min_length=6, max_length=128)


class RoleUpdateRequest(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def _known_role(cls, value):
        if value not in ("user", "admin"):
            raise ValueError("Invalid role")
        return value
