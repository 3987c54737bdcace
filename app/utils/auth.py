from functools import wraps
from flask import request, g
from .responses import error
from app.auth.permissions import role_has_scope
from app.services.errors import ErrorKind
from .jwt import decode_token, TokenError
from models import db
from models.user import User


def _bearer_token():
    auth = request.headers.get("Authorization", "")
    if not auth:
        return None
    return auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return error("Authorization header missing", status=401, kind=ErrorKind.AUTH)
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401, kind=ErrorKind.AUTH)

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            return error("invalid token", status=401, kind=ErrorKind.AUTH)
        user = db.session.get(User, user_id)
        if user is None:
            return error("User not found", status=401, kind=ErrorKind.AUTH)

        g.user_id = user.id
        g.token_role = payload.get("role")
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize against the role stored on the user row.

    Accepts a plain role (``"admin"``), a role-scoped action
    (``"admin:manage_catalog"``) or a list of either; any match passes.
    The token's role claim is never consulted, so role changes apply
    without a new login.
    """
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            role = getattr(getattr(request, "user", None), "role", None)
            if not role:
                return error("Role missing", status=403, kind=ErrorKind.FORBIDDEN)
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                else:
                    if role == entry:
                        break
            else:
                return error("Access denied", status=403, kind=ErrorKind.FORBIDDEN)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
