import logging
from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from models import db
from models.user import User
from app.version import API_PREFIX
from app.schemas.users import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    ProfileUpdateRequest,
    ChangePasswordRequest,
)
from app.services.errors import ServiceError, ErrorKind
from app.services import users as user_service
from app.utils import (
    ok,
    error,
    service_error,
    internal_error_response,
    auth_required,
    role_required,
    validate_schema,
    transactional,
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)

users_bp = Blueprint("users", __name__, url_prefix=f"{API_PREFIX}/users")


def _token_pair(user):
    return {
        "token": create_access_token(user),
        "refresh_token": create_refresh_token(user),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }


# --- Register ---
@users_bp.route("", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["REGISTER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many sign-ups from this IP",
)
@validate_schema(RegisterRequest)
def register():
    data: RegisterRequest = request.validated_data
    try:
        with transactional("Failed to register user"):
            user = user_service.register_user(data.name, data.email, data.password, data.phone)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(user.to_dict(), message="Account created", status=201)


# --- Login ---
@users_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    data: LoginRequest = request.validated_data
    try:
        user = user_service.authenticate(data.email, data.password)
    except ServiceError as e:
        return service_error(e)
    logging.info("user login id=%s", user.id)
    payload = _token_pair(user)
    payload["user"] = user.summary()
    return ok(payload, message="Login success")


@users_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
        user = db.session.get(User, int(payload["sub"]))
    except (TokenError, KeyError, ValueError) as e:
        return error(str(e) or "invalid token", status=401, kind=ErrorKind.AUTH)
    if user is None:
        return error("User not found", status=401, kind=ErrorKind.AUTH)
    return ok(_token_pair(user))


# --- Current identity ---
@users_bp.route("/me", methods=["GET"])
@auth_required
def get_current_user():
    return ok(request.user.to_dict())


@users_bp.route("/profile", methods=["PUT"])
@auth_required
@validate_schema(ProfileUpdateRequest)
def update_profile():
    data: ProfileUpdateRequest = request.validated_data
    user = request.user
    try:
        with transactional("Failed to update profile"):
            user_service.update_profile(user, name=data.name, phone=data.phone)
    except Exception:
        return internal_error_response()
    return ok(user.to_dict(), message="Profile updated")


@users_bp.route("/change-password", methods=["PUT"])
@auth_required
@validate_schema(ChangePasswordRequest)
def change_password():
    data: ChangePasswordRequest = request.validated_data
    try:
        with transactional("Failed to change password"):
            user_service.change_password(request.user, data.current_password, data.new_password)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Password updated successfully")


@users_bp.route("", methods=["GET"])
@auth_required
@role_required("admin")
def list_users():
    users = User.query.order_by(User.name.asc()).all()
    return ok([u.to_dict() for u in users])
