from flask import request
from app.schemas.users import RoleUpdateRequest
from app.services import users as user_service
from app.services.errors import ServiceError
from app.utils import (
    ok,
    service_error,
    internal_error_response,
    validate_schema,
    transactional,
)
from . import admin_bp


@admin_bp.route("/users", methods=["GET"])
def list_users():
    return ok(user_service.list_users_with_counts())


@admin_bp.route("/users/<int:user_id>/role", methods=["PUT"])
@validate_schema(RoleUpdateRequest)
def update_user_role(user_id):
    data: RoleUpdateRequest = request.validated_data
    try:
        with transactional("Failed to update user role"):
            user = user_service.set_user_role(user_id, data.role)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(user.summary(), message="User role updated")
