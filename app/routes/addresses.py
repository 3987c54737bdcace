from flask import Blueprint, request
from app.version import API_PREFIX
from app.schemas.addresses import AddressCreateRequest, AddressUpdateRequest
from app.services import addresses as address_service
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

addresses_bp = Blueprint("addresses", __name__, url_prefix=f"{API_PREFIX}/addresses")


@addresses_bp.before_request
@auth_required
@role_required(["user:manage_addresses", "admin"])
def _enforce_login():
    return None


@addresses_bp.route("", methods=["GET"])
def list_addresses():
    return ok([a.to_dict() for a in address_service.list_addresses(request.user)])


@addresses_bp.route("", methods=["POST"])
@validate_schema(AddressCreateRequest)
def add_address():
    data: AddressCreateRequest = request.validated_data
    try:
        with transactional("Failed to add address"):
            address = address_service.add_address(
                request.user, data.street, data.city, data.zip_code, is_default=data.is_default
            )
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(address.to_dict(), message="Address added", status=201)


@addresses_bp.route("/<int:address_id>", methods=["PUT"])
@validate_schema(AddressUpdateRequest)
def update_address(address_id):
    data: AddressUpdateRequest = request.validated_data
    try:
        with transactional("Failed to update address"):
            address = address_service.update_address(
                request.user, address_id, **data.model_dump(exclude_unset=True)
            )
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(address.to_dict(), message="Address updated")


@addresses_bp.route("/<int:address_id>/default", methods=["PATCH"])
def set_default_address(address_id):
    try:
        with transactional("Failed to set default address"):
            address = address_service.set_default_address(request.user, address_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(address.to_dict(), message="Default address updated")


@addresses_bp.route("/<int:address_id>", methods=["DELETE"])
def delete_address(address_id):
    try:
        with transactional("Failed to delete address"):
            address_service.delete_address(request.user, address_id)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Address deleted")
