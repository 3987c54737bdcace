from flask import jsonify
from app.services.errors import ErrorKind, kind_for_status


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def error(message, status=400, code=None, kind=None, **extra):
    payload = {
        "status": "error",
        "message": message,
        "code": code or status,
        "kind": (kind or kind_for_status(status)).value,
    }
    payload.update(extra)
    return jsonify(payload), status


def service_error(exc):
    return error(exc.message, status=exc.status, kind=exc.kind)


def validation_error_response(errors):
    return error("Invalid request body", status=400, kind=ErrorKind.VALIDATION, errors=errors)


def internal_error_response():
    return error(
        "An unexpected error occurred, please try again later",
        status=500,
        kind=ErrorKind.INTERNAL,
    )
