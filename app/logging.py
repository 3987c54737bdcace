import logging
import json
import os
from typing import Any, Dict
from opentelemetry.trace import get_current_span


SENSITIVE_KEYS = {
    "password",
    "current_password",
    "new_password",
    "token",
    "refresh_token",
    "email",
    "phone",
}


def _from_g(name: str):
    try:
        from flask import g
        return getattr(g, name, None)
    except RuntimeError:
        # outside of an app context
        return None


def current_request_id() -> str:
    return _from_g("request_id") or "n/a"


class RequestIdFilter(logging.Filter):
    """Tag records with the request id and, once authenticated, the caller's user id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        record.user_id = _from_g("user_id")
        return True


def current_trace_ids():
    span = get_current_span()
    ctx = span.get_span_context() if span else None
    if not ctx or not ctx.is_valid:
        return "n/a", "n/a"
    return format(ctx.trace_id, "032x"), format(ctx.span_id, "016x")


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        trace_id, span_id = current_trace_ids()
        record.trace_id = trace_id
        record.span_id = span_id
        return True


def _mask_value(key, value):
    if key in SENSITIVE_KEYS:
        return "[REDACTED]"
    if isinstance(value, dict):
        return _mask_dict(value)
    return value


def _mask_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    # nested payloads such as {"user": {"email": ...}} are masked too
    return {key: _mask_value(key, value) for key, value in data.items()}


class MaskingFilter(logging.Filter):
    """Redact sensitive keys in dict-shaped log messages.

    DEBUG records keep the raw values outside production so local
    troubleshooting still sees them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        env = os.getenv("APP_ENV", "development").lower()
        keep_raw = record.levelno == logging.DEBUG and env != "production"
        if isinstance(record.msg, dict) and not keep_raw:
            record.msg = _mask_dict(record.msg)
        if isinstance(record.args, dict) and not keep_raw:
            record.args = _mask_dict(record.args)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "request_id": getattr(record, "request_id", "n/a"),
            "trace_id": getattr(record, "trace_id", "n/a"),
            "span_id": getattr(record, "span_id", "n/a"),
        }
        user_id = getattr(record, "user_id", None)
        if user_id is not None:
            base["user_id"] = user_id
        if isinstance(record.msg, dict):
            base.update(record.msg)
            message = None
        else:
            message = record.getMessage()
        if message:
            base["message"] = message
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, default=str)


def configure_logging(app) -> None:
    datefmt = "%Y-%m-%dT%H:%M:%S%z"
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(datefmt=datefmt))
    handler.addFilter(RequestIdFilter())
    handler.addFilter(TraceIdFilter())
    handler.addFilter(MaskingFilter())

    app.logger.handlers.clear()
    app.logger.addHandler(handler)

    level_name = os.getenv("LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), logging.INFO)
    else:
        level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    app.logger.setLevel(level)

    root = logging.getLogger()
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)
    root.setLevel(level)

    wl = logging.getLogger("werkzeug")
    wl.setLevel(level)
    wl.handlers.clear()
    wl.addHandler(handler)
