from flask import request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os

UNLIMITED_PATHS = ("/health", "/metrics")


def _probe_request():
    return request.path in UNLIMITED_PATHS


# Shared by every app built in the process; per-route limits are set on the views
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATELIMIT_STORAGE_URL", "memory://"),
    strategy="fixed-window",
    default_limits=[os.getenv("DEFAULT_LIMIT_PER_IP", "300 per hour")],
    default_limits_exempt_when=_probe_request,
    headers_enabled=True,
)
