import extensions
from app import create_app
from app.config import TestingConfig
from app.version import API_PREFIX


class LimitedConfig(TestingConfig):
    RATELIMIT_ENABLED = True
    LOGIN_LIMIT_PER_IP = "3 per minute"


def test_login_rate_limit():
    app = create_app(LimitedConfig)
    client = app.test_client()
    try:
        for _ in range(4):
            r = client.post(f"{API_PREFIX}/users/login", json={"email": "a@b.co", "password": "x"})
        assert r.status_code == 429
        body = r.get_json()
        assert body["kind"] == "rate_limited"
        assert "login" in body["message"].lower()
    finally:
        # the limiter is shared by every app built in this process
        extensions.limiter.reset()
        extensions.limiter.enabled = False
