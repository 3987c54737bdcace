import json
import logging

from app.logging import JsonFormatter, MaskingFilter


def test_request_id_header_and_propagation(client):
    resp = client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_request_id_generated_when_absent(client):
    resp = client.get("/__ok")
    assert len(resp.headers.get("X-Request-ID", "")) == 32


def test_logs_include_request_id_attribute(client, caplog):
    caplog.set_level("INFO")
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    assert any(getattr(r, "request_id", "") == "rid-abc" for r in caplog.records)


def test_sensitive_fields_masked_in_info(app, monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"email": "user@example.com", "password": "hunter22", "order_id": 7})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert isinstance(record.msg, dict)
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["password"] == "[REDACTED]"
    assert record.msg["order_id"] == 7


def test_sensitive_fields_visible_in_debug(app, monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"password": "secret"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert record.msg["password"] == "secret"


def test_json_formatter_output():
    record = logging.LogRecord("orders", logging.INFO, __file__, 1, "placed %s", (42,), None)
    record.request_id = "rid-1"
    line = json.loads(JsonFormatter().format(record))
    assert line["message"] == "placed 42"
    assert line["request_id"] == "rid-1"
    assert line["level"] == "INFO"
    assert line["trace_id"] == "n/a"


def test_nested_sensitive_fields_masked(app, monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logging.getLogger("mask_nested").info({"event": "login", "user": {"email": "a@b.co", "id": 3}})
    record = next(r for r in caplog.records if r.name == "mask_nested")
    assert record.msg["user"] == {"email": "[REDACTED]", "id": 3}


def test_json_formatter_includes_user_id():
    record = logging.LogRecord("orders", logging.INFO, __file__, 1, "cancelled", None, None)
    record.user_id = 12
    assert json.loads(JsonFormatter().format(record))["user_id"] == 12
