"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

import pytest
from authsvc.core.logger import JSONFormatter, configure_logging, ensure_request_id
from flask import Flask


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging("WARNING")


def test_json_formatter_renders_known_extras() -> None:
    record = logging.LogRecord(
        name="authsvc.services.auth.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="auth.login.failed",
        args=(),
        exc_info=None,
    )
    record.reason = "password mismatch"
    record.user_id = 7
    record.request_id = "req-1"
    record.password = "must-not-appear"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "auth.login.failed"
    assert payload["level"] == "INFO"
    assert payload["reason"] == "password mismatch"
    assert payload["user_id"] == 7
    assert payload["request_id"] == "req-1"
    assert "password" not in payload


def test_request_id_echoed_in_response(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})

    assert resp.headers["X-Request-ID"]


def test_well_formed_correlation_id_is_reused() -> None:
    app = Flask(__name__)

    with app.test_request_context(headers={"X-Correlation-ID": "trace-42"}):
        assert ensure_request_id() == "trace-42"
        assert ensure_request_id() == "trace-42"


@pytest.mark.parametrize("header", ["", "x" * 129, "bad id with spaces"])
def test_malformed_request_id_is_replaced(header) -> None:
    app = Flask(__name__)

    with app.test_request_context(headers={"X-Request-ID": header}):
        request_id = ensure_request_id()

    assert request_id != header
    assert len(request_id) == 36
