"""Tests for the shared logging setup."""

import logging
import logging.handlers

import structlog
from shared.logging import configure_logging, log_level, request_context


def test_log_level_follows_environment(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "production")
    assert log_level() == "INFO"

    monkeypatch.setenv("ENVIRONMENT", "development")
    assert log_level() == "DEBUG"


def test_explicit_log_level_wins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert log_level() == "ERROR"


def test_request_context_binds_only_inside_block():
    with request_context(path="/orders", user_id="cust-001"):
        bound = structlog.contextvars.get_contextvars()
        assert bound["path"] == "/orders"
        assert bound["user_id"] == "cust-001"

    assert "path" not in structlog.contextvars.get_contextvars()


def test_each_domain_gets_one_log_file():
    configure_logging("marketplace")
    configure_logging("marketplace")

    handlers = [
        h for h in logging.getLogger("marketplace").handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(handlers) == 1
    assert handlers[0].baseFilename.endswith("marketplace.log")
