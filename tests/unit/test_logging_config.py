"""Tests for structlog configuration"""

import logging

import pytest
import structlog

from resilience_layer.logging_config import add_app_context, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_configure_logging_sets_root_level():
    configure_logging("DEBUG", "development")
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    configure_logging("CHATTY", "development")
    assert logging.getLogger().level == logging.INFO


def test_single_handler_installed():
    configure_logging("INFO", "production")
    configure_logging("INFO", "production")
    assert len(logging.getLogger().handlers) == 1


def test_third_party_loggers_are_quieted():
    configure_logging("DEBUG", "development")
    assert logging.getLogger("httpx").level == logging.WARNING


def test_app_context_added():
    event = add_app_context(None, "info", {"event": "x"})
    assert event["app"] == "resilience-layer"
