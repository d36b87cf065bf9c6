"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from resilience_layer.config import Settings


class StatusError(Exception):
    """Error exposing an HTTP-like status, as API client errors do."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        if status is not None:
            self.status = status


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with fast retries and no real endpoint.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.RETRY_MAX_ATTEMPTS = 2
    """
    return Settings(
        # === Application ===
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Retry ===
        RETRY_MAX_ATTEMPTS=3,
        RETRY_INITIAL_DELAY_MS=10,
        RETRY_MAX_DELAY_MS=100,

        # === Models ===
        DEFAULT_MODEL="gemini-2.5-pro",
        FALLBACK_MODEL="gemini-2.5-flash",
        GEMINI_API_BASE_URL="https://generativelanguage.test",
        MODEL_PROBE_TIMEOUT_SECONDS=2.0,

        SIMULATE_429=False,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def make_status_error():
    """Factory fixture for errors carrying a status.

    Usage:
        def test_something(make_status_error):
            error = make_status_error(429)
    """
    def _create(status: int | None, message: str | None = None) -> StatusError:
        return StatusError(message or f"HTTP {status}", status)

    return _create
