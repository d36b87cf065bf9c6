"""
Unit tests for status extraction and the default retry classifier.
"""

import httpx
import pytest

from resilience_layer.llm.exceptions import (
    LLMConnectionError,
    LLMRateLimitError,
    LLMServerError,
)
from resilience_layer.retry.classification import (
    default_should_retry,
    get_error_status,
    is_rate_limit_error,
)
from resilience_layer.retry.exceptions import RateLimitExceeded


class _StatusCodeError(Exception):
    def __init__(self, status_code):
        super().__init__(f"status_code={status_code}")
        self.status_code = status_code


def _http_status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.test/generate")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


# ============================================================================
# get_error_status
# ============================================================================


def test_status_attribute_is_read(make_status_error):
    assert get_error_status(make_status_error(503)) == 503


def test_status_code_attribute_is_read():
    assert get_error_status(_StatusCodeError(502)) == 502


def test_httpx_status_error_uses_response_status():
    assert get_error_status(_http_status_error(429)) == 429


def test_error_without_status_returns_none():
    assert get_error_status(ValueError("no status")) is None


def test_boolean_status_is_ignored():
    error = Exception("weird")
    error.status = True
    assert get_error_status(error) is None


def test_llm_errors_carry_status():
    assert get_error_status(LLMRateLimitError()) == 429
    assert get_error_status(LLMServerError("down", status=503)) == 503
    assert get_error_status(LLMConnectionError("unreachable")) is None


# ============================================================================
# default_should_retry
# ============================================================================


@pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
def test_default_retries_rate_limit_and_server_errors(make_status_error, status):
    assert default_should_retry(make_status_error(status)) is True


@pytest.mark.parametrize("status", [400, 401, 403, 404, 501, 505])
def test_default_does_not_retry_other_statuses(make_status_error, status):
    assert default_should_retry(make_status_error(status)) is False


def test_default_does_not_retry_without_status():
    assert default_should_retry(RuntimeError("network down")) is False


def test_synthesized_rate_limit_error_classifies_as_429(make_status_error):
    error = RateLimitExceeded(3, make_status_error(429, "Too Many Requests"))
    assert is_rate_limit_error(error)
    assert default_should_retry(error)


def test_is_rate_limit_error(make_status_error):
    assert is_rate_limit_error(make_status_error(429))
    assert not is_rate_limit_error(make_status_error(500))
