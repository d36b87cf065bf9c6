"""
Custom exceptions for model API calls.

Every exception carries an optional HTTP-like `status` so the retry
executor can classify it without knowing which client raised it.
"""

from typing import Optional


class LLMClientError(Exception):
    """
    Base exception for all model API errors.

    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status = status


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to reach the model API.

    Includes network errors, DNS failures, etc. No status is attached,
    so the default classifier treats it as non-retryable.
    """
    pass


class LLMRateLimitError(LLMClientError):
    """
    Raised when the API rate-limits the request (HTTP 429).

    Triggers backoff retry and, for OAuth logins, the model fallback offer.
    """
    def __init__(self, message: str = "Rate limit exceeded", details: dict | None = None):
        super().__init__(message, details=details, status=429)


class LLMServerError(LLMClientError):
    """
    Raised when the API fails server-side (HTTP 5xx).

    500/502/503/504 are retried by the default classifier.
    """
    def __init__(self, message: str, status: int = 500, details: dict | None = None):
        super().__init__(message, details=details, status=status)
