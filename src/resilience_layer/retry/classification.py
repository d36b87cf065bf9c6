"""
Error classification for the retry executor.

Errors are classified purely by an HTTP-like status code. The executor is
agnostic to where the error came from: SDK exceptions exposing `status`,
`status_code`, or an httpx.HTTPStatusError carrying a response all work.
"""

from typing import Optional

RATE_LIMIT_STATUS = 429
RETRYABLE_SERVER_STATUSES = frozenset({500, 502, 503, 504})


def _as_status(value: object) -> Optional[int]:
    # bool is an int subclass but never a status code
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def get_error_status(error: BaseException) -> Optional[int]:
    """
    Extract an HTTP-like status code from an error.

    Looks at `status`, then `status_code`, then `response.status_code`.

    Returns:
        Status code, or None when the error carries no recognizable status
    """
    for attr in ("status", "status_code"):
        status = _as_status(getattr(error, attr, None))
        if status is not None:
            return status

    response = getattr(error, "response", None)
    if response is not None:
        return _as_status(getattr(response, "status_code", None))
    return None


def is_rate_limit_error(error: BaseException) -> bool:
    """True when the error carries a 429 status."""
    return get_error_status(error) == RATE_LIMIT_STATUS


def default_should_retry(error: BaseException) -> bool:
    """Retry on 429 and on 500/502/503/504; everything else is terminal."""
    status = get_error_status(error)
    if status is None:
        return False
    return status == RATE_LIMIT_STATUS or status in RETRYABLE_SERVER_STATUSES
