"""
Retry executor with rate-limit model fallback.

1. **Classification**: status-based retryability (429, 500/502/503/504)
2. **Backoff**: exponential delay with +/-30% jitter, capped
3. **Fallback Policy**: one-shot handler after two consecutive 429s (OAuth only)
4. **Exhaustion**: RateLimitExceeded for 429s, original error otherwise

Usage:
    >>> from resilience_layer.retry import RetryOptions, retry_with_backoff
    >>> result = await retry_with_backoff(call_model, RetryOptions(max_attempts=3))
"""

from resilience_layer.retry.backoff import (
    JITTER_FACTOR,
    InterruptibleSleep,
    apply_jitter,
    exponential_delay_ms,
)
from resilience_layer.retry.classification import (
    default_should_retry,
    get_error_status,
    is_rate_limit_error,
)
from resilience_layer.retry.engine import retry_with_backoff
from resilience_layer.retry.exceptions import RateLimitExceeded, RetryCancelled
from resilience_layer.retry.fallback import PERSISTENT_429_THRESHOLD, FallbackPolicy
from resilience_layer.retry.options import AttemptState, FallbackHandler, RetryOptions

__all__ = [
    "retry_with_backoff",
    "RetryOptions",
    "AttemptState",
    "FallbackHandler",
    "FallbackPolicy",
    "PERSISTENT_429_THRESHOLD",
    "RateLimitExceeded",
    "RetryCancelled",
    "InterruptibleSleep",
    "JITTER_FACTOR",
    "apply_jitter",
    "exponential_delay_ms",
    "default_should_retry",
    "get_error_status",
    "is_rate_limit_error",
]
