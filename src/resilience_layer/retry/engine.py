"""
Retry-with-backoff executor.

Single entry point for invoking a remote operation that may be rate-limited
or fail transiently:

    result = await retry_with_backoff(call_model, RetryOptions(max_attempts=3))

Attempts are strictly sequential. All mutable state (attempt number,
consecutive 429 count, fallback flag) is local to one invocation, so
concurrent invocations need no coordination.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from resilience_layer.monitoring.metrics import record, retry_attempts_total
from resilience_layer.retry.backoff import SleepFn, apply_jitter, exponential_delay_ms
from resilience_layer.retry.classification import RATE_LIMIT_STATUS, get_error_status
from resilience_layer.retry.exceptions import RateLimitExceeded
from resilience_layer.retry.fallback import FallbackPolicy
from resilience_layer.retry.options import AttemptState, RetryOptions

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    options: Optional[RetryOptions] = None,
    *,
    sleep: SleepFn = asyncio.sleep,
    rng: Optional[random.Random] = None,
) -> T:
    """
    Invoke `operation` until it succeeds, fails terminally, or runs out of attempts.

    Args:
        operation: Zero-argument coroutine function performing the call
        options: Retry configuration (defaults to RetryOptions())
        sleep: Coroutine function used for backoff delays, in seconds
        rng: Random source for jitter (module-level random by default)

    Returns:
        The operation's result

    Raises:
        RateLimitExceeded: Attempts exhausted and the last failure was a 429
        Exception: The operation's own error, when non-retryable or when
            attempts were exhausted on a non-429 failure
    """
    if options is None:
        options = RetryOptions()

    state = AttemptState()
    policy = FallbackPolicy(options.auth_type, options.on_persistent_429)
    backoff_step = 1

    while True:
        try:
            result = await operation()
        except Exception as error:
            status = get_error_status(error)

            if not options.should_retry(error):
                logger.warning(
                    "Non-retryable error, giving up",
                    attempt=state.attempt_number,
                    status=status,
                    error=str(error),
                )
                record(retry_attempts_total, outcome="non_retryable")
                raise

            policy.record_failure(state, status)
            exhausted = state.attempt_number >= options.max_attempts
            # No retry would follow, so a model switch cannot help this call
            fallback_applied = False if exhausted else await policy.try_fallback(state)

            if exhausted:
                record(retry_attempts_total, outcome="exhausted")
                logger.error(
                    "Retry attempts exhausted",
                    attempts=state.attempt_number,
                    status=status,
                    error=str(error),
                )
                if status == RATE_LIMIT_STATUS:
                    raise RateLimitExceeded(state.attempt_number, error) from error
                raise

            record(retry_attempts_total, outcome="retry")

            if fallback_applied:
                # The fallback retry does not advance the delay sequence
                logger.info(
                    "Retrying immediately after model fallback",
                    next_attempt=state.attempt_number + 1,
                )
            else:
                base_delay_ms = exponential_delay_ms(
                    options.initial_delay_ms, backoff_step, options.max_delay_ms
                )
                delay_ms = apply_jitter(base_delay_ms, options.max_delay_ms, rng)
                logger.warning(
                    "Attempt failed, retrying after backoff",
                    attempt=state.attempt_number,
                    max_attempts=options.max_attempts,
                    status=status,
                    delay_ms=round(delay_ms, 1),
                    consecutive_429=state.consecutive_429_count,
                    error=str(error),
                )
                await sleep(delay_ms / 1000.0)
                backoff_step += 1

            state.attempt_number += 1
        else:
            record(retry_attempts_total, outcome="success")
            if state.attempt_number > 1:
                logger.info("Operation succeeded after retries", attempts=state.attempt_number)
            return result
