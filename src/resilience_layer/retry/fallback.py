"""
Model-fallback policy for sustained rate limiting.

Decides *when* to surface the model fallback, independent of delay math:
after exactly two consecutive 429 failures, for personal OAuth logins only,
with a handler configured, and at most once per executor invocation.
API-key callers are retried and rejected purely by the backoff schedule.
"""

import inspect
from typing import Any, Optional

import structlog

from resilience_layer.models.enums import AuthType
from resilience_layer.monitoring.metrics import model_fallback_total, record
from resilience_layer.retry.classification import RATE_LIMIT_STATUS
from resilience_layer.retry.options import AttemptState, FallbackHandler

logger = structlog.get_logger(__name__)

PERSISTENT_429_THRESHOLD = 2


class FallbackPolicy:
    """
    Consecutive-429 tracking plus the one-shot fallback decision.

    The policy keeps no state of its own; counters live on the AttemptState
    of the invocation it serves.

    Attributes:
        auth_type: Caller's authentication mode
        handler: Fallback handler, or None when no fallback is available
    """

    def __init__(self, auth_type: Any, handler: Optional[FallbackHandler]):
        self.auth_type = auth_type
        self.handler = handler

    def record_failure(self, state: AttemptState, status: Optional[int]) -> None:
        """Count a retryable failure: 429 increments, anything else resets."""
        if status == RATE_LIMIT_STATUS:
            state.consecutive_429_count += 1
        else:
            state.consecutive_429_count = 0

    def should_trigger(self, state: AttemptState) -> bool:
        return (
            state.consecutive_429_count == PERSISTENT_429_THRESHOLD
            and AuthType.is_oauth(self.auth_type)
            and self.handler is not None
            and not state.fallback_triggered
        )

    async def try_fallback(self, state: AttemptState) -> bool:
        """
        Invoke the handler if the policy allows it.

        The handler runs at most once per invocation, whatever it returns.
        A handler that raises counts as a declined fallback; its error never
        replaces the underlying API failure.

        Returns:
            True when a fallback model was applied and the next attempt
            should proceed without delay
        """
        if not self.should_trigger(state):
            return False

        state.fallback_triggered = True
        logger.info(
            "Persistent rate limiting, offering model fallback",
            auth_type=str(getattr(self.auth_type, "value", self.auth_type)),
            attempt=state.attempt_number,
        )

        try:
            result = self.handler(self.auth_type)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.warning(
                "Fallback handler failed, continuing with original error",
                error=str(e),
                error_type=type(e).__name__,
            )
            record(model_fallback_total, accepted="false")
            return False

        applied = result is True
        record(model_fallback_total, accepted="true" if applied else "false")

        if applied:
            state.consecutive_429_count = 0
            logger.info("Fallback model applied, retrying immediately")
        else:
            logger.info("Fallback declined, continuing with backoff")
        return applied
