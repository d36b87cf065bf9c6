"""
Options and attempt state for the retry executor.

RetryOptions is the caller-facing configuration (validated with pydantic).
AttemptState is the mutable per-invocation bookkeeping; it is created fresh
for every executor call and never shared.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from resilience_layer.config import Settings
from resilience_layer.models.enums import AuthType
from resilience_layer.retry.classification import default_should_retry

FallbackHandler = Callable[[Any], Union[bool, Awaitable[bool]]]
"""(auth_type) -> bool, sync or async. True means a fallback model was applied."""


class RetryOptions(BaseModel):
    """
    Configuration for a single retry_with_backoff invocation.

    Attributes:
        max_attempts: Total attempts including the first one
        initial_delay_ms: Delay before the first retry
        max_delay_ms: Cap applied to the exponential delay
        should_retry: Predicate deciding whether an error is retryable
        auth_type: Caller's authentication mode (AuthType or raw string)
        on_persistent_429: Handler consulted after two consecutive 429s
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    max_attempts: int = Field(default=5, ge=1)
    initial_delay_ms: float = Field(default=5000, ge=0)
    max_delay_ms: float = Field(default=30000, ge=0)
    should_retry: Callable[[BaseException], bool] = default_should_retry
    auth_type: Optional[Union[AuthType, str]] = None
    on_persistent_429: Optional[FallbackHandler] = None

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> "RetryOptions":
        if self.initial_delay_ms > self.max_delay_ms:
            raise ValueError(
                f"initial_delay_ms ({self.initial_delay_ms}) must not exceed "
                f"max_delay_ms ({self.max_delay_ms})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "RetryOptions":
        """Build options from application settings, with per-call overrides."""
        values: dict[str, Any] = {
            "max_attempts": settings.RETRY_MAX_ATTEMPTS,
            "initial_delay_ms": settings.RETRY_INITIAL_DELAY_MS,
            "max_delay_ms": settings.RETRY_MAX_DELAY_MS,
            "auth_type": settings.AUTH_TYPE,
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class AttemptState:
    """
    Per-invocation attempt bookkeeping.

    Attributes:
        attempt_number: 1-based number of the attempt in flight
        consecutive_429_count: Rate-limit failures since the last other outcome
        fallback_triggered: Whether the fallback handler already ran
    """

    attempt_number: int = 1
    consecutive_429_count: int = 0
    fallback_triggered: bool = False
