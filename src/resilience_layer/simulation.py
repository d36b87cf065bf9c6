"""
Synthetic rate-limit injection.

Lets developers exercise the fallback flow without real quota pressure:
wrap an operation and, while simulation is enabled, every call fails with
a 429 before reaching the API. Accepting the fallback disables simulation
so the session can proceed on the fallback model.
"""

from typing import Awaitable, Callable, TypeVar

import structlog

from resilience_layer.llm.exceptions import LLMRateLimitError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RateLimitSimulator:
    """Toggleable 429 injector with a request counter."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self.request_count = 0

    def should_simulate(self) -> bool:
        return self.enabled

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def disable_after_fallback(self) -> None:
        if self.enabled:
            logger.info(
                "Disabling 429 simulation after model fallback",
                simulated_requests=self.request_count,
            )
        self.enabled = False

    def reset_request_counter(self) -> None:
        self.request_count = 0

    def create_error(self) -> LLMRateLimitError:
        return LLMRateLimitError(
            "Rate limit exceeded (simulated)",
            details={"simulated": True, "request": self.request_count},
        )

    def wrap(self, operation: Callable[[], Awaitable[T]]) -> Callable[[], Awaitable[T]]:
        """Return an operation that fails with a simulated 429 while enabled."""

        async def simulated() -> T:
            self.request_count += 1
            if self.should_simulate():
                raise self.create_error()
            return await operation()

        return simulated
