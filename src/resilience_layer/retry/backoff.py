"""
Backoff delay computation and the sleep primitive used between retries.

Delays grow exponentially from the initial delay (doubling per applied
delay), are capped at max_delay_ms, and then receive +/-30% uniform jitter
so that concurrent retriers do not fire in lockstep.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

import structlog

from resilience_layer.retry.exceptions import RetryCancelled

logger = structlog.get_logger(__name__)

JITTER_FACTOR = 0.3

SleepFn = Callable[[float], Awaitable[None]]
"""Coroutine function taking a delay in seconds."""


def exponential_delay_ms(initial_delay_ms: float, step: int, max_delay_ms: float) -> float:
    """
    Unjittered delay for the given 1-based backoff step.

    delay = initial_delay_ms * 2^(step - 1), capped at max_delay_ms.
    """
    if step < 1:
        raise ValueError("step must be >= 1")
    # Exponent bounded; larger steps are capped anyway
    exponent = min(step - 1, 62)
    return min(initial_delay_ms * (2 ** exponent), max_delay_ms)


def apply_jitter(
    delay_ms: float,
    max_delay_ms: float,
    rng: Optional[random.Random] = None,
) -> float:
    """
    Perturb an already-capped delay by up to +/-JITTER_FACTOR, then re-cap.

    The result lies in [0.7 * delay_ms, min(1.3 * delay_ms, max_delay_ms)].
    """
    uniform = (rng or random).uniform
    jitter = delay_ms * JITTER_FACTOR * uniform(-1.0, 1.0)
    return min(max(0.0, delay_ms + jitter), max_delay_ms)


class InterruptibleSleep:
    """
    Cancellable sleep primitive for backoff delays.

    `await sleeper(seconds)` waits like asyncio.sleep, but `cancel()` wakes
    every pending wait immediately with RetryCancelled, so abandoning a
    session never leaves backoff timers behind. Once cancelled, later
    sleeps fail immediately until `reset()` is called.
    """

    def __init__(self) -> None:
        self._cancelled = asyncio.Event()
        self._pending = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def pending(self) -> int:
        """Number of sleeps currently waiting."""
        return self._pending

    async def __call__(self, seconds: float) -> None:
        if self._cancelled.is_set():
            raise RetryCancelled()

        self._pending += 1
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=max(0.0, seconds))
        except asyncio.TimeoutError:
            return
        finally:
            self._pending -= 1

        # Event fired before the timeout elapsed
        raise RetryCancelled()

    def cancel(self) -> None:
        if not self._cancelled.is_set():
            logger.debug("Cancelling pending backoff sleeps", pending=self._pending)
        self._cancelled.set()

    def reset(self) -> None:
        self._cancelled.clear()
