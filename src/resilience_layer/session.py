"""
Session-scoped model state and fallback handling.

ModelSession owns the active model for one session and supplies the
fallback handler to the retry executor explicitly, instead of the executor
reaching into ambient global state. Switching to the fallback model lasts
for the rest of the session only; nothing is persisted.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

import httpx
import structlog

from resilience_layer.config import Settings, settings as default_settings
from resilience_layer.interaction import ConsoleConfirmer, Confirmer
from resilience_layer.llm.model_check import get_effective_model
from resilience_layer.models.enums import AuthType
from resilience_layer.retry.backoff import InterruptibleSleep
from resilience_layer.retry.engine import retry_with_backoff
from resilience_layer.retry.options import RetryOptions
from resilience_layer.simulation import RateLimitSimulator

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ModelSession:
    """
    Active model, auth mode and retry wiring for one session.

    Attributes:
        model: Model currently used for requests
        auth_type: How the session is authenticated
        fallback_model: Lighter model offered on persistent rate limiting
        in_fallback_mode: Whether the session switched to the fallback model
    """

    def __init__(
        self,
        model: Optional[str] = None,
        auth_type: Optional[Union[AuthType, str]] = None,
        fallback_model: Optional[str] = None,
        confirmer: Optional[Confirmer] = None,
        simulator: Optional[RateLimitSimulator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.model = model or self.settings.DEFAULT_MODEL
        self.auth_type = auth_type if auth_type is not None else self.settings.AUTH_TYPE
        self.fallback_model = fallback_model or self.settings.FALLBACK_MODEL
        self.confirmer = confirmer or ConsoleConfirmer()
        if simulator is None and self.settings.SIMULATE_429:
            simulator = RateLimitSimulator(enabled=True)
        self.simulator = simulator
        self.in_fallback_mode = False
        self._sleeper = InterruptibleSleep()

        logger.debug(
            "Model session created",
            model=self.model,
            fallback_model=self.fallback_model,
            auth_type=str(getattr(self.auth_type, "value", self.auth_type)),
        )

    async def handle_persistent_429(self, auth_type: Any) -> bool:
        """
        Fallback handler for the retry executor.

        Asks whether to switch to the fallback model. Returns True when the
        switch was applied and retrying should continue immediately.
        """
        if self.model == self.fallback_model:
            return False

        question = (
            f"[INFO] Rate limiting persists on {self.model}. "
            f"Would you like to switch to {self.fallback_model} for this session? (y/N) "
        )
        if not await self.confirmer.confirm(question):
            self.confirmer.notify(f"[INFO] Continuing with {self.model}. This may be slow.")
            return False

        previous = self.model
        self.model = self.fallback_model
        self.in_fallback_mode = True
        if self.simulator is not None:
            self.simulator.disable_after_fallback()

        logger.info("Switched to fallback model", previous_model=previous, model=self.model)
        self.confirmer.notify(f"[INFO] Switched to {self.model} for this session.")
        return True

    def retry_options(self, **overrides: Any) -> RetryOptions:
        """RetryOptions from settings, wired to this session's auth mode and handler."""
        values: dict[str, Any] = {
            "auth_type": self.auth_type,
            "on_persistent_429": self.handle_persistent_429,
        }
        values.update(overrides)
        return RetryOptions.from_settings(self.settings, **values)

    async def invoke(self, operation: Callable[[], Awaitable[T]], **overrides: Any) -> T:
        """Run operation through the retry executor with session wiring."""
        if self.simulator is not None:
            operation = self.simulator.wrap(operation)
        return await retry_with_backoff(
            operation, self.retry_options(**overrides), sleep=self._sleeper
        )

    async def resolve_effective_model(
        self, api_key: str, http_client: Optional[httpx.AsyncClient] = None
    ) -> str:
        """Probe the configured model and adopt the result for this session."""
        effective = await get_effective_model(
            api_key,
            self.model,
            confirmer=self.confirmer,
            http_client=http_client,
            settings=self.settings,
        )
        if effective != self.model:
            self.model = effective
            self.in_fallback_mode = effective == self.fallback_model
        return self.model

    def close(self) -> None:
        """Cancel pending backoff sleeps; in-flight invocations fail with RetryCancelled."""
        self._sleeper.cancel()
