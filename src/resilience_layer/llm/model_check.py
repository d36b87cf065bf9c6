"""
Effective-model probe.

Before a session starts, checks whether the default "pro" model is currently
rate-limited by sending a minimal generation request (one output token, no
thinking budget) with a hard 2 second timeout. On HTTP 429 the operator is
asked whether to switch to the lighter fallback model for this session.

The probe only ever reports availability, never correctness, and it fails
open: timeouts, network errors, client misuse and any non-429 status keep
the configured model. It never raises.
"""

import asyncio
from typing import Any, Dict, Optional

import httpx
import structlog

from resilience_layer.config import Settings, settings as default_settings
from resilience_layer.interaction import ConsoleConfirmer, Confirmer
from resilience_layer.monitoring.metrics import model_probe_total, record
from resilience_layer.retry.classification import RATE_LIMIT_STATUS

logger = structlog.get_logger(__name__)


def build_probe_payload() -> Dict[str, Any]:
    """Smallest useful generateContent body: 1 token, no thoughts."""
    return {
        "contents": [{"parts": [{"text": "test"}]}],
        "generationConfig": {
            "maxOutputTokens": 1,
            "temperature": 0,
            "topK": 1,
            "thinkingConfig": {"thinkingBudget": 0, "includeThoughts": False},
        },
    }


async def _probe_status(
    client: httpx.AsyncClient, url: str, api_key: str, timeout: float
) -> int:
    response = await asyncio.wait_for(
        client.post(
            url,
            params={"key": api_key},
            json=build_probe_payload(),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        ),
        timeout=timeout,
    )
    return response.status_code


async def get_effective_model(
    api_key: str,
    current_configured_model: str,
    *,
    confirmer: Optional[Confirmer] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Return the model to use for this session.

    Args:
        api_key: API key, sent as the `key` query parameter
        current_configured_model: Model from the user's configuration
        confirmer: Yes/no capability (console prompt by default)
        http_client: Client to issue the probe with (a short-lived one by default)
        settings: Settings providing model names, endpoint and timeout

    Returns:
        current_configured_model, or the fallback model if the operator
        accepted the switch after a 429
    """
    settings = settings or default_settings
    model_to_test = settings.DEFAULT_MODEL
    fallback_model = settings.FALLBACK_MODEL

    if current_configured_model != model_to_test:
        record(model_probe_total, outcome="skipped")
        return current_configured_model

    url = (
        f"{settings.GEMINI_API_BASE_URL.rstrip('/')}"
        f"/v1beta/models/{model_to_test}:generateContent"
    )
    timeout = settings.MODEL_PROBE_TIMEOUT_SECONDS

    try:
        if http_client is not None:
            status = await _probe_status(http_client, url, api_key, timeout)
        else:
            async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as client:
                status = await _probe_status(client, url, api_key, timeout)
    except Exception as e:
        logger.debug(
            "Model probe failed, keeping configured model",
            error=str(e),
            error_type=type(e).__name__,
        )
        record(model_probe_total, outcome="error")
        return current_configured_model

    if status != RATE_LIMIT_STATUS:
        logger.debug("Model probe completed", status=status, model=model_to_test)
        record(model_probe_total, outcome="ok")
        return current_configured_model

    record(model_probe_total, outcome="rate_limited")
    confirmer = confirmer or ConsoleConfirmer()
    question = (
        f"[INFO] Your configured model ({model_to_test}) is responding slowly. "
        f"Would you like to switch to {fallback_model} for this session? (y/N) "
    )

    try:
        accepted = await confirmer.confirm(question)
        if accepted:
            confirmer.notify(f"[INFO] Switched to {fallback_model} for this session.")
            return fallback_model
        confirmer.notify(f"[INFO] Continuing with {model_to_test}. This may be slow.")
    except Exception as e:
        logger.debug("Model switch prompt failed, keeping configured model", error=str(e))

    return current_configured_model
