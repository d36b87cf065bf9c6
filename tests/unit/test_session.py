"""
Unit tests for ModelSession.
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from resilience_layer.interaction import StaticConfirmer
from resilience_layer.models.enums import AuthType
from resilience_layer.retry.exceptions import RetryCancelled
from resilience_layer.session import ModelSession
from resilience_layer.simulation import RateLimitSimulator


def _session(test_settings, answer=True, **kwargs) -> ModelSession:
    return ModelSession(
        auth_type=kwargs.pop("auth_type", AuthType.LOGIN_WITH_GOOGLE_PERSONAL),
        confirmer=StaticConfirmer(answer=answer),
        settings=test_settings,
        **kwargs,
    )


def test_defaults_come_from_settings(test_settings):
    test_settings.AUTH_TYPE = "gemini-api-key"
    session = ModelSession(confirmer=StaticConfirmer(), settings=test_settings)

    assert session.model == "gemini-2.5-pro"
    assert session.fallback_model == "gemini-2.5-flash"
    assert session.auth_type == "gemini-api-key"
    assert session.in_fallback_mode is False
    assert session.simulator is None


def test_simulate_429_setting_creates_enabled_simulator(test_settings):
    test_settings.SIMULATE_429 = True
    session = ModelSession(confirmer=StaticConfirmer(), settings=test_settings)

    assert session.simulator is not None
    assert session.simulator.should_simulate()


def test_retry_options_are_wired_to_session(test_settings):
    session = _session(test_settings)
    options = session.retry_options(max_attempts=9)

    assert options.max_attempts == 9
    assert options.initial_delay_ms == 10
    assert options.auth_type == "oauth-personal"
    assert options.on_persistent_429 == session.handle_persistent_429


@pytest.mark.asyncio
async def test_accepting_fallback_switches_model(test_settings):
    simulator = RateLimitSimulator(enabled=True)
    session = _session(test_settings, answer=True, simulator=simulator)

    assert await session.handle_persistent_429("oauth-personal") is True

    assert session.model == "gemini-2.5-flash"
    assert session.in_fallback_mode is True
    assert simulator.should_simulate() is False
    assert session.confirmer.notices == ["[INFO] Switched to gemini-2.5-flash for this session."]


@pytest.mark.asyncio
async def test_declining_fallback_keeps_model(test_settings):
    session = _session(test_settings, answer=False)

    assert await session.handle_persistent_429("oauth-personal") is False

    assert session.model == "gemini-2.5-pro"
    assert session.in_fallback_mode is False


@pytest.mark.asyncio
async def test_no_offer_when_already_on_fallback_model(test_settings):
    session = _session(test_settings, model="gemini-2.5-flash")

    assert await session.handle_persistent_429("oauth-personal") is False
    assert session.confirmer.questions == []


@pytest.mark.asyncio
async def test_invoke_uses_current_model_after_fallback(test_settings):
    session = _session(test_settings, answer=True, simulator=RateLimitSimulator(enabled=True))
    models_seen = []

    async def call_model():
        models_seen.append(session.model)
        return f"answer from {session.model}"

    result = await session.invoke(call_model)

    assert result == "answer from gemini-2.5-flash"
    assert models_seen == ["gemini-2.5-flash"]
    assert session.simulator.request_count == 3


@pytest.mark.asyncio
async def test_resolve_effective_model_adopts_probe_result(test_settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(429))
    session = _session(test_settings, answer=True)

    async with httpx.AsyncClient(transport=transport) as client:
        model = await session.resolve_effective_model("key", http_client=client)

    assert model == "gemini-2.5-flash"
    assert session.model == "gemini-2.5-flash"
    assert session.in_fallback_mode is True


@pytest.mark.asyncio
async def test_close_cancels_pending_backoff(test_settings, make_status_error):
    test_settings.RETRY_INITIAL_DELAY_MS = 10_000
    test_settings.RETRY_MAX_DELAY_MS = 30_000
    session = _session(test_settings, auth_type=AuthType.USE_GEMINI)
    operation = AsyncMock(side_effect=make_status_error(503))

    task = asyncio.create_task(session.invoke(operation))
    while operation.await_count == 0:
        await asyncio.sleep(0)
    await asyncio.sleep(0)

    session.close()

    with pytest.raises(RetryCancelled):
        await asyncio.wait_for(task, timeout=1)
    assert operation.await_count == 1
