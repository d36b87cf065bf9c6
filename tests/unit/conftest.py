"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without waiting on real backoff delays.
"""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def recorded_sleep():
    """AsyncMock standing in for the executor's sleep; delays are in seconds."""
    return AsyncMock(return_value=None)


@pytest.fixture
def sequence_operation():
    """Factory fixture: operation raising/returning items of a sequence in order.

    Exceptions in the sequence are raised, anything else is returned. The
    last item repeats once the sequence is used up.

    Usage:
        def test_something(sequence_operation):
            op = sequence_operation([error, error, "ok"])
    """
    def _create(outcomes: list) -> AsyncMock:
        remaining = list(outcomes)

        async def _call():
            outcome = remaining.pop(0) if len(remaining) > 1 else remaining[0]
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome

        return AsyncMock(side_effect=_call)

    return _create
