import asyncio

import pytest

from aura_core.domain.exceptions import RequestCancelledError
from aura_core.providers.resilience import CancellationToken, RetryPolicy


def test_retry_policy_delays():
    assert RetryPolicy().delays() == [1.0, 2.0]
    assert RetryPolicy(max_attempts=1).delays() == []
    assert RetryPolicy(max_attempts=4, initial_delay=0.5).delays() == [0.5, 1.0, 2.0]


def test_retry_policy_rejects_zero_attempts():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


def test_guard_returns_result():
    async def scenario():
        token = CancellationToken()

        async def work():
            return "ok"

        return await token.guard(work())

    assert asyncio.run(scenario()) == "ok"


def test_guard_aborts_on_cancel():
    async def scenario():
        token = CancellationToken()
        started = asyncio.Event()
        aborted = asyncio.Event()

        async def hang():
            started.set()
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                aborted.set()
                raise

        task = asyncio.ensure_future(token.guard(hang()))
        await started.wait()
        token.cancel()
        with pytest.raises(RequestCancelledError):
            await task
        return aborted.is_set()

    assert asyncio.run(scenario()) is True


def test_guard_when_already_cancelled():
    async def scenario():
        token = CancellationToken()
        token.cancel()

        async def work():
            return "never"

        with pytest.raises(RequestCancelledError):
            await token.guard(work())

    asyncio.run(scenario())
