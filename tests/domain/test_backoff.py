"""Tests for retry_with_backoff."""

from unittest.mock import AsyncMock, call, patch

import pytest

from nosecone.domain.backoff import retry_with_backoff


class Flaky:
    """Fails ``failures`` times, then returns ``result``."""

    def __init__(self, failures: int, result="ok"):
        self.failures = failures
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError(f"failure {self.calls}")
        return self.result


@pytest.fixture
def sleep():
    with patch("nosecone.domain.backoff.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock


@pytest.mark.asyncio
async def test_first_try_success_no_sleep(sleep):
    op = Flaky(0)
    assert await retry_with_backoff(op) == "ok"
    assert op.calls == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("k", [1, 2, 3])
async def test_succeeds_after_k_failures(sleep, k):
    op = Flaky(k, result={"n": k})
    result = await retry_with_backoff(op, max_retries=3, base_delay=1.0)
    assert result == {"n": k}
    assert op.calls == k + 1
    assert sleep.await_args_list == [call(1.0 * 2 ** i) for i in range(k)]


@pytest.mark.asyncio
async def test_always_failing_reraises_last_error(sleep):
    op = Flaky(100)
    with pytest.raises(RuntimeError, match="failure 4"):
        await retry_with_backoff(op)
    assert op.calls == 4
    assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0, 4.0]
    assert sum(c.args[0] for c in sleep.await_args_list) == 7.0


@pytest.mark.asyncio
async def test_custom_budget_and_base_delay(sleep):
    op = Flaky(100)
    with pytest.raises(RuntimeError):
        await retry_with_backoff(op, max_retries=1, base_delay=0.5)
    assert op.calls == 2
    assert sleep.await_args_list == [call(0.5)]


@pytest.mark.asyncio
async def test_zero_retries_single_attempt(sleep):
    op = Flaky(1)
    with pytest.raises(RuntimeError):
        await retry_with_backoff(op, max_retries=0)
    assert op.calls == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_negative_retries_rejected():
    with pytest.raises(ValueError):
        await retry_with_backoff(Flaky(0), max_retries=-1)
