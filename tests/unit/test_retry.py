"""Unit tests for the retrying call executor."""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import remote_error
from tagship.errors import TerminalRemoteError, TransientRemoteError
from tagship.models.outcome import CallState, Failed, Succeeded
from tagship.remote.retry import RetryingCall, RetryPolicy, call_with_retry


class TestRetryPolicy:
    def test_defaults(self):
        p = RetryPolicy()
        assert p.retries == 2
        assert p.max_attempts == 3

    def test_exponential_schedule(self):
        p = RetryPolicy(min_delay=1.0, factor=2.0, randomize=False)
        assert [p.delay_for(i) for i in range(3)] == [1.0, 2.0, 4.0]

    def test_capped(self):
        p = RetryPolicy(min_delay=10.0, max_delay=15.0, randomize=False)
        assert p.delay_for(3) == 15.0

    def test_randomized_within_bounds(self):
        p = RetryPolicy(min_delay=1.0, randomize=True)
        for _ in range(20):
            assert 2.0 <= p.delay_for(1) < 4.0

    def test_negative_retries_still_attempts_once(self):
        assert RetryPolicy(retries=-1).max_attempts == 1


@pytest.mark.asyncio
class TestRetryingCall:
    @pytest.mark.parametrize("code", [401, 404, 422])
    async def test_terminal_codes_attempt_once(self, code, fast_policy):
        op = AsyncMock(side_effect=remote_error(code, "nope"))
        call = RetryingCall("op", op, fast_policy)
        outcome = await call.run()
        assert op.await_count == 1
        assert isinstance(outcome, Failed)
        assert outcome.state == CallState.FAILED_TERMINAL
        assert call.state == CallState.FAILED_TERMINAL
        assert outcome.error.message == f"{code} {code}: nope ()"

    @pytest.mark.parametrize("code", [500, 502, 503, 429, None])
    async def test_retryable_codes_use_full_budget(self, code, fast_policy):
        op = AsyncMock(side_effect=remote_error(code, "flaky"))
        outcome = await RetryingCall("op", op, fast_policy).run()
        assert op.await_count == 3
        assert outcome.state == CallState.FAILED_EXHAUSTED
        assert outcome.attempts == 3

    async def test_success_after_transient_failures(self, fast_policy):
        op = AsyncMock(side_effect=[remote_error(502), remote_error(503), {"id": 1}])
        outcome = await RetryingCall("op", op, fast_policy).run()
        assert isinstance(outcome, Succeeded)
        assert outcome.payload == {"id": 1}
        assert outcome.attempts == 3

    async def test_success_first_try(self, fast_policy):
        op = AsyncMock(return_value="ok")
        call = RetryingCall("op", op, fast_policy)
        outcome = await call.run()
        assert outcome.unwrap() == "ok"
        assert call.state == CallState.SUCCEEDED
        assert op.await_count == 1

    async def test_terminal_after_transient_stops(self, fast_policy):
        op = AsyncMock(side_effect=[remote_error(500), remote_error(404, "Not Found")])
        outcome = await RetryingCall("op", op, fast_policy).run()
        assert op.await_count == 2
        assert outcome.state == CallState.FAILED_TERMINAL

    async def test_backs_off_between_attempts(self):
        policy = RetryPolicy(min_delay=1.0, randomize=False)
        op = AsyncMock(side_effect=remote_error(500))
        with patch("tagship.remote.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await RetryingCall("op", op, policy).run()
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    async def test_terminal_does_not_sleep(self):
        op = AsyncMock(side_effect=remote_error(401))
        with patch("tagship.remote.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await RetryingCall("op", op, RetryPolicy()).run()
        sleep.assert_not_awaited()


@pytest.mark.asyncio
class TestCallWithRetry:
    async def test_returns_payload(self, fast_policy):
        assert await call_with_retry("op", AsyncMock(return_value=5), fast_policy) == 5

    async def test_terminal_raises_terminal(self, fast_policy):
        op = AsyncMock(side_effect=remote_error(422, "Validation Failed", "already_exists"))
        with pytest.raises(TerminalRemoteError) as info:
            await call_with_retry("op", op, fast_policy)
        assert info.value.message == "422 422: Validation Failed (already_exists)"
        assert info.value.raw_code == 422

    async def test_exhausted_raises_transient(self, fast_policy):
        op = AsyncMock(side_effect=remote_error(500, "Server Error"))
        with pytest.raises(TransientRemoteError) as info:
            await call_with_retry("op", op, fast_policy)
        assert info.value.attempts == 3
        assert op.await_count == 3
