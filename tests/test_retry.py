"""Tests for the injectable retry policy."""

import pytest

from resume_designer.config import PipelineSettings
from resume_designer.retry import RetryPolicy, exponential_backoff, fixed_backoff


class TestBackoff:
    def test_fixed(self):
        delay = fixed_backoff(2.0)
        assert [delay(n) for n in (1, 2, 3)] == [2.0, 2.0, 2.0]

    def test_exponential_without_jitter(self):
        delay = exponential_backoff(base_delay=1.0, exponential_base=2.0, max_delay=5.0)
        assert [delay(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 4.0, 5.0]

    def test_exponential_jitter_stays_in_bounds(self):
        delay = exponential_backoff(base_delay=10.0, jitter_factor=0.2)
        for _ in range(50):
            assert 8.0 <= delay(1) <= 12.0


class TestRetryPolicy:
    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts == 3
        assert policy.delay_for(1) == 2.0

    def test_should_retry_until_exhausted(self):
        policy = RetryPolicy(max_attempts=3)
        assert policy.should_retry(1)
        assert policy.should_retry(2)
        assert not policy.should_retry(3)

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    def test_from_settings(self):
        policy = RetryPolicy.from_settings(PipelineSettings(max_attempts=5, retry_delay_seconds=0.5))
        assert policy.max_attempts == 5
        assert policy.delay_for(4) == 0.5

    @pytest.mark.asyncio
    async def test_wait_uses_injected_sleep(self, retry_policy, sleeps):
        await retry_policy.wait(1)
        await retry_policy.wait(2)
        assert sleeps == [2.0, 2.0]

    @pytest.mark.asyncio
    async def test_zero_delay_does_not_sleep(self, sleeps):
        async def _record(delay):
            sleeps.append(delay)

        policy = RetryPolicy(backoff=fixed_backoff(0), sleep=_record)
        await policy.wait(1)
        assert sleeps == []
