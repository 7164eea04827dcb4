"""Retry policy for candidate generation attempts."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:
    from .config import PipelineSettings

logger = logging.getLogger(__name__)

BackoffFn = Callable[[int], float]
SleepFn = Callable[[float], Awaitable[None]]


def fixed_backoff(seconds: float = 2.0) -> BackoffFn:
    """Same delay after every failed attempt."""

    def _delay(attempt: int) -> float:
        return seconds

    return _delay


def exponential_backoff(
    base_delay: float = 1.0,
    exponential_base: float = 2.0,
    max_delay: float = 60.0,
    jitter_factor: float = 0.0,
) -> BackoffFn:
    """
    Exponential backoff with optional jitter.

    Args:
        base_delay: Delay after the first failed attempt
        exponential_base: Growth factor per attempt
        max_delay: Upper bound before jitter is applied
        jitter_factor: Random variation, e.g. 0.2 for ±20%

    Returns:
        Function mapping the 1-based failed attempt number to a delay in seconds
    """

    def _delay(attempt: int) -> float:
        delay = min(base_delay * (exponential_base ** max(attempt - 1, 0)), max_delay)
        if jitter_factor:
            delay += delay * jitter_factor * (2 * random.random() - 1)
        return max(delay, 0.0)

    return _delay


@dataclass
class RetryPolicy:
    """How many attempts a candidate gets and how long to wait between them."""

    max_attempts: int = 3
    backoff: BackoffFn = field(default_factory=fixed_backoff)
    sleep: SleepFn = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_settings(cls, settings: "PipelineSettings") -> "RetryPolicy":
        return cls(
            max_attempts=settings.max_attempts,
            backoff=fixed_backoff(settings.retry_delay_seconds),
        )

    def should_retry(self, attempts_used: int) -> bool:
        return attempts_used < self.max_attempts

    def delay_for(self, attempts_used: int) -> float:
        return self.backoff(attempts_used)

    async def wait(self, attempts_used: int) -> None:
        """Sleep for the backoff delay that follows ``attempts_used`` failures."""
        delay = self.delay_for(attempts_used)
        logger.debug(f"Retrying after attempt {attempts_used}/{self.max_attempts} in {delay:.2f}s")
        if delay > 0:
            await self.sleep(delay)
