"""
TagShip — Retrying call executor.

Runs one zero-argument async operation under a bounded retry budget
(2 retries ⇒ at most 3 attempts). Each failure is classified once:

  terminal  → stop now, FAILED_TERMINAL
  retryable → back off and try again, FAILED_EXHAUSTED once the budget is spent

Backoff before retry n (0-based) is min_delay * factor**n, optionally
multiplied by a random factor in [1, 2), capped at max_delay.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from tagship.models.outcome import CallOutcome, CallState, Failed, Succeeded
from tagship.remote.classify import classify_error
from tagship.utils.logging import logger

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]

DEFAULT_RETRIES = 2


@dataclass(frozen=True)
class RetryPolicy:
    retries: int = DEFAULT_RETRIES
    min_delay: float = 1.0
    factor: float = 2.0
    max_delay: float = 30.0
    randomize: bool = True

    @property
    def max_attempts(self) -> int:
        return max(0, self.retries) + 1

    def delay_for(self, retry_index: int) -> float:
        delay = self.min_delay * (self.factor ** retry_index)
        if self.randomize:
            delay *= 1 + random.random()
        return min(delay, self.max_delay)


class RetryingCall:
    """One remote operation and its attempt state."""

    def __init__(self, name: str, operation: Operation[T], policy: RetryPolicy | None = None):
        self.name = name
        self.operation = operation
        self.policy = policy or RetryPolicy()
        self.state = CallState.ATTEMPTING
        self.attempts = 0

    async def run(self) -> CallOutcome[Any]:
        max_attempts = self.policy.max_attempts
        while True:
            self.attempts += 1
            try:
                payload = await self.operation()
            except Exception as exc:
                classified = classify_error(exc)

                if classified.is_terminal:
                    self.state = CallState.FAILED_TERMINAL
                    logger.warning(
                        "  %s failed terminally (attempt %d/%d): %s",
                        self.name, self.attempts, max_attempts, classified.message,
                    )
                    return Failed(classified, self.attempts, exc)

                if self.attempts >= max_attempts:
                    self.state = CallState.FAILED_EXHAUSTED
                    logger.warning(
                        "  %s gave up after %d attempts: %s",
                        self.name, self.attempts, classified.message,
                    )
                    return Failed(classified, self.attempts, exc)

                delay = self.policy.delay_for(self.attempts - 1)
                logger.warning(
                    "  Retrying %s in %.1fs (attempt %d/%d failed: %s)",
                    self.name, delay, self.attempts, max_attempts, classified.message,
                )
                await asyncio.sleep(delay)
                continue

            self.state = CallState.SUCCEEDED
            return Succeeded(payload, self.attempts)


async def call_with_retry(
    name: str,
    operation: Operation[T],
    policy: RetryPolicy | None = None,
) -> T:
    """Run ``operation`` under ``policy`` and return its payload.

    Raises TerminalRemoteError or TransientRemoteError on failure.
    """
    outcome = await RetryingCall(name, operation, policy).run()
    return outcome.unwrap()
