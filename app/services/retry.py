"""
Retry with exponential backoff for async calls.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


class RetryExhausted(Exception):
    """Every attempt failed; carries the count and the final error."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


@dataclass
class RetryPolicy:
    """
    Sequential retry policy.

    After failed attempt ``n`` the policy waits
    ``base_delay * multiplier ** (n - 1)`` seconds before the next one,
    so the defaults give delays of 1s and 2s across three attempts.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    sleep: SleepFunc = field(default=asyncio.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * self.multiplier ** (attempt - 1)

    async def run(self, func: Callable[[], Awaitable[T]]) -> T:
        """
        Call ``func`` until it succeeds or the attempts run out.

        Raises:
            RetryExhausted: If every attempt raised one of ``retry_on``.
        """
        for attempt in range(1, self.max_attempts):
            try:
                return await func()
            except self.retry_on as e:
                delay = self.delay_for(attempt)
                logger.warning(
                    "Attempt %d/%d failed (%s: %s), retrying in %.1fs",
                    attempt,
                    self.max_attempts,
                    type(e).__name__,
                    e,
                    delay,
                )
                await self.sleep(delay)

        try:
            return await func()
        except self.retry_on as e:
            raise RetryExhausted(self.max_attempts, e) from e
