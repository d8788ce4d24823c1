import asyncio
from typing import Awaitable, Callable, Iterator
from kwork.types.settings import Settings


class RetryPolicy:
    """Bounded exponential backoff for conflicting status writes.

    ``max_attempts`` counts every write attempt, the first one included, so a
    policy with ``max_attempts=1`` never retries.
    """

    max_attempts: int
    initial_delay: float
    factor: float
    max_delay: float

    def __init__(
        self,
        max_attempts: int = 5,
        initial_delay: float = 0.01,
        factor: float = 2.0,
        max_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if initial_delay < 0 or max_delay < 0:
            raise ValueError("Retry delays must be non-negative")
        if factor < 1:
            raise ValueError(f"Backoff factor must be at least 1, got {factor}")
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.factor = factor
        self.max_delay = max_delay
        self.sleep = sleep

    @classmethod
    def from_settings(cls, conf: Settings, **kwargs) -> "RetryPolicy":
        return cls(
            max_attempts=conf.status_update_max_attempts,
            initial_delay=conf.status_update_initial_delay_seconds,
            factor=conf.status_update_backoff_factor,
            max_delay=conf.status_update_max_delay_seconds,
            **kwargs,
        )

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry; one fewer than ``max_attempts``."""
        delay = self.initial_delay
        for _ in range(self.max_attempts - 1):
            yield min(delay, self.max_delay)
            delay *= self.factor

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(max_attempts={self.max_attempts}, "
            f"initial_delay={self.initial_delay}, factor={self.factor}, "
            f"max_delay={self.max_delay})"
        )
