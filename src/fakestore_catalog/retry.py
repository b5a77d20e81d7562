"""Retry bookkeeping with exponential backoff."""

from dataclasses import dataclass


@dataclass
class RetryEvent:
    """A failed attempt that will be retried."""

    attempt: int
    delay: float  # seconds
    status_code: int | None = None
    error: Exception | None = None


@dataclass
class RetryState:
    """Attempt counter and backoff schedule for one request.

    ``attempt`` is the 1-based number of the attempt in flight. After a
    failure, ``record_failure`` returns the delay to wait before the next
    attempt, or None once ``max_attempts`` have been used.
    """

    max_attempts: int
    base: float = 2.0
    attempt: int = 1

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_attempts

    def next_delay(self) -> float:
        """Backoff after the current attempt fails: base ** attempt."""
        return self.base**self.attempt

    def record_failure(self) -> float | None:
        if not self.can_retry:
            return None
        delay = self.next_delay()
        self.attempt += 1
        return delay
