"""A counting semaphore that bounds concurrent work."""

from __future__ import annotations

import threading

DEFAULT_CONCURRENCY = 500
MAX_CONCURRENCY = 65535


class Semaphore:
    """Limits concurrency to a fixed number of tickets, at most 65535."""

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 0:
            raise ValueError("concurrency must not be negative")
        self.capacity = min(concurrency, MAX_CONCURRENCY)
        self._tickets = threading.BoundedSemaphore(self.capacity)

    def acquire(self, timeout: float | None = None) -> bool:
        """Take a ticket, waiting up to ``timeout`` seconds (forever if None)."""
        return self._tickets.acquire(timeout=timeout)

    def release(self) -> None:
        """Give a ticket back; releasing more than were taken raises ValueError."""
        self._tickets.release()

    def __enter__(self) -> Semaphore:
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()