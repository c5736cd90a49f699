"""Cache of query results shared by long-polling requests."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from kie.model import KVResponse
from kie.util import ServiceError


@dataclass
class DBResult:
    """The outcome of one database query: entries, error and revision."""

    kvs: KVResponse | None = None
    err: ServiceError | None = None
    rev: int = 0


class LongPollingCache:
    """Thread-safe map from topic to the latest query result."""

    def __init__(self) -> None:
        self._results: dict[str, DBResult] = {}
        self._lock = threading.Lock()

    def read(self, topic: str) -> tuple[int, KVResponse | None]:
        """Return ``(revision, entries)`` for a topic, or ``(0, None)`` if absent.

        A cached error is raised.
        """
        with self._lock:
            result = self._results.get(topic)
        if result is None:
            return 0, None
        if result.err is not None:
            raise result.err
        return result.rev, result.kvs

    def write(self, topic: str, result: DBResult) -> None:
        """Store the result of a query under a topic."""
        with self._lock:
            self._results[topic] = result


_polling_cache = LongPollingCache()


def cached_kv() -> LongPollingCache:
    """Return the process-wide cache."""
    return _polling_cache