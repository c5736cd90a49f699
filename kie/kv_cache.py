"""In-memory cache of key-value entries indexed by domain, project and labels."""

from __future__ import annotations

import json
import logging
import math
import threading
import time
from collections.abc import Callable, Iterable, Mapping

from cachetools import TTLCache

from kie.model import KVDoc
from kie.stringutil import format_map

logger = logging.getLogger(__name__)

CACHE_EXPIRATION_TIME = 10 * 60.0
"""Seconds a cached entry stays valid."""


class KvCache:
    """Entries by id, with expiry, and the ids of entries under each label set."""

    def __init__(
        self,
        ttl: float = CACHE_EXPIRATION_TIME,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.RLock()
        self._docs: TTLCache = TTLCache(maxsize=math.inf, ttl=ttl, timer=timer)
        self._id_sets: dict[str, set[str]] = {}
        self.revision = 0

    def cache_put(self, values: Iterable[bytes | str]) -> None:
        """Store each encoded entry; undecodable ones are skipped."""
        for raw in values:
            try:
                doc = self.get_kv_doc(raw)
            except ValueError as exc:
                logger.error("failed to unmarshal kv, err %s", exc)
                continue
            self.store_kv_doc(doc.id, doc)
            cache_key = self.get_cache_key(doc.domain, doc.project, doc.labels)
            with self._lock:
                ids = self._id_sets.get(cache_key)
                if ids is None:
                    self._id_sets[cache_key] = {doc.id}
                    logger.info("cacheKey %s not exists", cache_key)
                else:
                    ids.add(doc.id)

    def cache_delete(self, values: Iterable[bytes | str]) -> None:
        """Remove each encoded entry; undecodable ones are skipped."""
        for raw in values:
            try:
                doc = self.get_kv_doc(raw)
            except ValueError as exc:
                logger.error("failed to unmarshal kv, err %s", exc)
                continue
            self.delete_kv_doc(doc.id)
            cache_key = self.get_cache_key(doc.domain, doc.project, doc.labels)
            with self._lock:
                ids = self._id_sets.get(cache_key)
                if ids is None:
                    logger.error("cacheKey %s not exists", cache_key)
                    continue
                ids.discard(doc.id)

    def load_kv_id_set(self, cache_key: str) -> set[str] | None:
        """Return the ids stored under a cache key, or None if the key is unknown."""
        with self._lock:
            return self._id_sets.get(cache_key)

    def store_kv_id_set(self, cache_key: str, kv_ids: set[str]) -> None:
        """Replace the ids stored under a cache key."""
        with self._lock:
            self._id_sets[cache_key] = kv_ids

    def load_kv_doc(self, kv_id: str) -> KVDoc | None:
        """Return a cached entry, or None if absent or expired."""
        with self._lock:
            return self._docs.get(kv_id)

    def store_kv_doc(self, kv_id: str, kv_doc: KVDoc) -> None:
        """Cache an entry with the default expiry."""
        with self._lock:
            self._docs[kv_id] = kv_doc

    def delete_kv_doc(self, kv_id: str) -> None:
        """Drop an entry if cached."""
        with self._lock:
            self._docs.pop(kv_id, None)

    def doc_count(self) -> int:
        """Number of unexpired cached entries."""
        with self._lock:
            self._docs.expire()
            return len(self._docs)

    def get_kv_doc(self, raw: bytes | str) -> KVDoc:
        """Decode a JSON-encoded entry, raising ValueError if it is malformed."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("kv document must be a JSON object")
        try:
            return KVDoc.from_dict(data)
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"invalid kv document: {exc}") from exc

    def get_cache_key(
        self, domain: str, project: str, labels: Mapping[str, str] | None
    ) -> str:
        """Key of the id set for a domain, project and label set."""
        return "/".join(["", domain, project, format_map(labels)])