"""Ordering of key-value entries."""

from __future__ import annotations

from kie.model import KVDoc


def reverse_by_priority_and_update_rev(kvs: list[KVDoc]) -> None:
    """Sort in place: higher priority first, then newer update revision first."""
    kvs.sort(key=lambda kv: (kv.priority, kv.update_revision), reverse=True)