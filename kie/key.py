"""Storage key layout."""

from __future__ import annotations

_SPLIT = "/"
_KEY_KV = "kvs"
_KEY_COUNTER = "counter"
_KEY_HISTORY = "kv-history"
_KEY_TRACK = "track"
_SYNCER = "syncer"
_TASK = "task"
_TOMBSTONE = "tombstone"

_SYNC_ROOT = _SPLIT + _SYNCER + _SPLIT + _TASK
_TOMBSTONE_ROOT = _SPLIT + _TOMBSTONE


def _join(*parts: str) -> str:
    return _SPLIT.join(parts)


def task_key(domain: str, project: str, task_id: str, timestamp: int) -> str:
    """Key of a sync task."""
    return _join(_SYNC_ROOT, domain, project, str(timestamp), task_id)


def tombstone_key(domain: str, project: str, resource_type: str, resource_id: str) -> str:
    """Key of a tombstone left by a deleted resource."""
    return _join(_TOMBSTONE_ROOT, domain, project, resource_type, resource_id)


def kv(domain: str, project: str, kv_id: str) -> str:
    """Key of one key-value entry."""
    return _join(_KEY_KV, domain, project, kv_id)


def kv_list(domain: str, project: str) -> str:
    """Prefix of all entries of a project, or of a domain when project is empty."""
    if not project:
        return _join(_KEY_KV, domain, "")
    return _join(_KEY_KV, domain, project, "")


def counter(name: str, domain: str) -> str:
    """Key of a named counter."""
    return _join(_KEY_COUNTER, domain, name)


def his(domain: str, project: str, kv_id: str, update_revision: int) -> str:
    """Key of one history revision of an entry."""
    return _join(_KEY_HISTORY, domain, project, kv_id, str(update_revision))


def his_list(domain: str, project: str, kv_id: str) -> str:
    """Prefix of all history revisions of an entry."""
    return _join(_KEY_HISTORY, domain, project, kv_id, "")


def track(domain: str, project: str, revision: str, session_id: str) -> str:
    """Key of one polling record."""
    return _join(_KEY_TRACK, domain, project, revision, session_id)


def track_list(domain: str, project: str) -> str:
    """Prefix of all polling records of a project."""
    return _join(_KEY_TRACK, domain, project, "")