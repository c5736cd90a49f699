"""Storage plugin registry, storage errors and helpers shared by storage back ends."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from kie.model import KVDoc

logger = logging.getLogger(__name__)

DEFAULT_VALUE_TYPE = "text"
MAX_HISTORY_NUM = 100
CONFIG_RESOURCE = "config"


class KeyNotExistsError(LookupError):
    """No key-value entry matched."""

    def __init__(self, message: str = "can not find any key value") -> None:
        super().__init__(message)


class RecordNotExistsError(LookupError):
    """No polling record matched."""

    def __init__(self, message: str = "can not find any polling data") -> None:
        super().__init__(message)


class RevisionNotExistError(LookupError):
    """The revision counter does not exist."""

    def __init__(self, message: str = "revision does not exist") -> None:
        super().__init__(message)


class KVAlreadyExistsError(ValueError):
    """An entry with the same identity is already stored."""

    def __init__(self, message: str = "kv already exists") -> None:
        super().__init__(message)


class TooManyError(ValueError):
    """A lookup that must be unique matched more than one entry."""

    def __init__(self, message: str = "key with labels should be only one") -> None:
        super().__init__(message)


class Broker(Protocol):
    """Access to the data access objects of one kind of storage."""

    def get_revision_dao(self) -> Any: ...

    def get_history_dao(self) -> Any: ...

    def get_track_dao(self) -> Any: ...

    def get_kv_dao(self) -> Any: ...

    def get_rbac_dao(self) -> Any: ...


BrokerFactory = Callable[[], Broker]

_plugins: dict[str, BrokerFactory] = {}
_broker: Broker | None = None


def register_plugin(name: str, factory: BrokerFactory) -> None:
    """Make a storage kind available under ``name``."""
    _plugins[name] = factory


def init(kind: str) -> Broker:
    """Create the broker of the named storage kind and make it current."""
    global _broker
    factory = _plugins.get(kind)
    if factory is None:
        raise ValueError(f"do not support '{kind}'")
    _broker = factory()
    logger.info("use %s as storage", kind)
    return _broker


def get_broker() -> Broker:
    """Return the current broker."""
    if _broker is None:
        raise RuntimeError("storage is not initialised")
    return _broker


def clear_part(kv: KVDoc) -> None:
    """Remove the domain, project and label format of an entry."""
    kv.domain = ""
    kv.project = ""
    kv.label_format = ""


def tombstone_id(kv: KVDoc) -> str:
    """Resource id of an entry's tombstone: its key and label format."""
    return kv.key + "/" + kv.label_format