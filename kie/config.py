"""Server configuration loaded from a YAML file and the command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class TLS:
    """TLS settings of a client connection."""

    ssl_enabled: bool = False
    root_ca: str = ""
    cert_file: str = ""
    key_file: str = ""
    cert_pwd_file: str = ""
    verify_peer: bool = False


@dataclass
class DB(TLS):
    """Persistence settings."""

    uri: str = ""
    kind: str = ""
    pool_size: int = 0
    timeout: str = ""


@dataclass
class RBAC:
    """Role-based access control settings."""

    enabled: bool = False
    allow_miss_token: bool = False
    pub_key_file: str = ""


@dataclass
class Sync:
    """Data synchronisation settings."""

    enabled: bool = False


_DB_FIELDS = {
    "sslEnabled": ("ssl_enabled", bool),
    "rootCAFile": ("root_ca", str),
    "certFile": ("cert_file", str),
    "keyFile": ("key_file", str),
    "certPwdFile": ("cert_pwd_file", str),
    "verifyPeer": ("verify_peer", bool),
    "uri": ("uri", str),
    "kind": ("kind", str),
    "poolSize": ("pool_size", int),
    "timeout": ("timeout", str),
}
_RBAC_FIELDS = {
    "enabled": ("enabled", bool),
    "allowMissToken": ("allow_miss_token", bool),
    "rsaPublicKeyFile": ("pub_key_file", str),
}
_SYNC_FIELDS = {"enabled": ("enabled", bool)}
_TOP_FIELDS = {
    "configfile": ("config_file", str),
    "nodename": ("node_name", str),
    "listenpeeraddr": ("listen_peer_addr", str),
    "peeraddr": ("peer_addr", str),
    "advertiseaddr": ("advertise_addr", str),
}


def _coerce(name: str, value: Any, kind: type) -> Any:
    if value is None:
        return kind()
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif not isinstance(value, (dict, list)):
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
    raise ValueError(f"cannot use {value!r} as {kind.__name__} for {name!r}")


def _apply(target: Any, fields: dict[str, tuple[str, type]], data: Any, section: str) -> None:
    if data is None:
        return
    if not isinstance(data, dict):
        raise ValueError(f"section {section!r} must be a mapping")
    for name, value in data.items():
        if name in fields:
            attr, kind = fields[name]
            setattr(target, attr, _coerce(name, value, kind))


@dataclass
class Config:
    """All server settings: file sections and command-line values."""

    db: DB = field(default_factory=DB)
    rbac: RBAC = field(default_factory=RBAC)
    sync: Sync = field(default_factory=Sync)
    config_file: str = ""
    node_name: str = ""
    listen_peer_addr: str = ""
    peer_addr: str = ""
    advertise_addr: str = ""

    def update_from_yaml(self, content: str) -> None:
        """Override settings with those present in a YAML document."""
        data = yaml.safe_load(content)
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError("configuration must be a mapping")
        _apply(self.db, _DB_FIELDS, data.get("db"), "db")
        _apply(self.rbac, _RBAC_FIELDS, data.get("rbac"), "rbac")
        _apply(self.sync, _SYNC_FIELDS, data.get("sync"), "sync")
        _apply(self, _TOP_FIELDS, data, "")


configurations = Config()
"""The process-wide configuration."""


def init() -> None:
    """Load the configuration file named by ``configurations.config_file``."""
    content = Path(configurations.config_file).read_text(encoding="utf-8")
    configurations.update_from_yaml(content)


def get_db() -> DB:
    """Return the persistence settings."""
    return configurations.db


def get_rbac() -> RBAC:
    """Return the access control settings."""
    return configurations.rbac


def get_sync() -> Sync:
    """Return the synchronisation settings."""
    return configurations.sync