"""Caller identification and permission checks on key-value entries."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from kie.auth.decision import NoPermissionError, ResourceScope, Role, allow
from kie.config import RBAC
from kie.model import KVDoc

logger = logging.getLogger(__name__)

ROOT_NAME = "root"
ROLE_ADMIN = "admin"
CONFIG_RESOURCE_TYPE = "config"

VERB_GET = "get"
VERB_CREATE = "create"
VERB_UPDATE = "update"
VERB_DELETE = "delete"


class AccountDeletedError(PermissionError):
    """The account that owns the token no longer exists."""


@dataclass
class Account:
    """The caller as described by its token."""

    name: str = ""
    roles: list[str] = field(default_factory=list)


class AuthStore(Protocol):
    """Looks up roles and accounts."""

    def get_role(self, name: str) -> Role: ...

    def account_exist(self, name: str) -> bool: ...


def identify(account: Account | None, store: AuthStore) -> Account:
    """Check that the caller carries roles and that its account still exists."""
    if account is None:
        logger.error("get account from token failed")
        raise NoPermissionError("no account found in token")
    if not account.roles:
        logger.error("no role found in token")
        raise NoPermissionError("no role found in token")
    _account_exist(store, account.name)
    return account


def _account_exist(store: AuthStore, user: str) -> None:
    # root passes without lookup so that it works during initialisation
    if user == ROOT_NAME:
        return
    if not store.account_exist(user):
        raise AccountDeletedError(f"account [{user}] is deleted")


def _filter_roles(role_list: Iterable[str]) -> tuple[bool, list[str]]:
    normal: list[str] = []
    for role in role_list:
        if role == ROLE_ADMIN:
            return True, normal
        normal.append(role)
    return False, normal


def check_perm(
    account: Account | None, store: AuthStore, target_resource: ResourceScope
) -> list[dict[str, str]]:
    """Return the permitted label maps; an empty list means no restriction."""
    caller = identify(account, store)
    has_admin, normal_roles = _filter_roles(caller.roles)
    if has_admin:
        return []
    return allow(store, normal_roles, target_resource)


def check_enable(rbac: RBAC, account: Account | None) -> bool:
    """Whether access control applies to this request."""
    if not rbac.enabled:
        return False
    if not rbac.allow_miss_token:
        return True
    return account is not None


def _config_perms(verb: str, labels: Mapping[str, str] | None) -> ResourceScope:
    labels_list = [dict(labels)] if labels else []
    return ResourceScope(type=CONFIG_RESOURCE_TYPE, labels=labels_list, verb=verb)


def filter_kv_list(
    rbac: RBAC, account: Account | None, store: AuthStore, kvs: list[KVDoc]
) -> list[KVDoc]:
    """Keep the entries the caller may read; any failed check yields no entries."""
    if not check_enable(rbac, account):
        return kvs
    try:
        labels = check_perm(account, store, _config_perms(VERB_GET, None))
    except Exception as exc:  # a failed check hides everything
        logger.warning("permission check failed: %s", exc)
        return []
    if not labels:
        return kvs
    from kie.auth.decision import filter_kvs

    return filter_kvs(kvs, labels)


def _check_kv(
    verb: str, rbac: RBAC, account: Account | None, store: AuthStore, kv: KVDoc
) -> None:
    if not check_enable(rbac, account):
        return
    check_perm(account, store, _config_perms(verb, kv.labels))


def check_get_kv(rbac: RBAC, account: Account | None, store: AuthStore, kv: KVDoc) -> None:
    """Raise unless the caller may read the entry."""
    _check_kv(VERB_GET, rbac, account, store, kv)


def check_create_kv(rbac: RBAC, account: Account | None, store: AuthStore, kv: KVDoc) -> None:
    """Raise unless the caller may create the entry."""
    _check_kv(VERB_CREATE, rbac, account, store, kv)


def check_delete_kv(rbac: RBAC, account: Account | None, store: AuthStore, kv: KVDoc) -> None:
    """Raise unless the caller may delete the entry."""
    _check_kv(VERB_DELETE, rbac, account, store, kv)


def check_update_kv(rbac: RBAC, account: Account | None, store: AuthStore, kv: KVDoc) -> None:
    """Raise unless the caller may update the entry."""
    _check_kv(VERB_UPDATE, rbac, account, store, kv)