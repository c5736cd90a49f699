"""Role-based permission decisions and label filtering."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from kie.model import KVDoc

logger = logging.getLogger(__name__)


class NoPermissionError(PermissionError):
    """The caller's roles do not permit the requested operation."""


class RoleNotExistError(LookupError):
    """A role named by the caller is not stored."""

    def __init__(self, message: str = "role not exist") -> None:
        super().__init__(message)


@dataclass
class Resource:
    """A resource type, optionally narrowed by labels."""

    type: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class Permission:
    """Verbs allowed on a set of resources."""

    resources: list[Resource] = field(default_factory=list)
    verbs: list[str] = field(default_factory=list)


@dataclass
class Role:
    """A named set of permissions."""

    name: str = ""
    perms: list[Permission] = field(default_factory=list)


@dataclass
class ResourceScope:
    """The resource an operation targets.

    ``labels`` narrows permission checks; a permission key missing from a
    label map is not matched.
    """

    type: str = ""
    labels: list[dict[str, str]] = field(default_factory=list)
    verb: str = ""


class RoleStore(Protocol):
    """Looks roles up by name, raising RoleNotExistError for unknown ones."""

    def get_role(self, name: str) -> Role: ...


def allow(
    role_store: RoleStore, role_list: Iterable[str], target_resource: ResourceScope
) -> list[dict[str, str]]:
    """Decide whether the roles permit the operation.

    Returns the permitted label maps; an empty list means no label restriction.
    Raises NoPermissionError when the operation is not permitted.
    """
    all_perms = _perms_by_roles(role_store, role_list)
    if not all_perms:
        logger.warning("role list has no any permissions")
        raise NoPermissionError("role has no any permissions")
    allowed, label_list = get_label(all_perms, target_resource.type, target_resource.verb)
    if not allowed:
        raise NoPermissionError(
            f"role has no permissions[{target_resource.type}:{target_resource.verb}]"
        )
    if not label_list:
        return []
    if not target_resource.labels:
        return label_list
    filtered = filter_label(target_resource.labels, label_list)
    if not filtered:
        raise NoPermissionError(
            f"role has no permissions[{target_resource.type}:{target_resource.verb}] "
            f"for labels {target_resource.labels}"
        )
    return filtered


def filter_label(
    target_resource_labels: Iterable[Mapping[str, str]],
    perm_label_list: Sequence[dict[str, str]],
) -> list[dict[str, str]]:
    """Return each permission label map matched by a target label map."""
    return [
        label
        for resource_label in target_resource_labels
        for label in perm_label_list
        if label_matched(resource_label, label)
    ]


def label_matched(
    target_resource_label: Mapping[str, str], perm_label: Mapping[str, str]
) -> bool:
    """Whether the target carries every label of the permission with the same value."""
    return all(target_resource_label.get(k, "") == v for k, v in perm_label.items())


def _perms_by_roles(role_store: RoleStore, role_list: Iterable[str]) -> list[Permission]:
    perms: list[Permission] = []
    for name in role_list:
        try:
            role = role_store.get_role(name)
        except RoleNotExistError:
            logger.warning("role [%s] not exist", name)
            continue
        perms.extend(role.perms)
    return perms


def get_label(
    perms: Iterable[Permission], target_resource: str, verb: str
) -> tuple[bool, list[dict[str, str]]]:
    """Check whether any permission allows the verb on the resource type.

    Returns ``(allowed, labels)``; an empty label list from an allowing
    permission lifts every label restriction.
    """
    allowed = False
    label_list: list[dict[str, str]] = []
    for perm in perms:
        perm_allowed, labels = get_label_from_single_perm(perm, target_resource, verb)
        if not perm_allowed:
            continue
        allowed = True
        if not labels:
            return True, []
        label_list.extend(labels)
    return allowed, label_list


def get_label_from_single_perm(
    perm: Permission, target_resource: str, verb: str
) -> tuple[bool, list[dict[str, str]]]:
    """Check one permission; return ``(allowed, labels)``."""
    if not any(v == "*" or v == verb for v in perm.verbs):
        return False, []
    return _resource_labels(perm.resources, target_resource)


def _resource_labels(
    resources: Iterable[Resource], needle: str
) -> tuple[bool, list[dict[str, str]]]:
    allowed = False
    label_list: list[dict[str, str]] = []
    for resource in resources:
        if resource.type != needle:
            continue
        if not resource.labels:
            return True, []
        label_list.append(resource.labels)
        allowed = True
    return allowed, label_list


def filter_kvs(kvs: Iterable[KVDoc], labels_list: Sequence[Mapping[str, str]]) -> list[KVDoc]:
    """Keep the entries whose labels satisfy at least one label map."""
    return [
        kv
        for kv in kvs
        if any(
            all(kv.labels.get(k, "") == v for k, v in labels.items())
            for labels in labels_list
        )
    ]