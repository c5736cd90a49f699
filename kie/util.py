"""Label comparison and service error helpers."""

from __future__ import annotations

from collections.abc import Mapping

ERR_INTERNAL = 500
"""Error code of an internal service error."""


class ServiceError(Exception):
    """An error carrying a service error code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def is_equivalent_label(
    x: Mapping[str, str] | None, y: Mapping[str, str] | None
) -> bool:
    """Whether two label maps are equal; a missing map equals an empty one."""
    if not x and not y:
        return True
    return dict(x or {}) == dict(y or {})


def is_contain_label(x: Mapping[str, str] | None, y: Mapping[str, str] | None) -> bool:
    """Whether every label of ``y`` is present in ``x`` with the same value."""
    x = x or {}
    y = y or {}
    if len(x) < len(y):
        return False
    return all(k in x and x[k] == v for k, v in y.items())


def svc_err(err: BaseException) -> ServiceError:
    """Return ``err`` as a service error, wrapping others as internal errors."""
    if isinstance(err, ServiceError):
        return err
    return ServiceError(ERR_INTERNAL, str(err))