"""Validation rules for requests and stored documents."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from kie.model import GetKVRequest, KVDoc, ListKVRequest, UpdateKVRequest, UploadKVRequest


def _full(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda text: compiled.fullmatch(text) is not None


_RULES: dict[str, Callable[[str], bool]] = {
    "key": _full(r"[a-zA-Z0-9._:-]+"),
    "getKey": _full(
        r"[a-zA-Z0-9._:-]*|beginWith\([a-zA-Z0-9._:-]*\)|wildcard\([a-zA-Z0-9*._:-]*\)"
    ),
    "commonName": _full(r"[a-zA-Z0-9]*|[a-zA-Z0-9][a-zA-Z0-9_\-.]*[a-zA-Z0-9]"),
    "valueType": _full(r"(?:ini|json|text|yaml|properties|xml)?"),
    "kvStatus": _full(r"(?:enabled|disabled)?"),
    "value": lambda text: True,
    "labelK": _full(r"[a-zA-Z0-9]{1,32}|[a-zA-Z0-9][a-zA-Z0-9_\-.]{1,30}[a-zA-Z0-9]"),
    "labelV": _full(r"[a-zA-Z0-9]{0,160}|[a-zA-Z0-9][a-zA-Z0-9_\-.]{0,158}[a-zA-Z0-9]"),
    "check": _full(r"[\x00-\x7F]*"),
}


class ValidationError(ValueError):
    """Raised when an object breaks one or more validation rules."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class _Text:
    name: str
    min_len: int | None = None
    max_len: int | None = None
    rule: str | None = None

    def check(self, value: Any) -> str | None:
        text = value or ""
        if self.min_len is not None and len(text) < self.min_len:
            return f"{self.name}: length must be at least {self.min_len}"
        if self.max_len is not None and len(text) > self.max_len:
            return f"{self.name}: length must be at most {self.max_len}"
        if self.rule is not None and not _RULES[self.rule](text):
            return f"{self.name}: does not satisfy rule '{self.rule}'"
        return None


@dataclass(frozen=True)
class _Number:
    name: str
    min_value: int | None = None
    max_value: int | None = None

    def check(self, value: Any) -> str | None:
        number = value or 0
        if self.min_value is not None and number < self.min_value:
            return f"{self.name}: must be at least {self.min_value}"
        if self.max_value is not None and number > self.max_value:
            return f"{self.name}: must be at most {self.max_value}"
        return None


@dataclass(frozen=True)
class _Labels:
    name: str
    max_entries: int

    def check(self, value: Mapping[str, str] | None) -> str | None:
        labels = value or {}
        if len(labels) > self.max_entries:
            return f"{self.name}: at most {self.max_entries} labels are allowed"
        for label_key, label_value in labels.items():
            if not _RULES["labelK"](label_key):
                return f"{self.name}: invalid label key {label_key!r}"
            if not _RULES["labelV"](label_value):
                return f"{self.name}: invalid label value {label_value!r}"
        return None


def _project() -> _Text:
    return _Text("project", 1, 256, "commonName")


def _domain() -> _Text:
    return _Text("domain", 1, 256, "commonName")


_SCHEMAS: dict[type, tuple[Any, ...]] = {
    KVDoc: (
        _Text("key", 1, 2048, "key"),
        _Text("value", None, 131072, "value"),
        _Text("value_type", rule="valueType"),
        _Text("checker", None, 1048576, "check"),
        _project(),
        _Text("status", rule="kvStatus"),
        _Labels("labels", 6),
        _domain(),
    ),
    UpdateKVRequest: (
        _Text("id", 1, 64),
        _Text("value", None, 131072, "value"),
        _project(),
        _domain(),
        _Text("status", rule="kvStatus"),
    ),
    GetKVRequest: (
        _project(),
        _domain(),
        _Text("id", 1, 64),
    ),
    ListKVRequest: (
        _project(),
        _domain(),
        _Text("key", None, 128, "getKey"),
        _Text("value", None, 128),
        _Labels("labels", 8),
        _Number("offset", 0),
        _Number("limit", 0, 100),
        _Text("status", rule="kvStatus"),
    ),
    UploadKVRequest: (
        _domain(),
        _project(),
    ),
}


def validate(obj: Any) -> None:
    """Check ``obj`` against its rules, raising ValidationError on any violation."""
    schema = next((_SCHEMAS[cls] for cls in type(obj).__mro__ if cls in _SCHEMAS), None)
    if schema is None:
        raise TypeError(f"no validation rules for {type(obj).__name__}")
    errors = [msg for rule in schema if (msg := rule.check(getattr(obj, rule.name)))]
    if errors:
        raise ValidationError(errors)