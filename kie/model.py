"""Data records stored in the database and exchanged over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _put(out: dict[str, Any], name: str, value: Any) -> None:
    """Store ``value`` under ``name`` unless it is empty (JSON ``omitempty``)."""
    if value:
        out[name] = value


def _parse_time(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass
class LabelDoc:
    """A stored set of labels."""

    id: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    format: str = ""
    domain: str = ""
    project: str = ""
    alias: str = ""


@dataclass
class KVDoc:
    """A key-value entry as stored in the database."""

    id: str = ""
    label_format: str = ""
    key: str = ""
    value: str = ""
    value_type: str = ""
    priority: int = 0
    checker: str = ""
    create_revision: int = 0
    update_revision: int = 0
    project: str = ""
    status: str = ""
    create_time: int = 0
    update_time: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    domain: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty optional fields are left out."""
        out: dict[str, Any] = {}
        _put(out, "id", self.id)
        _put(out, "label_format", self.label_format)
        out["key"] = self.key
        out["value"] = self.value
        _put(out, "value_type", self.value_type)
        _put(out, "priority", self.priority)
        _put(out, "check", self.checker)
        _put(out, "create_revision", self.create_revision)
        _put(out, "update_revision", self.update_revision)
        _put(out, "project", self.project)
        _put(out, "status", self.status)
        _put(out, "create_time", self.create_time)
        _put(out, "update_time", self.update_time)
        if self.labels:
            out["labels"] = dict(self.labels)
        _put(out, "domain", self.domain)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KVDoc:
        """Build a document from its JSON form; missing fields take defaults."""
        return cls(
            id=str(data.get("id") or ""),
            label_format=str(data.get("label_format") or ""),
            key=str(data.get("key") or ""),
            value=str(data.get("value") or ""),
            value_type=str(data.get("value_type") or ""),
            priority=int(data.get("priority") or 0),
            checker=str(data.get("check") or ""),
            create_revision=int(data.get("create_revision") or 0),
            update_revision=int(data.get("update_revision") or 0),
            project=str(data.get("project") or ""),
            status=str(data.get("status") or ""),
            create_time=int(data.get("create_time") or 0),
            update_time=int(data.get("update_time") or 0),
            labels={str(k): str(v) for k, v in (data.get("labels") or {}).items()},
            domain=str(data.get("domain") or ""),
        )


@dataclass
class ViewDoc:
    """A user's custom view name and criteria."""

    id: str = ""
    display: str = ""
    project: str = ""
    domain: str = ""
    criteria: str = ""


@dataclass
class PollingDetail:
    """A record of one polling operation."""

    id: str = ""
    session_id: str = ""
    session_group: str = ""
    domain: str = ""
    project: str = ""
    polling_data: dict[str, Any] = field(default_factory=dict)
    revision: str = ""
    ip: str = ""
    user_agent: str = ""
    url_path: str = ""
    response_body: list[KVDoc] = field(default_factory=list)
    response_code: int = 0
    timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty fields are left out."""
        out: dict[str, Any] = {}
        _put(out, "id", self.id)
        _put(out, "session_id", self.session_id)
        _put(out, "session_group", self.session_group)
        _put(out, "domain", self.domain)
        _put(out, "project", self.project)
        if self.polling_data:
            out["polling_data"] = dict(self.polling_data)
        _put(out, "revision", self.revision)
        _put(out, "ip", self.ip)
        _put(out, "user_agent", self.user_agent)
        _put(out, "url_path", self.url_path)
        if self.response_body:
            out["kv"] = [kv.to_dict() for kv in self.response_body]
        _put(out, "response_code", self.response_code)
        if self.timestamp is not None:
            out["timestamp"] = self.timestamp.isoformat()
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PollingDetail:
        """Build a record from its JSON form; missing fields take defaults."""
        return cls(
            id=str(data.get("id") or ""),
            session_id=str(data.get("session_id") or ""),
            session_group=str(data.get("session_group") or ""),
            domain=str(data.get("domain") or ""),
            project=str(data.get("project") or ""),
            polling_data=dict(data.get("polling_data") or {}),
            revision=str(data.get("revision") or ""),
            ip=str(data.get("ip") or ""),
            user_agent=str(data.get("user_agent") or ""),
            url_path=str(data.get("url_path") or ""),
            response_body=[KVDoc.from_dict(kv) for kv in data.get("kv") or []],
            response_code=int(data.get("response_code") or 0),
            timestamp=_parse_time(data.get("timestamp")),
        )


@dataclass
class UpdateKVRequest:
    """Parameters of a key-value update."""

    id: str = ""
    value: str = ""
    project: str = ""
    domain: str = ""
    status: str = ""


@dataclass
class GetKVRequest:
    """Parameters of a key-value lookup by id."""

    project: str = ""
    domain: str = ""
    id: str = ""


@dataclass
class ListKVRequest:
    """Parameters of a key-value listing."""

    project: str = ""
    domain: str = ""
    key: str = ""
    value: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    offset: int = 0
    limit: int = 0
    status: str = ""
    match: str = ""


@dataclass
class UploadKVRequest:
    """Parameters of a bulk key-value upload."""

    domain: str = ""
    project: str = ""
    kvs: list[KVDoc] = field(default_factory=list)
    override: str = ""


@dataclass
class KVRequest:
    """HTTP request body for creating a key-value entry."""

    key: str = ""
    value: str = ""
    value_type: str = ""
    checker: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class KVResponse:
    """A page of key-value entries with the total count."""

    total: int = 0
    data: list[KVDoc] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form."""
        return {"total": self.total, "data": [kv.to_dict() for kv in self.data]}


@dataclass
class LabelDocResponse:
    """A label set."""

    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class LabelHistoryResponse:
    """Key-value entries of a label set at one revision."""

    labels: dict[str, str] = field(default_factory=dict)
    kvs: list[KVDoc] = field(default_factory=list)
    revision: int = 0


@dataclass
class ViewResponse:
    """A list of views with the total count."""

    total: int = 0
    data: list[ViewDoc] = field(default_factory=list)


@dataclass
class DocResponseSingleKey:
    """One key-value entry as documented in the API."""

    create_revision: int = 0
    create_time: str = ""
    id: str = ""
    key: str = ""
    label_format: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    update_revision: int = 0
    update_time: str = ""
    value: str = ""
    value_type: str = ""


@dataclass
class DocResponseGetKey:
    """A list of documented key-value entries."""

    data: list[DocResponseSingleKey] = field(default_factory=list)
    total: int = 0


@dataclass
class DocFailedOfUpload:
    """One entry that failed during an upload."""

    key: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    err_code: int = 0
    err_msg: str = ""


@dataclass
class DocRespOfUpload:
    """Result of an upload: entries stored and entries rejected."""

    success: list[KVDoc] = field(default_factory=list)
    failure: list[DocFailedOfUpload] = field(default_factory=list)


@dataclass
class PollingDataResponse:
    """A list of polling records with the total count."""

    data: list[PollingDetail] = field(default_factory=list)
    total: int = 0


@dataclass
class DocHealthCheck:
    """Health-check response."""

    version: str = ""
    revision: str = ""
    timestamp: int = 0
    total: int = 0