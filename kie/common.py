"""Request parameter names, headers, messages and limits shared by the server."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal

QUERY_PARAM_Q = "q"
QUERY_BY_LABELS_CON = "&"
QUERY_PARAM_WAIT = "wait"
QUERY_PARAM_REV = "revision"
QUERY_PARAM_MATCH = "match"
QUERY_PARAM_KEY = "key"
QUERY_PARAM_VALUE = "value"
QUERY_PARAM_LABEL = "label"
QUERY_PARAM_STATUS = "status"
QUERY_PARAM_OFFSET = "offset"
QUERY_PARAM_LIMIT = "limit"
PATH_PARAM_KV_ID = "kv_id"
PATH_PARAMETER_PROJECT = "project"
QUERY_PARAM_SESSION_ID = "sessionId"
QUERY_PARAM_SESSION_GROUP = "sessionGroup"
QUERY_PARAM_IP = "ip"
QUERY_PARAM_URL_PATH = "urlPath"
QUERY_PARAM_USER_AGENT = "userAgent"
QUERY_PARAM_OVERRIDE = "override"
QUERY_PARAM_MODE = "mode"

HEADER_DEPTH = "X-Depth"
HEADER_REVISION = "X-Kie-Revision"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"

CONTENT_TYPE_TEXT = "application/text"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_YAML = "text/yaml"

PATTERN_EXACT = "exact"
STATUS_ENABLED = "enabled"
STATUS_DISABLED = "disabled"
MSG_DOMAIN_MUST_NOT_BE_EMPTY = "domain must not be empty"
MSG_DELETE_KV_FAILED = "delete kv failed"
MSG_ILLEGAL_LABELS = (
    "label value can not be empty, "
    "label can not be duplicated, please check query parameters"
)
MSG_ILLEGAL_DEPTH = "X-Depth must be number"
MSG_INVALID_WAIT = (
    "wait param should be formed with number and time unit like 5s,100ms, "
    "and less than 5m"
)
MSG_INVALID_REV = "revision param should be formed with number greater than 0"
RESP_BODY_CONTEXT_KEY = "responseBody"

MAX_WAIT = timedelta(minutes=5)

MSG_DB_ERROR = "database operation error"

_UNIT_SECONDS = {
    "ns": Decimal("0.000000001"),
    "us": Decimal("0.000001"),
    "µs": Decimal("0.000001"),
    "μs": Decimal("0.000001"),
    "ms": Decimal("0.001"),
    "s": Decimal(1),
    "m": Decimal(60),
    "h": Decimal(3600),
}
_TOKEN = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_TOKEN_RE = re.compile(_TOKEN)
_DURATION_RE = re.compile(rf"(?:{_TOKEN})+")


def _parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1m30s`` or ``100ms``."""
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text or not _DURATION_RE.fullmatch(text):
        raise ValueError(f"invalid duration {text!r}")
    seconds = sum(
        Decimal(number) * _UNIT_SECONDS[unit]
        for number, unit in _TOKEN_RE.findall(text)
    )
    microseconds = int(seconds * 1_000_000)
    return timedelta(microseconds=sign * microseconds)


def parse_wait(value: str) -> timedelta:
    """Parse the ``wait`` query parameter; it must not exceed ``MAX_WAIT``."""
    try:
        wait = _parse_duration(value.strip())
    except ValueError:
        raise ValueError(MSG_INVALID_WAIT) from None
    if wait < timedelta(0) or wait > MAX_WAIT:
        raise ValueError(MSG_INVALID_WAIT)
    return wait