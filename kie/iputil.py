"""Client address detection for HTTP requests."""

from __future__ import annotations

from collections.abc import Mapping


def _header(headers: Mapping[str, str] | None, name: str) -> str:
    if not headers:
        return ""
    wanted = name.lower()
    return next((v for k, v in headers.items() if k.lower() == wanted), "")


def _split_host(addr: str) -> str | None:
    """Return the host part of ``host:port``, or None if it is malformed."""
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or addr[end + 1 : end + 2] != ":":
            return None
        return addr[1:end]
    host, sep, _port = addr.rpartition(":")
    if not sep or ":" in host or "[" in host or "]" in host:
        return None
    return host


def client_ip(headers: Mapping[str, str] | None, remote_addr: str = "") -> str:
    """Find the client IP from forwarding headers, falling back to the peer address."""
    ip = _header(headers, "X-Forwarded-For").split(",")[0].strip()
    if ip:
        return ip
    ip = _header(headers, "X-Real-Ip").strip()
    if ip:
        return ip
    host = _split_host(remote_addr.strip())
    return host if host is not None else ""