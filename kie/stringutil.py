"""String helpers."""

from __future__ import annotations

from collections.abc import Mapping

LABEL_NONE = "none"
"""Format string of an empty label map."""


def format_map(m: Mapping[str, str] | None) -> str:
    """Format a label map as ``k=v`` pairs sorted by key and joined by ``::``."""
    if not m:
        return LABEL_NONE
    return "::".join(f"{k}={m[k]}" for k in sorted(m))