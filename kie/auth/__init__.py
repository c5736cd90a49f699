"""Role-based access decisions and permission checks for key-value entries."""

__all__ = ["decision", "service"]