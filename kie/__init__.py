"""Core of a labelled key-value configuration service."""

__version__ = "0.1.0"

__all__ = [
    "auth",
    "command",
    "common",
    "concurrency",
    "config",
    "datasource",
    "iputil",
    "key",
    "kv_cache",
    "kv_sort",
    "long_polling",
    "model",
    "stringutil",
    "util",
    "validator",
]