from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("snaplru")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

from snaplru.cache import (  # noqa: E402
    Entry,
    LRUCache,
    empty,
    get,
    insert,
    insert_with_victim,
    keys,
    lru_order,
    member,
    select_victim,
    size,
    to_dict,
)
from snaplru.errors import SnapLRUConfigError, SnapLRUError, SnapLRUTraceError  # noqa: E402
from snaplru.memo import memoize  # noqa: E402

__all__ = [
    "Entry",
    "LRUCache",
    "SnapLRUConfigError",
    "SnapLRUError",
    "SnapLRUTraceError",
    "__version__",
    "empty",
    "get",
    "insert",
    "insert_with_victim",
    "keys",
    "lru_order",
    "member",
    "memoize",
    "select_victim",
    "size",
    "to_dict",
]
