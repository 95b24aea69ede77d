"""
PromptEditor Key-Value Store Contract — the capability the persistence adapter writes to.

A store is a synchronous string-to-string map. ``set_item`` either writes the
whole value or raises; partial writes never happen. Reads of a missing key
return None.

MemoryStore keeps everything in a dict and can enforce a byte quota, which is
how tests exercise the "store is full" failure path.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol, runtime_checkable

from prompteditor.engine.errors import StorageQuotaExceededError

logger = logging.getLogger("prompteditor.storage.base")


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous local key-value store."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def close(self) -> None:
        ...


class MemoryStore:
    """
    In-process store backed by a dict.

    With ``quota_bytes`` set, a write that would push the UTF-8 size of all
    keys and values past the quota raises StorageQuotaExceededError and
    leaves the previous value in place.
    """

    backend = "memory"

    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            required = self._size_without(key) + _nbytes(key) + _nbytes(value)
            if required > self._quota_bytes:
                raise StorageQuotaExceededError(
                    f"Writing '{key}' needs {required} bytes, quota is {self._quota_bytes}",
                    backend=self.backend,
                    key=key,
                    quota_bytes=self._quota_bytes,
                    required_bytes=required,
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def close(self) -> None:
        self._items.clear()

    def _size_without(self, key: str) -> int:
        return sum(_nbytes(k) + _nbytes(v) for k, v in self._items.items() if k != key)

    @property
    def used_bytes(self) -> int:
        return sum(_nbytes(k) + _nbytes(v) for k, v in self._items.items())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"<MemoryStore items={len(self._items)} quota={self._quota_bytes}>"


def _nbytes(s: str) -> int:
    return len(s.encode("utf-8"))
