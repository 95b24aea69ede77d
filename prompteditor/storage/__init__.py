"""
PromptEditor Storage — key-value store backends for the document record.

    memory  — MemoryStore (tests, throwaway sessions)
    sqlite  — SQLStore (default; any SQLAlchemy URL works)
    redis   — RedisStore
"""

from __future__ import annotations

from prompteditor.engine.config import StorageConfig
from prompteditor.engine.errors import EditorConfigError
from prompteditor.storage.base import KeyValueStore, MemoryStore

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "create_store",
]


def create_store(config: StorageConfig) -> KeyValueStore:
    """Build the backend named by ``config.backend``."""
    if config.backend == "memory":
        return MemoryStore(quota_bytes=config.quota_bytes)
    if config.backend == "sqlite":
        from prompteditor.storage.sql import SQLStore
        return SQLStore(url=config.url)
    if config.backend == "redis":
        from prompteditor.storage.redis_store import RedisStore
        return RedisStore(redis_url=config.url, prefix=config.prefix)
    raise EditorConfigError(f"Unknown storage backend '{config.backend}'", backend=config.backend)
