"""
PromptEditor Redis Store — key-value store on a Redis database.

Keys are namespaced with a prefix (default ``prompteditor:``). Unlike a cache,
values carry no TTL: the document record must survive until overwritten.
Connection and command errors propagate as ``redis.RedisError``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import redis

logger = logging.getLogger("prompteditor.storage.redis")

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisStore:
    """Key-value store backed by redis-py."""

    backend = "redis"

    def __init__(
        self,
        redis_url: str = DEFAULT_REDIS_URL,
        prefix: str = "prompteditor:",
        client: Optional[Any] = None,
    ):
        self._redis_url = redis_url
        self._prefix = prefix
        self._client = client or redis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5,
        )

    def _make_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self._client.get(self._make_key(key))

    def set_item(self, key: str, value: str) -> None:
        self._client.set(self._make_key(key), value)

    def remove_item(self, key: str) -> None:
        self._client.delete(self._make_key(key))

    def ping(self) -> bool:
        """Health check. Never raises."""
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    def close(self) -> None:
        self._client.close()

    def __repr__(self) -> str:
        return f"<RedisStore url='{self._redis_url}' prefix='{self._prefix}'>"
