"""
PromptEditor Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count
from unittest.mock import MagicMock

import pytest

from prompteditor.documents import DocumentPersistence, EditorSession
from prompteditor.storage import MemoryStore


# ---------------------------------------------------------------------------
# Isolation — reset module-level config and event log between tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_globals():
    import prompteditor.engine.config as cfg_mod
    import prompteditor.engine.logging as log_mod

    cfg_mod._config = None
    log_mod.shutdown_logging()
    yield
    cfg_mod._config = None
    log_mod.shutdown_logging()


class TickingClock:
    """Deterministic clock: each call returns one second later than the last."""

    def __init__(self, start: datetime):
        self._next = start
        self.calls = 0

    def __call__(self) -> datetime:
        now = self._next
        self._next = now + timedelta(seconds=1)
        self.calls += 1
        return now


@pytest.fixture
def clock():
    return TickingClock(datetime(2025, 8, 25, 14, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
def id_factory():
    counter = count(1)
    return lambda: f"ver-{next(counter):04d}"


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def persistence(memory_store):
    return DocumentPersistence(memory_store)


@pytest.fixture
def session(persistence, clock, id_factory):
    return EditorSession(persistence, clock=clock, id_factory=id_factory)


@pytest.fixture
def doc_store(session):
    """A DocumentStore opened on an empty MemoryStore."""
    return session.open()


@pytest.fixture
def mock_redis():
    """Return a mock Redis client whose get/set/delete act on a dict."""
    data = {}
    client = MagicMock()
    client.data = data
    client.ping.return_value = True
    client.get.side_effect = data.get
    client.set.side_effect = lambda key, value: data.__setitem__(key, value)
    client.delete.side_effect = lambda key: int(data.pop(key, None) is not None)
    return client
