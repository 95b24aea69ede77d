"""
End-to-end workflows — DocumentStore + EditorSession over each store backend (Redis via a dict-backed mock client).
"""

import pytest

from prompteditor.documents import VERSION_CAP, DocumentPersistence, EditorSession
from prompteditor.storage import MemoryStore
from prompteditor.storage.redis_store import RedisStore
from prompteditor.storage.sql import SQLStore


@pytest.fixture(params=["memory", "sqlite", "redis"])
def backend(request, tmp_path, mock_redis):
    if request.param == "memory":
        store = MemoryStore()
    elif request.param == "sqlite":
        store = SQLStore(url=f"sqlite:///{tmp_path / 'state.db'}")
    else:
        store = RedisStore(client=mock_redis)
    yield store
    if request.param == "sqlite":
        store.close()


def _open(store, clock, id_factory):
    return EditorSession(DocumentPersistence(store), clock=clock, id_factory=id_factory).open()


class TestScenarios:
    def test_first_snapshot(self, backend, clock, id_factory):
        store = _open(backend, clock, id_factory)
        store.edit_content("# Hello World")
        store.save_version()
        versions = store.document.versions
        assert len(versions) == 1
        assert versions[0].summary == "# Hello World"
        assert versions[0].content == "# Hello World"

    def test_twenty_one_versions_evict_the_first(self, backend, clock, id_factory):
        store = _open(backend, clock, id_factory)
        for i in range(1, 22):
            store.edit_content(f"v{i}")
            store.save_version()

        reopened = _open(backend, clock, id_factory).document
        for doc in (store.document, reopened):
            assert len(doc.versions) == VERSION_CAP
            assert doc.versions[0].content == "v21"
            assert doc.versions[-1].content == "v2"

    def test_duplicate_name_then_distinct_name(self, backend, clock, id_factory):
        store = _open(backend, clock, id_factory)
        ids = []
        for text in ("one", "two", "three"):
            store.edit_content(text)
            ids.append(store.save_version().id)

        assert store.rename_version(ids[0], "Draft").ok
        assert store.rename_version(ids[1], "Notes").ok
        before = store.document

        result = store.rename_version(ids[2], "draft")
        assert result.ok is False
        assert store.document == before

        result = store.rename_version(ids[2], "Draft-2")
        assert result.ok is True
        names = {v.id: v.name for v in _open(backend, clock, id_factory).document.versions}
        assert names == {ids[0]: "Draft", ids[1]: "Notes", ids[2]: "Draft-2"}

    def test_restore_survives_restart(self, backend, clock, id_factory):
        store = _open(backend, clock, id_factory)
        store.edit_content("keep me ✓")
        v = store.save_version()
        store.edit_content("scratch")
        store.select_version(v.id)
        store.restore_selected()

        reopened = _open(backend, clock, id_factory)
        assert reopened.document.content == "keep me ✓"
        assert reopened.selected_version is None
