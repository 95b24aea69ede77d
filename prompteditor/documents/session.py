"""
PromptEditor Session Bootstrap — two-phase startup for the single document.

Phase 1, ``initialize()``: load the persisted document, or build a fresh
empty one. Nothing is written.

Phase 2, ``on_mutation(document)``: called by DocumentStore after every
mutation; writes the document through the persistence adapter. A failed
write sets ``last_error`` to a user-facing warning and is forwarded to the
``on_storage_error`` callback. The in-memory document is unaffected.

``open()`` runs phase 1 and returns a DocumentStore wired to phase 2, so the
first write happens only after the first mutation.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from prompteditor.documents.models import DOC_ID, Document
from prompteditor.documents.persistence import DocumentPersistence
from prompteditor.documents.store import DocumentStore
from prompteditor.engine.logging import log, log_system_event
from prompteditor.utilities.utils import now_utc

logger = logging.getLogger("prompteditor.documents.session")

STORAGE_FAILURE_MESSAGE = (
    "Storage failed (likely quota). Your latest changes may not persist. "
    "Consider copying your text out, clearing some space, or reducing version count."
)


class EditorSession:
    """
    Binds one DocumentStore to one persistence adapter for the life of a process.

    Tests construct as many independent sessions as they need; there is no
    module-level instance.
    """

    def __init__(
        self,
        persistence: DocumentPersistence,
        document_id: str = DOC_ID,
        on_storage_error: Optional[Callable[[Exception], None]] = None,
        clock: Callable[[], datetime] = now_utc,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._persistence = persistence
        self._document_id = document_id
        self._on_storage_error = on_storage_error
        self._clock = clock
        self._id_factory = id_factory
        self._last_error: Optional[str] = None
        self._loaded_from_storage = False

    @property
    def persistence(self) -> DocumentPersistence:
        return self._persistence

    @property
    def last_error(self) -> Optional[str]:
        """User-facing warning from the most recent failed write, until cleared."""
        return self._last_error

    @property
    def loaded_from_storage(self) -> bool:
        return self._loaded_from_storage

    def clear_error(self) -> None:
        self._last_error = None

    def initialize(self) -> Document:
        """Load the stored document or create a fresh one. Never writes."""
        loaded = self._persistence.load()
        self._loaded_from_storage = loaded is not None
        if loaded is not None:
            logger.info(f"Loaded document '{loaded.id}' with {len(loaded.versions)} versions")
            document = loaded
        else:
            logger.info(f"No stored document; starting fresh '{self._document_id}'")
            document = Document.fresh(self._document_id, now=self._clock())

        log(log_system_event(
            "session_started",
            details={
                "document_id": document.id,
                "loaded": self._loaded_from_storage,
                "versions": len(document.versions),
            },
        ))
        return document

    def on_mutation(self, document: Document) -> bool:
        """Persist *document*. Returns False (and records the warning) if the write fails."""
        return self._persistence.save(document, on_error=self._handle_storage_error)

    def _handle_storage_error(self, error: Exception) -> None:
        self._last_error = STORAGE_FAILURE_MESSAGE
        if self._on_storage_error is not None:
            self._on_storage_error(error)

    def open(self) -> DocumentStore:
        """Initialize and return a store that persists after each mutation."""
        return DocumentStore(
            self.initialize(),
            on_mutation=self.on_mutation,
            clock=self._clock,
            id_factory=self._id_factory,
        )

    def __repr__(self) -> str:
        return f"<EditorSession document_id='{self._document_id}' {self._persistence!r}>"
