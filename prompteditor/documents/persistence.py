"""
PromptEditor Persistence Adapter — reads and writes the document record.

load():  never raises. Missing, empty, unparseable, non-object, or
         wrongly-shaped data all come back as None ("no prior state").
save():  never raises. A failed write is handed to the ``on_error`` callback
         and reported as False; the caller's in-memory document stays
         authoritative.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Callable, Optional

from pydantic import ValidationError

from prompteditor.documents.models import STORAGE_KEY, Document
from prompteditor.engine.logging import log, log_storage_failure

if TYPE_CHECKING:
    from prompteditor.storage.base import KeyValueStore

logger = logging.getLogger("prompteditor.documents.persistence")

ErrorCallback = Callable[[Exception], None]


class DocumentPersistence:
    """Serializes the Document to a single key of a KeyValueStore."""

    def __init__(self, store: "KeyValueStore", key: str = STORAGE_KEY):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def backend(self) -> str:
        return getattr(self._store, "backend", type(self._store).__name__)

    def load(self) -> Optional[Document]:
        """Read the persisted document, or None if there is no usable record."""
        try:
            raw = self._store.get_item(self._key)
        except Exception as e:
            logger.warning(f"Could not read '{self._key}' from {self.backend}: {e}")
            return None

        if not raw:
            return None

        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning(f"Stored record '{self._key}' is not valid JSON; starting fresh")
            return None

        if not isinstance(parsed, dict):
            logger.warning(
                f"Stored record '{self._key}' is a {type(parsed).__name__}, not an object; starting fresh"
            )
            return None

        try:
            return Document.from_record(parsed)
        except ValidationError as e:
            logger.warning(
                f"Stored record '{self._key}' has an invalid shape ({e.error_count()} errors); starting fresh"
            )
            return None

    def save(self, document: Document, on_error: Optional[ErrorCallback] = None) -> bool:
        """
        Write the full document under the fixed key.

        Returns True on success. On failure calls ``on_error(exc)`` (if given)
        and returns False.
        """
        try:
            payload = json.dumps(document.to_record(), ensure_ascii=False)
            self._store.set_item(self._key, payload)
        except Exception as e:
            logger.error(f"Saving '{self._key}' to {self.backend} failed: {e}")
            log(log_storage_failure(document.id, self.backend, self._key, e))
            if on_error is not None:
                on_error(e)
            return False

        logger.debug(f"Saved '{self._key}' ({len(payload)} chars, {len(document.versions)} versions)")
        return True

    def clear(self) -> None:
        """Remove the persisted record."""
        self._store.remove_item(self._key)

    def __repr__(self) -> str:
        return f"<DocumentPersistence backend='{self.backend}' key='{self._key}'>"
