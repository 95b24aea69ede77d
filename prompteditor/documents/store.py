"""
PromptEditor Document Store — the version-history state machine.

Owns the in-memory Document and the current selection. Every mutation:
1. computes a new immutable Document from the current one
2. replaces ``self.document`` with it
3. calls the mutation listener once (EditorSession.on_mutation persists it)

Operations:
- edit_content     — replace the buffer
- save_version     — prepend a snapshot, evict the oldest past VERSION_CAP
- select_version   — point the selection at a version (no mutation)
- restore_selected — copy the selected snapshot back into the buffer
- rename_version   — set a validated name; may fail without side effects
- delete_version   — drop a snapshot; silently ignores unknown ids

The selection and the rename draft are session state: they are never persisted.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from prompteditor.documents.models import VERSION_CAP, Document, Version
from prompteditor.documents.naming import NOT_FOUND_MESSAGE, validate_version_name
from prompteditor.engine.errors import NameErrorCode, VersionNameError
from prompteditor.engine.logging import log, log_version_event
from prompteditor.utilities.utils import now_utc

logger = logging.getLogger("prompteditor.documents.store")

MutationListener = Callable[[Document], object]


@dataclass(frozen=True)
class RenameResult:
    """Outcome of a rename. ``message`` is user-facing and set only on failure."""
    ok: bool
    name: Optional[str] = None
    message: Optional[str] = None
    error_code: Optional[NameErrorCode] = None

    @classmethod
    def success(cls, name: str) -> "RenameResult":
        return cls(ok=True, name=name)

    @classmethod
    def failure(cls, error: VersionNameError) -> "RenameResult":
        return cls(ok=False, message=error.message, error_code=error.code)


class DocumentStore:
    """
    Single owner of the Document.

    Constructed explicitly with its initial document; nothing else holds a
    mutable reference. Callers read ``document`` and ``selected_version`` and
    drive changes only through the operations below.
    """

    def __init__(
        self,
        document: Document,
        on_mutation: Optional[MutationListener] = None,
        clock: Callable[[], datetime] = now_utc,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._document = document
        self._on_mutation = on_mutation
        self._clock = clock
        self._id_factory = id_factory
        self._selected_id: Optional[str] = None
        self._dirty = False
        self._rename_id: Optional[str] = None
        self._rename_draft = ""

    # -------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------

    @property
    def document(self) -> Document:
        return self._document

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_version(self) -> Optional[Version]:
        return self._document.find_version(self._selected_id)

    @property
    def has_unsaved_changes(self) -> bool:
        """True after an edit or restore that no snapshot has captured yet."""
        return self._dirty

    def get_version(self, version_id: str) -> Optional[Version]:
        return self._document.find_version(version_id)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------

    def _commit(self, document: Document) -> Document:
        self._document = document
        if self._on_mutation is not None:
            self._on_mutation(document)
        return document

    def edit_content(self, text: str) -> Document:
        """Replace the buffer. Always succeeds."""
        self._dirty = True
        return self._commit(
            self._document.model_copy(update={"content": text, "updated_at": self._clock()})
        )

    def save_version(self) -> Version:
        """
        Snapshot the current buffer as the newest version.

        When the list grows past VERSION_CAP the oldest entries are dropped.
        Each call creates a new version, even if the content is unchanged.
        """
        now = self._clock()
        version = Version.create(
            self._document.content or "",
            created_at=now,
            version_id=self._id_factory(),
        )

        versions = (version, *self._document.versions)
        evicted = versions[VERSION_CAP:]
        versions = versions[:VERSION_CAP]

        for old in evicted:
            logger.info(f"Evicted version {old.id} (cap={VERSION_CAP})")
            log(log_version_event("evicted", self._document.id, old.id, len(versions)))

        self._dirty = False
        self._commit(self._document.model_copy(update={"versions": versions, "updated_at": now}))
        log(log_version_event("saved", self._document.id, version.id, len(versions)))
        return version

    def select_version(self, version_id: Optional[str]) -> Optional[Version]:
        """
        Point the selection at *version_id*. An unknown id (or None) clears it.
        Does not touch the document.
        """
        version = self._document.find_version(version_id)
        self._selected_id = version.id if version is not None else None
        return version

    def restore_selected(self) -> Optional[Document]:
        """Copy the selected version's content into the buffer. No-op without a selection."""
        version = self.selected_version
        if version is None:
            return None
        self._dirty = True
        logger.info(f"Restoring version {version.id}")
        log(log_version_event("restored", self._document.id, version.id))
        return self._commit(
            self._document.model_copy(update={"content": version.content, "updated_at": self._clock()})
        )

    def rename_version(self, version_id: str, proposed_name: str) -> RenameResult:
        """
        Name a version after checking the naming policy.

        An unknown id is reported as a failure with code NOT_FOUND. Any failure
        leaves the document untouched and skips the mutation listener.
        """
        target = self._document.find_version(version_id)
        if target is None:
            return RenameResult.failure(
                VersionNameError(
                    NOT_FOUND_MESSAGE,
                    code=NameErrorCode.NOT_FOUND,
                    version_id=version_id,
                    proposed_name=proposed_name,
                )
            )

        try:
            name = validate_version_name(proposed_name, self._document.versions, exclude_id=version_id)
        except VersionNameError as e:
            logger.info(f"Rename of {version_id} rejected: {e.message}")
            return RenameResult.failure(e)

        versions = tuple(
            v.model_copy(update={"name": name}) if v.id == version_id else v
            for v in self._document.versions
        )
        self._commit(self._document.model_copy(update={"versions": versions, "updated_at": self._clock()}))
        log(log_version_event("renamed", self._document.id, version_id, name=name))
        return RenameResult.success(name)

    def delete_version(self, version_id: str) -> Document:
        """
        Remove a version. Unknown ids are ignored, so deleting twice is safe.
        Clears the selection if it pointed at the deleted version.
        """
        versions = tuple(v for v in self._document.versions if v.id != version_id)
        if len(versions) != len(self._document.versions):
            log(log_version_event("deleted", self._document.id, version_id, len(versions)))
        if self._selected_id == version_id:
            self._selected_id = None
        if self._rename_id == version_id:
            self.cancel_rename()
        return self._commit(
            self._document.model_copy(update={"versions": versions, "updated_at": self._clock()})
        )

    # -------------------------------------------------------------------
    # Rename workflow (draft held between start and commit)
    # -------------------------------------------------------------------

    @property
    def rename_target(self) -> Optional[str]:
        return self._rename_id

    @property
    def rename_draft(self) -> str:
        return self._rename_draft

    @rename_draft.setter
    def rename_draft(self, value: str) -> None:
        self._rename_draft = value

    def start_rename(self, version_id: str) -> bool:
        """Open a rename draft seeded with the version's current name."""
        version = self._document.find_version(version_id)
        if version is None:
            return False
        self._rename_id = version.id
        self._rename_draft = version.name or ""
        return True

    def commit_rename(self) -> RenameResult:
        """Apply the draft. The draft stays open on failure so it can be corrected."""
        if self._rename_id is None:
            return RenameResult.failure(
                VersionNameError(NOT_FOUND_MESSAGE, code=NameErrorCode.NOT_FOUND)
            )
        result = self.rename_version(self._rename_id, self._rename_draft)
        if result.ok:
            self.cancel_rename()
        return result

    def cancel_rename(self) -> None:
        self._rename_id = None
        self._rename_draft = ""

    def __repr__(self) -> str:
        return (
            f"<DocumentStore id='{self._document.id}' versions={len(self._document.versions)} "
            f"selected={self._selected_id}>"
        )
