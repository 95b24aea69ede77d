"""
PromptEditor Document Models — Pydantic definitions for the document and its versions.

Document: the single managed text buffer plus its version history (newest first).
Version: an immutable, timestamped snapshot of the buffer, optionally named.

Both models are frozen. Mutations in DocumentStore produce new values with
``model_copy(update=...)`` instead of changing fields in place.

Persisted shape (camelCase keys, ISO-8601 timestamps):
    {"id", "content", "versions": [{"id", "createdAt", "name"?, "content", "summary"}], "updatedAt"}
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prompteditor.utilities.utils import now_utc, summarize

VERSION_CAP = 20
DOC_ID = "default"
STORAGE_KEY = "prompt-editor:document-state:v1"
NAME_MAX_LENGTH = 40
SUMMARY_LENGTH = 80


class Version(BaseModel):
    """
    A snapshot of the document content.

    ``name`` is the only field that ever changes, and only through
    DocumentStore.rename_version.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Unique version identifier")
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp")
    name: Optional[str] = Field(default=None, description="Optional display label")
    content: str = Field(description="Verbatim copy of the document content")
    summary: str = Field(default="", description="Whitespace-collapsed preview")

    @classmethod
    def create(
        cls,
        content: str,
        created_at: Optional[datetime] = None,
        version_id: Optional[str] = None,
    ) -> "Version":
        """Build a new unnamed version with its summary computed from *content*."""
        return cls(
            id=version_id or str(uuid.uuid4()),
            created_at=created_at or now_utc(),
            name=None,
            content=content,
            summary=summarize(content, SUMMARY_LENGTH),
        )

    @property
    def display_name(self) -> str:
        return self.name or "(unnamed)"


class Document(BaseModel):
    """
    The single managed document.

    ``versions`` is ordered newest first and never exceeds VERSION_CAP
    entries once a mutation completes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default=DOC_ID, description="Fixed document identifier")
    content: str = Field(default="", description="Current text buffer")
    versions: Tuple[Version, ...] = Field(default_factory=tuple, description="Newest first")
    updated_at: datetime = Field(alias="updatedAt", default_factory=now_utc)

    @field_validator("versions")
    @classmethod
    def cap_versions(cls, v: Tuple[Version, ...]) -> Tuple[Version, ...]:
        # Records written elsewhere may carry more; keep the newest VERSION_CAP.
        return tuple(v)[:VERSION_CAP]

    @classmethod
    def fresh(cls, document_id: str = DOC_ID, now: Optional[datetime] = None) -> "Document":
        """An empty document with no versions."""
        return cls(id=document_id, content="", versions=(), updated_at=now or now_utc())

    def find_version(self, version_id: Optional[str]) -> Optional[Version]:
        if version_id is None:
            return None
        for v in self.versions:
            if v.id == version_id:
                return v
        return None

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted record shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Document":
        """Parse a persisted record. Raises pydantic.ValidationError on a bad shape."""
        return cls.model_validate(record)
