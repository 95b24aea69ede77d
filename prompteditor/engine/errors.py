"""
PromptEditor Error Hierarchy — Structured exceptions for the editor core.

Every error carries a context dict that serializes to JSON, so failures can be
written to the structured event log unchanged.

Hierarchy:
    EditorError
    ├── EditorValidationError      — Input validation failed
    │   └── VersionNameError       — Rename rejected (length / duplicate / not found)
    ├── EditorStorageError         — Key-value store read or write failed
    │   └── StorageQuotaExceededError — Store is full
    └── EditorConfigError          — Invalid prompteditor.yaml
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class EditorError(Exception):
    """
    Base error for all PromptEditor failures.
    All context is serializable to JSON.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.document_id: Optional[str] = context.get("document_id")
        self.version_id: Optional[str] = context.get("version_id")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict for the event log."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "document_id": self.document_id,
            "version_id": self.version_id,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k not in ("document_id", "version_id")
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.document_id:
            parts.append(f"document_id={self.document_id}")
        if self.version_id:
            parts.append(f"version_id={self.version_id}")
        return " | ".join(parts)


class EditorValidationError(EditorError):
    """Input validation failed."""
    pass


class NameErrorCode(str, Enum):
    """Why a proposed version name was rejected."""
    INVALID_LENGTH = "invalid_length"
    DUPLICATE_NAME = "duplicate_name"
    NOT_FOUND = "not_found"


class VersionNameError(EditorValidationError):
    """
    A proposed version name was rejected by the naming policy.
    ``code`` tells the caller which rule failed.
    """

    def __init__(self, message: str, code: NameErrorCode, **context: Any):
        self.code = code
        self.proposed_name: Optional[str] = context.get("proposed_name")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["code"] = self.code.value
        d["proposed_name"] = self.proposed_name
        return d


class EditorStorageError(EditorError):
    """Reading from or writing to the key-value store failed."""

    def __init__(self, message: str, **context: Any):
        self.backend: Optional[str] = context.get("backend")
        self.key: Optional[str] = context.get("key")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["backend"] = self.backend
        d["key"] = self.key
        return d


class StorageQuotaExceededError(EditorStorageError):
    """The store rejected a write because it would exceed its capacity."""

    def __init__(self, message: str, **context: Any):
        self.quota_bytes: Optional[int] = context.get("quota_bytes")
        self.required_bytes: Optional[int] = context.get("required_bytes")
        super().__init__(message, **context)


class EditorConfigError(EditorError):
    """Configuration error — invalid prompteditor.yaml."""
    pass
