"""
PromptEditor Document Core — the single document and its bounded version history.

    models       — Document, Version, constants (VERSION_CAP = 20)
    naming       — version-name validation
    persistence  — load/save of the document record
    store        — DocumentStore, the mutation state machine
    session      — EditorSession, two-phase bootstrap
"""

from prompteditor.documents.models import DOC_ID, STORAGE_KEY, VERSION_CAP, Document, Version
from prompteditor.documents.naming import validate_version_name
from prompteditor.documents.persistence import DocumentPersistence
from prompteditor.documents.session import STORAGE_FAILURE_MESSAGE, EditorSession
from prompteditor.documents.store import DocumentStore, RenameResult

__all__ = [
    "DOC_ID",
    "STORAGE_KEY",
    "VERSION_CAP",
    "Document",
    "Version",
    "validate_version_name",
    "DocumentPersistence",
    "EditorSession",
    "STORAGE_FAILURE_MESSAGE",
    "DocumentStore",
    "RenameResult",
]
