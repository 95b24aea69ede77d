"""
PromptEditor Naming Policy — validation rules for version names.

A name is valid when, after trimming surrounding whitespace, it is 1–40
characters long and no *other* version of the document carries the same name
(compared case-insensitively on trimmed values). Internal whitespace is left
alone.
"""

from __future__ import annotations

from typing import Iterable, Optional

from prompteditor.documents.models import NAME_MAX_LENGTH, Version
from prompteditor.engine.errors import NameErrorCode, VersionNameError

INVALID_LENGTH_MESSAGE = f"Name must be 1–{NAME_MAX_LENGTH} characters."
DUPLICATE_NAME_MESSAGE = "Name must be unique."
NOT_FOUND_MESSAGE = "Version not found."


def validate_version_name(
    name: str,
    versions: Iterable[Version],
    exclude_id: Optional[str] = None,
) -> str:
    """
    Check *name* against the length and uniqueness rules.

    The version identified by *exclude_id* is skipped in the uniqueness check,
    so renaming a version to its own current name is allowed.

    Returns the trimmed name to store. Raises VersionNameError otherwise.
    """
    trimmed = (name or "").strip()
    if len(trimmed) < 1 or len(trimmed) > NAME_MAX_LENGTH:
        raise VersionNameError(
            INVALID_LENGTH_MESSAGE,
            code=NameErrorCode.INVALID_LENGTH,
            version_id=exclude_id,
            proposed_name=name,
        )

    wanted = trimmed.lower()
    for v in versions:
        if v.id == exclude_id:
            continue
        if (v.name or "").strip().lower() == wanted:
            raise VersionNameError(
                DUPLICATE_NAME_MESSAGE,
                code=NameErrorCode.DUPLICATE_NAME,
                version_id=exclude_id,
                proposed_name=name,
                conflicting_version_id=v.id,
            )

    return trimmed
