"""Unit tests for prompteditor.documents.naming — version name validation."""

from datetime import datetime, timezone

import pytest

from prompteditor.documents.models import Version
from prompteditor.documents.naming import (
    DUPLICATE_NAME_MESSAGE,
    INVALID_LENGTH_MESSAGE,
    validate_version_name,
)
from prompteditor.engine.errors import NameErrorCode, VersionNameError

T0 = datetime(2025, 8, 25, tzinfo=timezone.utc)


def _version(vid, name=None):
    return Version(id=vid, created_at=T0, name=name, content=vid, summary=vid)


@pytest.fixture
def versions():
    return [_version("v1", "Draft"), _version("v2"), _version("v3", "Final  copy")]


class TestLength:
    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_empty_after_trim(self, versions, name):
        with pytest.raises(VersionNameError) as exc:
            validate_version_name(name, versions, exclude_id="v2")
        assert exc.value.code is NameErrorCode.INVALID_LENGTH
        assert exc.value.message == INVALID_LENGTH_MESSAGE

    def test_too_long(self, versions):
        with pytest.raises(VersionNameError) as exc:
            validate_version_name("n" * 41, versions, exclude_id="v2")
        assert exc.value.code is NameErrorCode.INVALID_LENGTH

    def test_forty_chars_ok(self, versions):
        assert validate_version_name("n" * 40, versions, exclude_id="v2") == "n" * 40

    def test_length_measured_after_trim(self, versions):
        assert validate_version_name("  " + "n" * 40 + "  ", versions, exclude_id="v2") == "n" * 40


class TestUniqueness:
    def test_case_insensitive_duplicate(self, versions):
        with pytest.raises(VersionNameError) as exc:
            validate_version_name("  draft ", versions, exclude_id="v2")
        assert exc.value.code is NameErrorCode.DUPLICATE_NAME
        assert exc.value.message == DUPLICATE_NAME_MESSAGE

    def test_self_excluded(self, versions):
        assert validate_version_name("DRAFT", versions, exclude_id="v1") == "DRAFT"

    def test_internal_whitespace_not_normalized(self, versions):
        assert validate_version_name("Final copy", versions, exclude_id="v2") == "Final copy"
        with pytest.raises(VersionNameError):
            validate_version_name("final  COPY", versions, exclude_id="v2")

    def test_unnamed_versions_do_not_conflict(self, versions):
        assert validate_version_name("Draft-2", versions, exclude_id="v2") == "Draft-2"

    def test_returns_trimmed(self, versions):
        assert validate_version_name("  Release  ", versions, exclude_id="v2") == "Release"
