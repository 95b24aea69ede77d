"""Unit tests for prompteditor.engine.config — EditorConfig and loading."""

import pytest
from pydantic import ValidationError

from prompteditor.documents.models import DOC_ID, STORAGE_KEY
from prompteditor.engine.config import (
    EditorConfig,
    LoggingConfig,
    StorageConfig,
    get_config,
    load_config,
)


class TestEditorConfig:
    def test_defaults(self):
        cfg = EditorConfig()
        assert cfg.environment == "dev"
        assert cfg.editor.document_id == DOC_ID
        assert cfg.storage.backend == "sqlite"
        assert cfg.storage.key == STORAGE_KEY
        assert cfg.storage.quota_bytes is None
        assert cfg.logging.level == "INFO"

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="dev/staging/prod"):
            EditorConfig(environment="test")

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            StorageConfig(backend="etcd")

    def test_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_quota_must_be_positive(self):
        with pytest.raises(ValidationError):
            StorageConfig(quota_bytes=0)


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path):
        cfg = load_config(str(tmp_path / "nonexistent.yaml"))
        assert cfg == EditorConfig()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "prompteditor.yaml"
        path.write_text(
            "environment: staging\n"
            "editor:\n"
            "  document_id: notes\n"
            "storage:\n"
            "  backend: memory\n"
            "  quota_bytes: 5000\n"
            "logging:\n"
            "  level: warning\n"
            "  directory: /tmp/pe-logs\n",
            encoding="utf-8",
        )
        cfg = load_config(str(path))
        assert cfg.environment == "staging"
        assert cfg.editor.document_id == "notes"
        assert cfg.storage.backend == "memory"
        assert cfg.storage.quota_bytes == 5000
        assert cfg.logging.level == "WARNING"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "prompteditor.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == EditorConfig()

    def test_auto_discovery(self, tmp_path, monkeypatch):
        (tmp_path / "prompteditor.yaml").write_text("environment: prod\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_config().environment == "prod"

    def test_get_config_caches(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        first = get_config()
        assert get_config() is first
