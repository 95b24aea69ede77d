"""
PromptEditor Configuration — Load and validate prompteditor.yaml at startup.

Usage:
    from prompteditor.engine.config import load_config, get_config
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from prompteditor.documents.models import DOC_ID, STORAGE_KEY

CONFIG_FILENAME = "prompteditor.yaml"


# ---------------------------------------------------------------------------
# Pydantic models for prompteditor.yaml
# ---------------------------------------------------------------------------

class EditorSettings(BaseModel):
    document_id: str = DOC_ID


class StorageConfig(BaseModel):
    backend: Literal["memory", "sqlite", "redis"] = "sqlite"
    url: str = "sqlite:///.prompteditor/state.db"
    key: str = STORAGE_KEY
    prefix: str = "prompteditor:"
    quota_bytes: Optional[int] = Field(default=None, ge=1)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    directory: str = ".prompteditor/logs"
    retention_days: int = Field(default=30, ge=1)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"logging level must be DEBUG/INFO/WARNING/ERROR/CRITICAL, got '{v}'")
        return v


class EditorConfig(BaseModel):
    """Root model for prompteditor.yaml."""
    environment: str = "dev"

    editor: EditorSettings = EditorSettings()
    storage: StorageConfig = StorageConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ("dev", "staging", "prod"):
            raise ValueError(f"environment must be dev/staging/prod, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_config: Optional[EditorConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for prompteditor.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILENAME).exists():
            return parent
    return current


def load_config(config_path: Optional[str] = None) -> EditorConfig:
    """
    Load and validate prompteditor.yaml.

    Args:
        config_path: Explicit path to the file. If None, auto-discovers.

    Returns:
        Validated EditorConfig instance (defaults if the file is missing).
    """
    global _config

    if config_path is None:
        config_path = str(_find_project_root() / CONFIG_FILENAME)

    path = Path(config_path)
    if not path.exists():
        _config = EditorConfig()
        return _config

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    _config = EditorConfig(**raw)
    return _config


def get_config() -> EditorConfig:
    """Get the currently loaded config, loading if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
