"""
PromptEditor Logging System — Structured JSON event log alongside stdlib logging.

Implements:
- configure_logging: stdlib root logger setup from prompteditor.yaml
- FileLogger: per-object-type, per-category JSONL files (daily rotation)
- Log entry builders for version, storage and system events
- LogRetentionManager: deletes event files past retention

Layout: {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("prompteditor.engine.logging")

# Valid object types and their permitted categories
OBJECT_TYPE_CATEGORIES = {
    "versions": ["execution"],
    "storage": ["execution", "errors"],
    "system": ["execution"],
}

DEFAULT_RETENTION_DAYS = 30

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the stdlib root logger for the CLI."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("object_type", "category", "data")

    def __init__(self, object_type: str, category: str, data: Dict[str, Any]):
        self.object_type = object_type
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"), ensure_ascii=False)


class FileLogger:
    """
    Writes structured JSON log entries to per-object-type, per-category files.
    Files rotate daily: {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
    """

    def __init__(self, log_dir: str = ".prompteditor/logs"):
        self._log_dir = Path(log_dir)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / obj_type / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        file_path = self._resolve_path(entry.object_type, entry.category)
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(entry.to_json())
            f.write("\n")

    def _resolve_path(self, object_type: str, category: str) -> Path:
        """Resolve the log file path for today's date."""
        if category not in OBJECT_TYPE_CATEGORIES.get(object_type, ()):
            raise ValueError(f"Unknown log destination {object_type}/{category}")
        today = date.today().isoformat()
        return self._log_dir / object_type / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def query(
        self,
        object_type: str,
        category: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        filters: Optional[Dict[str, Any]] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        """
        Query log entries for a given object_type/category.

        Args:
            start_date: Earliest date to include (defaults to 7 days before end_date).
            end_date: Latest date to include (defaults to today).
            filters: Only entries whose top-level keys equal ALL of these are returned.
            limit: Max number of entries to return.

        Returns:
            List of parsed log-entry dicts, newest first.
        """
        if end_date is None:
            end_date = date.today()
        if start_date is None:
            start_date = end_date - timedelta(days=7)

        log_base = self._log_dir / object_type / category
        if not log_base.exists():
            return []

        results: List[Dict[str, Any]] = []
        current = end_date
        while current >= start_date:
            file_path = log_base / f"{current.isoformat()}.jsonl"
            if file_path.exists():
                # Lines within a file are chronological
                results.extend(reversed(self._read_jsonl(file_path, filters)))
            current -= timedelta(days=1)

        return results[:limit]

    @staticmethod
    def _read_jsonl(path: Path, filters: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        entries: List[Dict[str, Any]] = []
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if filters and not all(data.get(k) == v for k, v in filters.items()):
                        continue
                    entries.append(data)
        except OSError as exc:
            logger.warning("Could not read log file %s: %s", path, exc)
        return entries


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(event: str, level: str, document_id: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
    }
    if document_id:
        entry["document_id"] = document_id
    entry.update(extra)
    return entry


def log_version_event(
    event: str,
    document_id: str,
    version_id: Optional[str] = None,
    version_count: Optional[int] = None,
    level: str = "INFO",
    **extra: Any,
) -> LogEntry:
    """Build a version history event (saved, renamed, deleted, evicted, restored)."""
    data = _base_entry(event=event, level=level, document_id=document_id, **extra)
    if version_id:
        data["version_id"] = version_id
    if version_count is not None:
        data["version_count"] = version_count
    return LogEntry("versions", "execution", data)


def log_storage_failure(
    document_id: str,
    backend: str,
    key: str,
    error: BaseException,
) -> LogEntry:
    """Build a storage write-failure entry."""
    data = _base_entry(
        event="save_failed",
        level="ERROR",
        document_id=document_id,
        backend=backend,
        key=key,
        error_type=type(error).__name__,
        error=str(error),
    )
    return LogEntry("storage", "errors", data)


def log_system_event(
    event: str,
    level: str = "INFO",
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a system event entry (session start, config load, cleanup)."""
    data = _base_entry(event=event, level=level)
    if details:
        data["details"] = details
    return LogEntry("system", "execution", data)


# ---------------------------------------------------------------------------
# Log Cleanup / Retention
# ---------------------------------------------------------------------------

class LogRetentionManager:
    """Deletes event log files older than the retention period."""

    def __init__(self, log_dir: str = ".prompteditor/logs", retention_days: int = DEFAULT_RETENTION_DAYS):
        self._log_dir = Path(log_dir)
        self._retention = retention_days

    def cleanup(self, today: Optional[date] = None) -> Dict[str, int]:
        """
        Run retention cleanup across all log directories.

        Returns:
            Dict with counts: {"deleted": N, "kept": M}
        """
        deleted = 0
        kept = 0
        today = today or date.today()

        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                cat_dir = self._log_dir / obj_type / cat
                if not cat_dir.exists():
                    continue

                for file_path in cat_dir.iterdir():
                    if not file_path.is_file():
                        continue
                    file_date = self._parse_file_date(file_path)
                    if file_date is None:
                        continue
                    if (today - file_date).days > self._retention:
                        file_path.unlink()
                        deleted += 1
                    else:
                        kept += 1

        result = {"deleted": deleted, "kept": kept}
        logger.info(f"Log cleanup: {result}")
        return result

    @staticmethod
    def _parse_file_date(file_path: Path) -> Optional[date]:
        """Extract date from a filename like 2026-02-12.jsonl."""
        try:
            return date.fromisoformat(file_path.name.split(".")[0])
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Convenience: Global Event Log
# ---------------------------------------------------------------------------

_file_logger: Optional[FileLogger] = None


def init_logging(log_dir: str = ".prompteditor/logs") -> FileLogger:
    """Initialize the global event log."""
    global _file_logger
    _file_logger = FileLogger(log_dir=log_dir)
    return _file_logger


def get_file_logger() -> Optional[FileLogger]:
    return _file_logger


def log(entry: LogEntry) -> bool:
    """Write an entry to the global event log. Returns False if not initialized or on I/O error."""
    if _file_logger is None:
        return False
    try:
        _file_logger.write(entry)
        return True
    except OSError as e:
        logger.error(f"Event log write failed: {e}")
        return False


def shutdown_logging() -> None:
    global _file_logger
    _file_logger = None
