"""
PromptEditor SQL Store — key-value table on top of SQLAlchemy.

The default backend. With the default URL it is a single SQLite file under
``.prompteditor/``, which plays the role of the browser's local storage.

Table:
    kv_items(key VARCHAR(255) PRIMARY KEY, value TEXT, updated_at TIMESTAMP)

Each set_item runs in its own transaction, so a value is either fully
replaced or left untouched.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

logger = logging.getLogger("prompteditor.storage.sql")

DEFAULT_SQL_URL = "sqlite:///.prompteditor/state.db"


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for the store tables."""
    pass


class KeyValueItem(Base):
    __tablename__ = "kv_items"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class SQLStore:
    """
    Key-value store persisted in a relational table.

    Errors from the database are not caught here: they propagate as
    ``sqlalchemy.exc.SQLAlchemyError`` so the persistence adapter can
    report them.
    """

    def __init__(self, url: str = DEFAULT_SQL_URL, echo: bool = False):
        self._url = url
        self.backend = make_url(url).get_backend_name()
        self._ensure_sqlite_dir(url)
        self._engine = create_engine(url, echo=echo)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        logger.info(f"SQL store ready: {self._engine.url!r}")

    @staticmethod
    def _ensure_sqlite_dir(url: str) -> None:
        """Create the parent directory of a file-based SQLite database."""
        parsed = make_url(url)
        if parsed.get_backend_name() != "sqlite":
            return
        database = parsed.database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)

    def get_item(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            item = session.get(KeyValueItem, key)
            return item.value if item is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            with session.begin():
                session.merge(KeyValueItem(key=key, value=value))

    def remove_item(self, key: str) -> None:
        with self._session_factory() as session:
            with session.begin():
                item = session.get(KeyValueItem, key)
                if item is not None:
                    session.delete(item)

    def close(self) -> None:
        self._engine.dispose()

    def __repr__(self) -> str:
        return f"<SQLStore url='{self._url}'>"
