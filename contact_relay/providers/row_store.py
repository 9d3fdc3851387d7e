"""
Row store abstraction layer.
Submissions are appended as ordered text columns; rows are never updated or deleted.
"""

import sqlite3
import threading
from abc import ABC, abstractmethod

from contact_relay.config import Settings
from contact_relay.exceptions import StorageFailure
from contact_relay.logger import logger
from contact_relay.schemas.contact import SUBMISSION_COLUMNS


class RowStore(ABC):
    """Abstract interface for append-only row stores."""

    @abstractmethod
    def append_row(self, columns: list[str]) -> None:
        """Append one row. Raises StorageFailure if the row was not written."""
        ...

    @abstractmethod
    def rows(self) -> list[list[str]]:
        """Return every stored row in insertion order."""
        ...


class InMemoryRowStore(RowStore):
    """List-backed store for tests and local runs."""

    def __init__(self):
        self._rows: list[list[str]] = []
        self._lock = threading.Lock()

    def append_row(self, columns: list[str]) -> None:
        if len(columns) != len(SUBMISSION_COLUMNS):
            raise StorageFailure(
                f"Expected {len(SUBMISSION_COLUMNS)} columns, got {len(columns)}"
            )
        with self._lock:
            self._rows.append(list(columns))

    def rows(self) -> list[list[str]]:
        with self._lock:
            return [list(row) for row in self._rows]


class SQLiteRowStore(RowStore):
    """SQLite storage implementation. One table, one row per submission."""

    TABLE = "submissions"
    _FIELDS = ("timestamp", "first_name", "last_name", "email", "phone", "comment")

    def __init__(self, db_path: str = "contact_submissions.db"):
        self.db_path = db_path
        self.init_tables()
        logger.info(f"SQLiteRowStore initialized with db: {self.db_path}")

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def init_tables(self) -> None:
        """Create the submissions table if it does not exist."""
        with self._get_connection() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.TABLE} (
                    row_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    phone TEXT NOT NULL,
                    comment TEXT NOT NULL
                )
            """)

    def append_row(self, columns: list[str]) -> None:
        if len(columns) != len(self._FIELDS):
            raise StorageFailure(f"Expected {len(self._FIELDS)} columns, got {len(columns)}")

        placeholders = ", ".join("?" for _ in self._FIELDS)
        try:
            with self._get_connection() as conn:
                conn.execute(
                    f"INSERT INTO {self.TABLE} ({', '.join(self._FIELDS)}) VALUES ({placeholders})",
                    tuple(columns),
                )
        except sqlite3.Error as e:
            logger.error(f"Failed to append row: {e}")
            raise StorageFailure(str(e)) from e

    def rows(self) -> list[list[str]]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                f"SELECT {', '.join(self._FIELDS)} FROM {self.TABLE} ORDER BY row_id"
            )
            return [list(row) for row in cursor.fetchall()]


def get_row_store(settings: Settings) -> RowStore:
    """
    Build the configured row store.

    ROW_STORE:
    - "sqlite" (default): SQLite file at DB_PATH
    - "memory": process-local list, lost on restart
    """
    if settings.row_store == "memory":
        logger.warning("Using in-memory row store; submissions will not survive a restart")
        return InMemoryRowStore()
    if settings.row_store == "sqlite":
        return SQLiteRowStore(settings.db_path)
    raise ValueError(f"Unknown row store: {settings.row_store}")
