from __future__ import annotations

"""SQLite storage and migrations for the weekly planner.

Schema changes are plain functions in the MIGRATIONS list; applied versions
are recorded in ``schema_migrations`` so ``init_db`` can run on every start.
"""

from dataclasses import dataclass
from pathlib import Path
import logging
import sqlite3
from typing import Callable, Iterable

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class DBConfig:
    path: Path
    pragmas: tuple[tuple[str, str | int], ...] = (
        ("journal_mode", "WAL"),
        ("synchronous", "NORMAL"),
    )


class DatabaseManager:
    def __init__(self, config: DBConfig):
        self.config = config
        self._conn: sqlite3.Connection | None = None

    # --- Low level helpers -------------------------------------------------
    def connect(self) -> sqlite3.Connection:
        if self._conn is None:
            self.config.path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.config.path)
            self._conn.row_factory = sqlite3.Row
            self._apply_pragmas(self._conn)
        return self._conn

    def _apply_pragmas(self, conn: sqlite3.Connection) -> None:
        cur = conn.cursor()
        for key, value in self.config.pragmas:
            cur.execute(f"PRAGMA {key}={value}")
        cur.close()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # --- Migration system --------------------------------------------------
    def init_db(self) -> None:
        conn = self.connect()
        with conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
                )
                """
            )

        applied_versions = self._get_applied_versions()
        for version, migration_fn in enumerate(MIGRATIONS, start=1):
            if version in applied_versions:
                continue
            with conn:
                migration_fn(conn)
                conn.execute(
                    "INSERT INTO schema_migrations (version) VALUES (?)", (version,)
                )
            _log.info("migration applied", extra={"_json_version": version})

    def _get_applied_versions(self) -> set[int]:
        conn = self.connect()
        cur = conn.execute("SELECT version FROM schema_migrations")
        return {row[0] for row in cur.fetchall()}

    # --- Convenience -------------------------------------------------------
    def execute(self, sql: str, params: Iterable | None = None) -> sqlite3.Cursor:
        """Run a write statement in its own transaction."""
        conn = self.connect()
        with conn:
            cur = conn.execute(sql, params or [])
        return cur

    def query_all(self, sql: str, params: Iterable | None = None) -> list[sqlite3.Row]:
        cur = self.connect().execute(sql, params or [])
        return cur.fetchall()

    def query_one(self, sql: str, params: Iterable | None = None) -> sqlite3.Row | None:
        cur = self.connect().execute(sql, params or [])
        return cur.fetchone()


# --- Migration definitions --------------------------------------------------

def migration_001_create_core_tables(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            start_time TEXT NOT NULL,
            end_time TEXT NOT NULL,
            day_of_week INTEGER NOT NULL,
            category TEXT,
            color TEXT,
            completed INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE templates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            category TEXT,
            color TEXT
        );
        """
    )


def migration_002_index_day_of_week(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE INDEX IF NOT EXISTS idx_activities_day ON activities(day_of_week, start_time);
        """
    )


MIGRATIONS: list[Callable[[sqlite3.Connection], None]] = [
    migration_001_create_core_tables,
    migration_002_index_day_of_week,
]

__all__ = [
    "DBConfig",
    "DatabaseManager",
    "MIGRATIONS",
]
