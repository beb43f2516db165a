"""
SQLite Persistence Layer — Security Report Service
Stores submitted report documents so they survive server restarts.
One connection per store instance, opened at startup and shared.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Union

from secreport.core.errors import DuplicateKey, StorageUnavailable
from secreport.models.report_model import ReportSummary, StoredReport

logger = logging.getLogger(__name__)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS reports (
        id          TEXT PRIMARY KEY,
        data        TEXT NOT NULL,
        created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_reports_created ON reports(created_at DESC);
"""


class ReportStore:
    """Key -> document store over a single SQLite table.

    Documents are stored as opaque text; callers own (de)serialization.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "ReportStore":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> None:
        if self._conn is not None:
            return
        conn = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
        except (sqlite3.Error, OSError) as exc:
            if conn is not None:
                conn.close()
            raise StorageUnavailable(f"cannot open {self.path}: {exc}") from exc
        self._conn = conn
        try:
            self.init_schema()
        except StorageUnavailable:
            self.close()
            raise
        logger.info("Database initialized at %s", self.path)

    def init_schema(self) -> None:
        """Create tables if they don't exist."""
        conn = self._connection()
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"schema init failed: {exc}") from exc

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageUnavailable("report store is not open")
        return self._conn

    def put(self, report_id: str, data: str) -> None:
        """Insert a new report. Never overwrites an existing id."""
        conn = self._connection()
        try:
            with conn:
                conn.execute("INSERT INTO reports (id, data) VALUES (?, ?)", (report_id, data))
        except sqlite3.IntegrityError as exc:
            raise DuplicateKey(report_id) from exc
        except (sqlite3.Error, UnicodeEncodeError) as exc:
            raise StorageUnavailable(f"insert failed: {exc}") from exc

    def get(self, report_id: str) -> Optional[StoredReport]:
        conn = self._connection()
        try:
            row = conn.execute(
                "SELECT id, data, created_at FROM reports WHERE id = ?", (report_id,)
            ).fetchone()
        except (sqlite3.Error, UnicodeEncodeError) as exc:
            raise StorageUnavailable(f"lookup failed: {exc}") from exc
        if row is None:
            return None
        return StoredReport(id=row["id"], data=row["data"], created_at=str(row["created_at"]))

    def list(self) -> List[ReportSummary]:
        """All reports, newest first. Same-second inserts keep insertion order."""
        conn = self._connection()
        try:
            rows = conn.execute(
                "SELECT id, created_at FROM reports ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"listing failed: {exc}") from exc
        return [ReportSummary(id=r["id"], created_at=str(r["created_at"])) for r in rows]

    def count(self) -> int:
        conn = self._connection()
        try:
            return conn.execute("SELECT COUNT(*) FROM reports").fetchone()[0]
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"count failed: {exc}") from exc
