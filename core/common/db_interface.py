"""
core/common/db_interface.py
===========================

Shared interface + helpers for SQLite-backed stores.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Optional
import sqlite3

MEMORY_DB = ":memory:"


def create_sqlite_connection(
    db_path: Path | str,
    *,
    check_same_thread: bool = False,
) -> sqlite3.Connection:
    """Create a sqlite3 connection with common defaults (creates parent dirs)."""
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    return conn


class DatabaseAccess(ABC):
    """Interface for components that depend on a database."""

    @property
    @abstractmethod
    def db_path(self) -> Path | str:
        raise NotImplementedError

    @abstractmethod
    def connect(self) -> sqlite3.Connection:
        raise NotImplementedError


class SQLiteRepository(DatabaseAccess):
    """
    Default SQLite implementation holding one shared connection.

    ``db_path=":memory:"`` gives a private in-memory database that lives as
    long as the repository instance.
    """

    def __init__(self, db_path: Path | str, *, check_same_thread: bool = False) -> None:
        self._db_path = db_path if str(db_path) == MEMORY_DB else Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._check_same_thread = check_same_thread
        self._lock = RLock()

    @property
    def db_path(self) -> Path | str:
        return self._db_path

    @property
    def conn(self) -> sqlite3.Connection:
        return self.connect()

    def connect(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is None:
                self._conn = create_sqlite_connection(
                    self._db_path, check_same_thread=self._check_same_thread
                )
            return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                try:
                    self._conn.close()
                finally:
                    self._conn = None
