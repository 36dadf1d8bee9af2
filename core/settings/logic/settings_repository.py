from __future__ import annotations
import json, sqlite3
from pathlib import Path
from typing import Any
from core.common.db_interface import SQLiteRepository
from core.logging.logic.logger import logger

def _to_json(v: Any) -> str:            # serialize scalars
    try: return json.dumps(v)
    except TypeError: return json.dumps(str(v))

def _from_json(txt: str) -> Any:        # deserialize scalars
    try: return json.loads(txt)
    except ValueError: return txt

# ------------------------------------------------------------------ #
class SettingsRepository(SQLiteRepository):
    """
    Raw access to the ``kv_store`` table.

    TEXT cells hold JSON-encoded scalars, BLOB cells hold opaque bytes that
    are handed back unchanged.
    """

    def __init__(self, db_path: Path | str) -> None:
        super().__init__(db_path, check_same_thread=False)
        self._ensure_schema()

    # ------------------------- public API ---------------------------- #
    def get(self, ns: str, key: str, fb: Any = None) -> Any | None:
        with self._lock:
            row = self.conn.execute(
                "SELECT value FROM kv_store WHERE namespace=? AND key=?", (ns, key),
            ).fetchone()
        if row is None:
            return fb
        val = row["value"]
        if isinstance(val, (bytes, bytearray)):
            return bytes(val)
        return _from_json(val)

    def set(self, ns: str, key: str, val: Any) -> None:
        cell = sqlite3.Binary(val) if isinstance(val, (bytes, bytearray)) else _to_json(val)
        with self._lock, self.conn:
            self.conn.execute(
                """
                INSERT INTO kv_store (namespace,key,value)
                VALUES (?,?,?)
                ON CONFLICT(namespace,key) DO
                UPDATE SET value=excluded.value
                """,
                (ns, key, cell),
            )

    def delete(self, ns: str, key: str) -> bool:
        with self._lock, self.conn:
            cur = self.conn.execute(
                "DELETE FROM kv_store WHERE namespace=? AND key=?", (ns, key),
            )
        return cur.rowcount == 1

    # ------------------------- schema -------------------------------- #
    def _ensure_schema(self) -> None:
        with self._lock:
            self.conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store(
                    namespace TEXT NOT NULL,
                    key       TEXT NOT NULL,
                    value,
                    PRIMARY KEY(namespace,key)
                )
                """
            )
            self.conn.commit()
        logger.log("SettingsRepo", "SchemaReady", level="DEBUG", message=str(self.db_path))
