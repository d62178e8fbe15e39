"""DuckDB-backed key/value store for state the portal keeps between runs."""
from __future__ import annotations

import logging

import duckdb

from portal.config import settings

logger = logging.getLogger(__name__)

_con: duckdb.DuckDBPyConnection | None = None


def get_connection() -> duckdb.DuckDBPyConnection:
    global _con
    if _con is None:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        _con = duckdb.connect(str(settings.db_path))
        _initialize_tables(_con)
        logger.info("DuckDB connected at %s", settings.db_path)
    return _con


def _initialize_tables(con: duckdb.DuckDBPyConnection) -> None:
    con.execute("""
        CREATE TABLE IF NOT EXISTS local_storage (
            key VARCHAR PRIMARY KEY,
            value VARCHAR NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)


def close() -> None:
    global _con
    if _con:
        _con.close()
        _con = None


class LocalStorage:
    """String key/value storage with the same surface as browser localStorage."""

    def __init__(self, con: duckdb.DuckDBPyConnection | None = None) -> None:
        self._con = con
        if con is not None:
            _initialize_tables(con)

    @property
    def con(self) -> duckdb.DuckDBPyConnection:
        return self._con if self._con is not None else get_connection()

    def get_item(self, key: str) -> str | None:
        row = self.con.execute(
            "SELECT value FROM local_storage WHERE key = ?", [key]
        ).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        self.con.execute(
            "INSERT OR REPLACE INTO local_storage (key, value, updated_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP)",
            [key, value],
        )

    def remove_item(self, key: str) -> None:
        self.con.execute("DELETE FROM local_storage WHERE key = ?", [key])


local_storage = LocalStorage()
