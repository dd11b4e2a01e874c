##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
SQLite driver implementation for the MDB application.

This module defines the `SQLiteDriver` class, a concrete `BackendDriver` backed by
a single database file accessed through `aiosqlite`. Besides the common postal
operations it owns the schema administration endpoints (creating the fixed
table/index set and listing tables), which only exist for the file-based backend.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiosqlite

from mdb.backends.backend_driver import BackendDriver
from mdb.common.enums import BackendKind, SchemaMode
from mdb.postal.data_models import INSERT_COLUMNS, METRICS_TABLE_NAME, TABLE_NAME, PostalRecord, row_to_record


LOG = logging.getLogger(__name__)

CREATE_TABLE_SQL = f"""
    CREATE TABLE {{if_not_exists}}{TABLE_NAME} (
        id TEXT PRIMARY KEY,
        zip_code TEXT,
        sido TEXT,
        sigungu TEXT,
        eupmyeon TEXT,
        road_name TEXT,
        building_main INTEGER DEFAULT 0,
        building_sub INTEGER DEFAULT 0,
        full_road_address TEXT,
        full_jibun_address TEXT,
        created_at TEXT DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
    )
"""

CREATE_TABLE_IF_ABSENT_SQL = CREATE_TABLE_SQL.format(if_not_exists="IF NOT EXISTS ")

ADMIN_SCHEMA_SQL = f"""
    {CREATE_TABLE_IF_ABSENT_SQL};

    CREATE TABLE IF NOT EXISTS {METRICS_TABLE_NAME} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        db_type VARCHAR(20) DEFAULT 'sqlite',
        operation_type VARCHAR(20) NOT NULL
            CHECK (operation_type IN ('INSERT', 'SELECT', 'UPDATE', 'DELETE', 'BULK_INSERT')),
        record_count INTEGER NOT NULL,
        execution_time_ms INTEGER NOT NULL,
        memory_usage_mb DECIMAL(10, 2),
        cpu_usage_percent DECIMAL(5, 2),
        query_complexity VARCHAR(10) DEFAULT 'SIMPLE'
            CHECK (query_complexity IN ('SIMPLE', 'MEDIUM', 'COMPLEX')),
        test_timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
        notes TEXT
    );

    CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_zip_code ON {TABLE_NAME} (zip_code);
    CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_region ON {TABLE_NAME} (sido, sigungu);
    CREATE INDEX IF NOT EXISTS idx_{METRICS_TABLE_NAME}_operation ON {METRICS_TABLE_NAME} (operation_type);
"""


class SQLiteDriver(BackendDriver):
    """
    A SQLite-based implementation of the `BackendDriver` interface.

    The connection runs in autocommit mode so that every insert is committed on
    its own, with WAL journaling for better concurrent access to the file.

    Attributes:
        conn (Optional[aiosqlite.Connection]): The open connection, if any.

    Methods:
        connect: Open the database file, creating its directory if needed.
        init_admin_schema: Create the postal table, the metrics table and their indexes.
        list_tables: List the user tables in the database file.
    """

    backend_name = BackendKind.SQLITE.value
    import_schema_mode = SchemaMode.ADDITIVE
    info = {
        "type": "File-based Database",
        "port": "N/A",
        "features": ["Serverless", "Self-contained", "Zero-configuration", "Cross-platform"],
    }

    def __init__(self, settings=None):
        super().__init__(settings)
        self.conn: Optional[aiosqlite.Connection] = None

    @property
    def db_path(self) -> str:
        """The path of the database file."""
        return str(self.setting("path", "./data/postal_codes.db"))

    @property
    def is_connected(self) -> bool:
        return self.conn is not None

    async def connect(self):
        """
        Open the database file and configure the connection.
        """
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        try:
            # Enable WAL mode for better concurrent access
            await conn.execute("PRAGMA journal_mode=WAL")
            # This enables name-based access to columns
            conn.row_factory = aiosqlite.Row
        except Exception:
            await conn.close()
            raise
        self.conn = conn
        LOG.info(f"SQLite connected successfully ({self.db_path})")

    async def ping(self) -> bool:
        rows = await self.conn.execute_fetchall("SELECT 1")
        return list(rows[0]) == [1]

    async def close(self):
        if self.conn is not None:
            conn, self.conn = self.conn, None
            await conn.close()

    async def ensure_schema(self, mode: SchemaMode):
        if mode == SchemaMode.DESTRUCTIVE:
            await self.conn.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
            await self.conn.execute(CREATE_TABLE_SQL.format(if_not_exists=""))
        else:
            await self.conn.execute(CREATE_TABLE_IF_ABSENT_SQL)
        LOG.debug(f"SQLite table '{TABLE_NAME}' ready ({mode.value}).")

    async def insert_one(self, record: PostalRecord) -> bool:
        columns = ", ".join(INSERT_COLUMNS)
        placeholders = ", ".join("?" for _ in INSERT_COLUMNS)
        cursor = await self.conn.execute(
            f"INSERT OR IGNORE INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})",
            record.to_row(),
        )
        try:
            return cursor.rowcount > 0
        finally:
            await cursor.close()

    async def select_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        rows = await self.conn.execute_fetchall(
            f"SELECT * FROM {TABLE_NAME} ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [row_to_record(dict(row)) for row in rows]

    async def count(self) -> int:
        rows = await self.conn.execute_fetchall(f"SELECT COUNT(*) AS count FROM {TABLE_NAME}")
        return int(rows[0]["count"])

    async def init_admin_schema(self):
        """
        Create the postal table, the performance metrics table and their indexes.
        Every statement is create-if-absent, so this is safe to call repeatedly.
        """
        await self.conn.executescript(ADMIN_SCHEMA_SQL)
        LOG.info("SQLite tables created successfully")

    async def list_tables(self) -> List[str]:
        """
        List the tables in the database file.

        Returns:
            The table names, in the order SQLite reports them.
        """
        rows = await self.conn.execute_fetchall("SELECT name FROM sqlite_master WHERE type='table'")
        return [row["name"] for row in rows]

    def __repr__(self) -> str:
        return f"<SQLiteDriver {self.db_path}>"
