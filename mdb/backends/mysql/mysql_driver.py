##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
MySQL/MariaDB driver implementation for the MDB application.

This module defines the `MySQLDriver` class, a concrete `BackendDriver` that talks
to MySQL through an `aiomysql` connection pool. Every import run starts from an
empty table, and duplicates are skipped with `INSERT IGNORE`. Each statement runs
on a connection checked out of the pool, so concurrent requests never share one.
"""

import logging
from typing import Any, Dict, List, Optional

import aiomysql

from mdb.backends.backend_driver import BackendDriver
from mdb.common.enums import BackendKind, SchemaMode
from mdb.postal.data_models import INSERT_COLUMNS, TABLE_NAME, PostalRecord, row_to_record


LOG = logging.getLogger(__name__)

POOL_MIN_SIZE = 1
POOL_MAX_SIZE = 10

CREATE_TABLE_SQL = f"""
    CREATE TABLE {{if_not_exists}}{TABLE_NAME} (
        id VARCHAR(255) PRIMARY KEY,
        zip_code VARCHAR(10),
        sido VARCHAR(50),
        sigungu VARCHAR(50),
        eupmyeon VARCHAR(50),
        road_name VARCHAR(100),
        building_main INT DEFAULT 0,
        building_sub INT DEFAULT 0,
        full_road_address TEXT,
        full_jibun_address TEXT,
        created_at TIMESTAMP(6) DEFAULT CURRENT_TIMESTAMP(6)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""


class MySQLDriver(BackendDriver):
    """
    A MySQL-based implementation of the `BackendDriver` interface.

    Attributes:
        pool (Optional[aiomysql.Pool]): The open connection pool, if any.
    """

    backend_name = BackendKind.MYSQL.value
    import_schema_mode = SchemaMode.DESTRUCTIVE
    info = {
        "type": "Relational Database",
        "port": 3306,
        "features": ["ACID", "Transactions", "Indexing", "Replication"],
    }

    def __init__(self, settings=None):
        super().__init__(settings)
        self.pool: Optional[aiomysql.Pool] = None

    @property
    def is_connected(self) -> bool:
        return self.pool is not None

    async def connect(self):
        self.pool = await aiomysql.create_pool(
            host=self.setting("host", "localhost"),
            port=int(self.setting("port", 3306)),
            user=self.setting("user"),
            password=self.setting("password", ""),
            db=self.setting("database"),
            charset="utf8mb4",
            autocommit=True,
            minsize=POOL_MIN_SIZE,
            maxsize=POOL_MAX_SIZE,
        )
        LOG.info(f"MySQL connected successfully ({self.setting('host')}:{self.setting('port')})")

    async def ping(self) -> bool:
        async with self.pool.acquire() as conn:
            await conn.ping(reconnect=False)
        return True

    async def close(self):
        if self.pool is not None:
            pool, self.pool = self.pool, None
            pool.close()
            await pool.wait_closed()

    async def _execute(self, sql: str, params: Any = None) -> int:
        async with self.pool.acquire() as conn, conn.cursor() as cursor:
            return await cursor.execute(sql, params)

    async def _fetchall(self, sql: str, params: Any = None) -> List[Dict[str, Any]]:
        async with self.pool.acquire() as conn, conn.cursor(aiomysql.DictCursor) as cursor:
            await cursor.execute(sql, params)
            return list(await cursor.fetchall())

    async def ensure_schema(self, mode: SchemaMode):
        if mode == SchemaMode.DESTRUCTIVE:
            await self._execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
            await self._execute(CREATE_TABLE_SQL.format(if_not_exists=""))
        else:
            await self._execute(CREATE_TABLE_SQL.format(if_not_exists="IF NOT EXISTS "))
        LOG.debug(f"MySQL table '{TABLE_NAME}' ready ({mode.value}).")

    async def insert_one(self, record: PostalRecord) -> bool:
        columns = ", ".join(INSERT_COLUMNS)
        placeholders = ", ".join("%s" for _ in INSERT_COLUMNS)
        affected_rows = await self._execute(
            f"INSERT IGNORE INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})",
            record.to_row(),
        )
        return affected_rows > 0

    async def select_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        rows = await self._fetchall(
            f"SELECT * FROM {TABLE_NAME} ORDER BY created_at DESC, id DESC LIMIT %s OFFSET %s",
            (limit, offset),
        )
        return [row_to_record(row) for row in rows]

    async def count(self) -> int:
        rows = await self._fetchall(f"SELECT COUNT(*) AS count FROM {TABLE_NAME}")
        return int(rows[0]["count"])

    def __repr__(self) -> str:
        return (
            f"<MySQLDriver {self.setting('user')}@{self.setting('host')}:"
            f"{self.setting('port')}/{self.setting('database')}>"
        )
