##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
PostgreSQL driver implementation for the MDB application.

This module defines the `PostgreSQLDriver` class, a concrete `BackendDriver` backed
by an `asyncpg` connection pool. Every import run starts from an empty table, and
duplicates are skipped with `ON CONFLICT (id) DO NOTHING`. Concurrent requests each
check out their own pooled connection.
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

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
        building_main INTEGER DEFAULT 0,
        building_sub INTEGER DEFAULT 0,
        full_road_address TEXT,
        full_jibun_address TEXT,
        created_at TIMESTAMP DEFAULT clock_timestamp()
    )
"""


class PostgreSQLDriver(BackendDriver):
    """
    A PostgreSQL-based implementation of the `BackendDriver` interface.

    `created_at` defaults to `clock_timestamp()` rather than `CURRENT_TIMESTAMP` so
    that rows written inside one transaction still get distinct, increasing times.

    Attributes:
        pool (Optional[asyncpg.Pool]): The open connection pool, if any.
    """

    backend_name = BackendKind.POSTGRESQL.value
    import_schema_mode = SchemaMode.DESTRUCTIVE
    info = {
        "type": "Object-Relational Database",
        "port": 5432,
        "features": ["ACID", "JSON Support", "Extensions", "Full-text Search"],
    }

    def __init__(self, settings=None):
        super().__init__(settings)
        self.pool: Optional[asyncpg.Pool] = None

    @property
    def is_connected(self) -> bool:
        return self.pool is not None

    async def connect(self):
        self.pool = await asyncpg.create_pool(
            host=self.setting("host", "localhost"),
            port=int(self.setting("port", 5432)),
            user=self.setting("user"),
            password=self.setting("password"),
            database=self.setting("database"),
            min_size=POOL_MIN_SIZE,
            max_size=POOL_MAX_SIZE,
        )
        LOG.info(f"PostgreSQL connected successfully ({self.setting('host')}:{self.setting('port')})")

    async def ping(self) -> bool:
        return await self.pool.fetchval("SELECT 1") == 1

    async def close(self):
        if self.pool is not None:
            pool, self.pool = self.pool, None
            await pool.close()

    async def ensure_schema(self, mode: SchemaMode):
        if mode == SchemaMode.DESTRUCTIVE:
            await self.pool.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
            await self.pool.execute(CREATE_TABLE_SQL.format(if_not_exists=""))
        else:
            await self.pool.execute(CREATE_TABLE_SQL.format(if_not_exists="IF NOT EXISTS "))
        LOG.debug(f"PostgreSQL table '{TABLE_NAME}' ready ({mode.value}).")

    async def insert_one(self, record: PostalRecord) -> bool:
        columns = ", ".join(INSERT_COLUMNS)
        placeholders = ", ".join(f"${i}" for i in range(1, len(INSERT_COLUMNS) + 1))
        inserted_id = await self.pool.fetchval(
            f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders}) ON CONFLICT (id) DO NOTHING RETURNING id",
            *record.to_row(),
        )
        return inserted_id is not None

    async def select_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        rows = await self.pool.fetch(
            f"SELECT * FROM {TABLE_NAME} ORDER BY created_at DESC, id DESC LIMIT $1 OFFSET $2",
            limit,
            offset,
        )
        return [row_to_record(dict(row)) for row in rows]

    async def count(self) -> int:
        return int(await self.pool.fetchval(f"SELECT COUNT(*) FROM {TABLE_NAME}"))

    def __repr__(self) -> str:
        return (
            f"<PostgreSQLDriver {self.setting('user')}@{self.setting('host')}:"
            f"{self.setting('port')}/{self.setting('database')}>"
        )
