##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Oracle driver implementation for the MDB application.

This module defines the `OracleDriver` class, a concrete `BackendDriver` built on
the asyncio API of `python-oracledb` (thin mode, no client libraries required).
Oracle has no `CREATE TABLE IF NOT EXISTS`, so creating an existing table is
detected through its error code and treated as success.

The driver keeps one connection so that an import can be committed as a single
batch; statements on it are serialized with a lock.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import oracledb

from mdb.backends.backend_driver import BackendDriver
from mdb.common.enums import BackendKind, SchemaMode
from mdb.postal.data_models import INSERT_COLUMNS, TABLE_NAME, PostalRecord, row_to_record


LOG = logging.getLogger(__name__)

# ORA-00955: name is already used by an existing object
ORA_NAME_IN_USE = 955
# ORA-00942: table or view does not exist
ORA_TABLE_NOT_FOUND = 942

CREATE_TABLE_SQL = f"""
    CREATE TABLE {TABLE_NAME} (
        id VARCHAR2(255) PRIMARY KEY,
        zip_code VARCHAR2(10),
        sido VARCHAR2(50),
        sigungu VARCHAR2(50),
        eupmyeon VARCHAR2(50),
        road_name VARCHAR2(100),
        building_main NUMBER DEFAULT 0,
        building_sub NUMBER DEFAULT 0,
        full_road_address VARCHAR2(500),
        full_jibun_address VARCHAR2(500),
        created_at TIMESTAMP DEFAULT SYSTIMESTAMP
    )
"""

MERGE_SQL = f"""
    MERGE INTO {TABLE_NAME} t
    USING (SELECT :id AS id FROM dual) s
    ON (t.id = s.id)
    WHEN NOT MATCHED THEN
        INSERT ({", ".join(INSERT_COLUMNS)})
        VALUES ({", ".join(f":{column}" for column in INSERT_COLUMNS)})
"""

SELECT_PAGE_SQL = f"""
    SELECT * FROM (
        SELECT t.*, ROWNUM rnum FROM (
            SELECT * FROM {TABLE_NAME} ORDER BY created_at DESC, id DESC
        ) t WHERE ROWNUM <= :max_row
    ) WHERE rnum > :offset_rows
"""


def _error_code(exc: oracledb.DatabaseError) -> Optional[int]:
    """Pull the ORA- error number out of a python-oracledb exception."""
    error = exc.args[0] if exc.args else None
    return getattr(error, "code", None)


class OracleDriver(BackendDriver):
    """
    An Oracle-based implementation of the `BackendDriver` interface.

    Inserts are not committed individually; `finish_import` commits the whole
    batch once the import loop is over.

    Attributes:
        conn (Optional[oracledb.AsyncConnection]): The open connection, if any.
        lock (asyncio.Lock): Serializes statements on `conn`.
    """

    backend_name = BackendKind.ORACLE.value
    import_schema_mode = SchemaMode.ADDITIVE
    info = {
        "type": "Enterprise Database",
        "port": 1521,
        "features": ["ACID", "PL/SQL", "Partitioning", "Advanced Analytics"],
    }

    def __init__(self, settings=None):
        super().__init__(settings)
        self.conn: Optional[oracledb.AsyncConnection] = None
        self.lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self.conn is not None

    async def connect(self):
        self.conn = await oracledb.connect_async(
            user=self.setting("user"),
            password=self.setting("password"),
            dsn=self.setting("dsn"),
        )
        LOG.info(f"Oracle connected successfully ({self.setting('dsn')})")

    async def ping(self) -> bool:
        async with self.lock:
            await self.conn.ping()
        return True

    async def close(self):
        if self.conn is not None:
            conn, self.conn = self.conn, None
            await conn.close()

    async def _execute_ddl(self, sql: str, ignored_code: int) -> bool:
        """
        Run a DDL statement, tolerating one specific ORA- error.

        Returns:
            True if the statement ran, False if it failed with `ignored_code`.
        """
        async with self.lock:
            with self.conn.cursor() as cursor:
                try:
                    await cursor.execute(sql)
                except oracledb.DatabaseError as exc:
                    if _error_code(exc) != ignored_code:
                        raise
                    return False
        return True

    async def ensure_schema(self, mode: SchemaMode):
        if mode == SchemaMode.DESTRUCTIVE:
            await self._execute_ddl(f"DROP TABLE {TABLE_NAME}", ORA_TABLE_NOT_FOUND)
        if await self._execute_ddl(CREATE_TABLE_SQL, ORA_NAME_IN_USE):
            LOG.debug(f"Oracle table '{TABLE_NAME}' created.")
        else:
            LOG.debug(f"Oracle table '{TABLE_NAME}' already exists.")

    async def insert_one(self, record: PostalRecord) -> bool:
        async with self.lock:
            with self.conn.cursor() as cursor:
                await cursor.execute(MERGE_SQL, record.to_columns())
                return cursor.rowcount > 0

    async def finish_import(self):
        async with self.lock:
            await self.conn.commit()

    async def select_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        async with self.lock:
            with self.conn.cursor() as cursor:
                await cursor.execute(SELECT_PAGE_SQL, {"max_row": offset + limit, "offset_rows": offset})
                columns = [description[0].lower() for description in cursor.description]
                rows = await cursor.fetchall()
        return [row_to_record(dict(zip(columns, row))) for row in rows]

    async def count(self) -> int:
        async with self.lock:
            with self.conn.cursor() as cursor:
                await cursor.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}")
                row = await cursor.fetchone()
        return int(row[0])

    def __repr__(self) -> str:
        return f"<OracleDriver {self.setting('user')}@{self.setting('dsn')}>"
