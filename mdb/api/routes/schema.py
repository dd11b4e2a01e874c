##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Routes under `/api/schema`: table administration.

Only the file-based backend supports these operations; any other tag is
rejected with a 400 listing `sqlite` as the only supported value.
"""

import logging

from fastapi import APIRouter, Depends, Request

from mdb.api.dependencies import get_registry
from mdb.api.errors import backend_failure
from mdb.backends.connection_registry import ConnectionRegistry
from mdb.backends.sqlite.sqlite_driver import SQLiteDriver
from mdb.common.enums import BackendKind
from mdb.exceptions import BackendNotSupportedError, SchemaInitError
from mdb.utils import utc_timestamp


LOG = logging.getLogger(__name__)

SCHEMA_BACKENDS = [BackendKind.SQLITE.value]

router = APIRouter(prefix="/api/schema", tags=["schema"])


async def get_schema_driver(database: str, registry: ConnectionRegistry) -> SQLiteDriver:
    """
    Acquire the driver for a backend that supports schema administration.

    Raises:
        BackendNotSupportedError: If `database` does not support schema administration.
    """
    if database not in SCHEMA_BACKENDS:
        raise BackendNotSupportedError(
            f"Schema administration is not supported for '{database}'.", backend=database, supported=SCHEMA_BACKENDS
        )
    return await registry.acquire(database)


@router.post("/init/{database}")
async def init_schema(database: str, request: Request, registry: ConnectionRegistry = Depends(get_registry)):
    """Create the postal table, the performance metrics table and their indexes."""
    driver = None
    try:
        driver = await get_schema_driver(database, registry)
        await driver.init_admin_schema()
    except BackendNotSupportedError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        error = exc if driver is None else SchemaInitError(f"Could not create {database} tables: {exc}")
        return backend_failure(request, error, database)

    return {
        "status": "Success",
        "database": database,
        "message": "SQLite tables created successfully",
        "timestamp": utc_timestamp(),
    }


@router.get("/tables/{database}")
async def list_tables(database: str, request: Request, registry: ConnectionRegistry = Depends(get_registry)):
    """List the tables of a backend that supports schema administration."""
    try:
        driver = await get_schema_driver(database, registry)
        tables = await driver.list_tables()
    except BackendNotSupportedError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return backend_failure(request, exc, database)

    return {"status": "Success", "database": database, "tables": tables, "timestamp": utc_timestamp()}
