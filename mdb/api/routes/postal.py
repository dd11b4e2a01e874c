##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Routes under `/api/postal`: importing records, reading pages and counting.

Every handler reports backend failures as a 500 with the generic error body;
unknown backend tags surface as `BackendNotSupportedError` and become a 400.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from mdb.api.dependencies import get_registry
from mdb.api.errors import errors_exposed, server_error
from mdb.api.models import INSERT_EXAMPLE, InsertRequest
from mdb.backends.connection_registry import ConnectionRegistry
from mdb.exceptions import BackendNotSupportedError
from mdb.postal.importer import import_records
from mdb.postal.reader import DEFAULT_LIMIT, DEFAULT_OFFSET, read_records
from mdb.postal.stats import collect_stats
from mdb.utils import utc_timestamp


LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/api/postal", tags=["postal"])


def parse_paging_value(value: Optional[str], default: int, minimum: int) -> int:
    """
    Parse a `limit`/`offset` query value leniently.

    Anything that is not an integer, or is below `minimum`, falls back to `default`.

    Args:
        value: The raw query string value.
        default: The value to use when `value` is missing or invalid.
        minimum: The smallest accepted value.

    Returns:
        The parsed value.
    """
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= minimum else default


@router.post("/insert")
async def insert_records(request: Request, registry: ConnectionRegistry = Depends(get_registry)):
    """Insert records one at a time into the requested backend."""
    try:
        payload = InsertRequest.model_validate(await request.json())
    except ValueError:
        LOG.warning("Rejected insert request without a database name and data array")
        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "error": "A database name and a data array are required",
                "example": INSERT_EXAMPLE,
            },
        )

    try:
        inserted = await import_records(registry, payload.database, payload.data)
    except BackendNotSupportedError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return server_error(request, exc, f"Insert into {payload.database}")

    return {
        "status": "success",
        "database": payload.database,
        "inserted": inserted,
        "insertedCount": inserted,
        "message": f"Inserted {inserted} records into {payload.database}",
        "timestamp": utc_timestamp(),
    }


@router.get("/stats")
async def postal_stats(request: Request, registry: ConnectionRegistry = Depends(get_registry)):
    """Record counts for every backend, each collected independently."""
    return await collect_stats(registry, expose_errors=errors_exposed(request))


@router.get("/{database}/data")
async def read_data(
    database: str,
    request: Request,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    registry: ConnectionRegistry = Depends(get_registry),
):
    """One page of records from a backend, newest first."""
    limit_value = parse_paging_value(limit, DEFAULT_LIMIT, 1)
    offset_value = parse_paging_value(offset, DEFAULT_OFFSET, 0)

    try:
        page = await read_records(registry, database, limit_value, offset_value)
    except BackendNotSupportedError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return server_error(request, exc, f"Read from {database}")

    return {
        "status": "success",
        "database": database,
        "data": page.records,
        "count": page.pageSize,
        "pageSize": page.pageSize,
        "totalCount": page.totalCount,
        "limit": limit_value,
        "offset": offset_value,
        "timestamp": utc_timestamp(),
    }
