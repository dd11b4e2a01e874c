##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""Routes under `/api/databases`: health, explicit connections and static metadata."""

import logging

from fastapi import APIRouter, Depends, Request

from mdb.api.dependencies import get_registry
from mdb.api.errors import backend_failure
from mdb.backends.backend_factory import backend_factory
from mdb.backends.connection_registry import ConnectionRegistry
from mdb.exceptions import BackendConnectionError
from mdb.utils import utc_timestamp


LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/api/databases", tags=["databases"])


@router.get("/health")
async def databases_health(registry: ConnectionRegistry = Depends(get_registry)):
    """Check every backend without opening new connections."""
    statuses = await registry.health_check()
    flags = registry.health_flags(statuses)
    return {
        "status": "OK",
        "connected": sum(flags.values()),
        "total": len(flags),
        "databases": flags,
        "details": {backend: status.value for backend, status in statuses.items()},
        "timestamp": utc_timestamp(),
    }


@router.post("/connect/{database}")
async def connect_database(database: str, request: Request, registry: ConnectionRegistry = Depends(get_registry)):
    """
    Connect one backend, reusing the cached connection while it is alive and
    reconnecting when it is not.
    An unknown tag is rejected with a 400 by the `BackendNotSupportedError` handler.
    """
    try:
        await registry.acquire(database)
    except BackendConnectionError as exc:
        return backend_failure(request, exc, database)

    LOG.info(f"{database} connection requested and available")
    return {"status": "Connected", "database": database, "timestamp": utc_timestamp()}


@router.get("/info")
async def databases_info():
    """Static metadata for every supported backend."""
    return {"status": "OK", "databases": backend_factory.backend_info(), "timestamp": utc_timestamp()}
