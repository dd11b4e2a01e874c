##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Assembly of the MDB FastAPI application.

`create_app` builds one application around one `ConnectionRegistry`. The
registry is stored on `app.state` for the route handlers and its lifecycle is
tied to the application's lifespan: every backend is connected at startup (a
failing backend only logs) and every connection is closed at shutdown.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mdb import SERVICE_NAME, __version__
from mdb.api.errors import register_error_handlers
from mdb.api.routes import databases, postal, schema
from mdb.backends.connection_registry import ConnectionRegistry
from mdb.config import Config
from mdb.config.configfile import load_app_config
from mdb.utils import utc_timestamp


LOG = logging.getLogger(__name__)

API_INDEX = {
    "message": "Multi-Database Management System API",
    "endpoints": {
        "health": "/health",
        "databases": "/api/databases",
        "postal": "/api/postal",
        "schema": "/api/schema",
    },
}


def create_app(config: Config = None, registry: ConnectionRegistry = None, connect_on_startup: bool = True) -> FastAPI:
    """
    Build the MDB application.

    Args:
        config: The configuration to run with. Defaults to the resolved `app.yaml` and environment.
        registry: The connection registry to use. Defaults to a new registry built from `config`.
        connect_on_startup: Whether to connect every backend when the application starts.

    Returns:
        The configured FastAPI application.
    """
    config = config if config is not None else load_app_config()
    registry = registry if registry is not None else ConnectionRegistry(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if connect_on_startup:
            await registry.connect_all()
        try:
            yield
        finally:
            await registry.close_all()

    app = FastAPI(title=SERVICE_NAME, version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.registry = registry

    register_error_handlers(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "OK", "timestamp": utc_timestamp(), "service": SERVICE_NAME, "version": __version__}

    @app.get("/api", tags=["health"])
    async def api_index():
        return API_INDEX

    app.include_router(databases.router)
    app.include_router(postal.router)
    app.include_router(schema.router)

    LOG.debug(f"{SERVICE_NAME} {__version__} application created")
    return app
