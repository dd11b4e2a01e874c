##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Exception handlers for the MDB API and the helpers that build error bodies.

Client errors (unknown backend tags, malformed bodies) become 400 responses and
are logged without a traceback. Backend failures become 500 responses; whether
the raw driver message is sent back depends on `server.expose_errors`.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mdb.exceptions import GENERIC_ERROR_MESSAGE, BackendNotSupportedError
from mdb.utils import utc_timestamp


LOG = logging.getLogger(__name__)


def errors_exposed(request: Request) -> bool:
    """
    Whether raw driver messages may be sent back, per the `server.expose_errors` setting.

    Args:
        request: The request being handled.

    Returns:
        True unless the application is configured to hide errors.
    """
    config = getattr(request.app.state, "config", None)
    server = getattr(config, "server", None)
    return server is None or bool(getattr(server, "expose_errors", True))


def error_detail(request: Request, exc: BaseException) -> str:
    """
    The message to report for `exc`, honoring the `server.expose_errors` setting.

    Args:
        request: The request being handled.
        exc: The exception that was raised.

    Returns:
        The raw exception message, or a generic message when errors are hidden.
    """
    if not errors_exposed(request):
        return GENERIC_ERROR_MESSAGE
    return str(exc) or exc.__class__.__name__


def server_error(request: Request, exc: BaseException, context: str) -> JSONResponse:
    """
    Log `exc` and build the generic 500 response.

    Args:
        request: The request being handled.
        exc: The exception that was raised.
        context: A short description of what was being done, for the log.

    Returns:
        A 500 response with a `{status, message, timestamp}` body.
    """
    LOG.error(f"{context} failed: {exc}", exc_info=LOG.isEnabledFor(logging.DEBUG))
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": error_detail(request, exc), "timestamp": utc_timestamp()},
    )


def backend_failure(request: Request, exc: BaseException, database: str) -> JSONResponse:
    """
    Log `exc` and build the 500 response used by the connection and schema endpoints.

    Args:
        request: The request being handled.
        exc: The exception that was raised.
        database: The backend tag the request was about.

    Returns:
        A 500 response with a `{status: "Failed", database, error}` body.
    """
    LOG.error(f"{database} request failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"status": "Failed", "database": database, "error": error_detail(request, exc)},
    )


async def backend_not_supported_handler(request: Request, exc: BackendNotSupportedError) -> JSONResponse:
    LOG.warning(f"Rejected request for unsupported database '{exc.backend}' ({request.url.path})")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid database type", "database": exc.backend, "supported": exc.supported},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    LOG.warning(f"Rejected malformed request to {request.url.path}")
    return JSONResponse(
        status_code=400,
        content={"status": "error", "error": "Malformed request", "details": jsonable_errors(exc)},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Route not found", "path": request.url.path})
    return JSONResponse(
        status_code=exc.status_code, content={"status": "error", "message": exc.detail, "timestamp": utc_timestamp()}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return server_error(request, exc, f"{request.method} {request.url.path}")


def jsonable_errors(exc: RequestValidationError) -> Any:
    """Strip the validation errors down to their location and message."""
    return [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]


def register_error_handlers(app: FastAPI):
    """
    Install every MDB exception handler on `app`.

    Args:
        app: The application to configure.
    """
    app.add_exception_handler(BackendNotSupportedError, backend_not_supported_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
