##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""Request-scoped accessors for the objects stored on `app.state`."""

from fastapi import Request

from mdb.backends.connection_registry import ConnectionRegistry


def get_registry(request: Request) -> ConnectionRegistry:
    """Return the application's connection registry."""
    return request.app.state.registry
