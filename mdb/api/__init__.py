##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
The `api` package holds the HTTP surface of MDB.

Modules:
    app: Builds the FastAPI application and ties the registry's lifecycle to it.
    dependencies: Request-scoped accessors for the registry and configuration.
    errors: Exception handlers and the JSON error bodies they produce.
    models: Pydantic models for request bodies.

Subpackages:
    routes: One router per URL prefix (`/api/databases`, `/api/postal`, `/api/schema`).
"""
