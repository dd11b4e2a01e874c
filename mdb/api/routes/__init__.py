##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
The `routes` package contains the API routers.

Modules:
    databases: Connection management, health and static backend metadata.
    postal: Record import, paged reads and per-backend counts.
    schema: Table creation and listing for the file-based backend.
"""
