##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
The `common` package holds definitions shared by the backends, the postal
services and the HTTP layer.

Modules:
    enums: Enumerations for backend identity, schema modes and health states.
"""
