##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
The `postal` package holds the backend-independent postal-code operations.

Modules:
    data_models: The `PostalRecord` dataclass and the column mappings shared by the drivers.
    importer: Writes records one at a time with insert-or-ignore semantics.
    reader: Reads a page of records, newest first.
    stats: Counts the records held by every backend.
"""
