##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Module of all MDB-specific exception types.
"""

from typing import List


__all__ = (
    "GENERIC_ERROR_MESSAGE",
    "BackendNotSupportedError",
    "BackendConnectionError",
    "SchemaInitError",
)

# Reported instead of the raw driver message when errors are hidden from clients
GENERIC_ERROR_MESSAGE = "Internal server error"


class BackendNotSupportedError(Exception):
    """
    Exception to signal that the requested backend tag is not one of the
    backends MDB knows how to talk to. This is a client error.

    Attributes:
        backend: The tag that was requested.
        supported: The tags that would have been accepted.
    """

    def __init__(self, message: str, backend: str = None, supported: List[str] = None):
        super().__init__(message)
        self.backend = backend
        self.supported = supported or []


class BackendConnectionError(Exception):
    """
    Exception to signal that a connection to a backend could not be established.
    """

    def __init__(self, backend: str, message: str):
        super().__init__(message)
        self.backend = backend


class SchemaInitError(Exception):
    """
    Exception to signal that a backend's tables or collections could not be created.
    """
