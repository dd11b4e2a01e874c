##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""This module provides enumerations shared across MDB."""
from enum import Enum
from typing import List


__all__ = ("BackendKind", "SchemaMode", "HealthStatus")


class BackendKind(str, Enum):
    """
    The closed set of storage engines MDB can talk to. The values are the tags
    used in URLs, request bodies and configuration sections.

    Attributes:
        MYSQL (str): MySQL/MariaDB row store.
        POSTGRESQL (str): PostgreSQL row store.
        MONGODB (str): MongoDB document store.
        SQLITE (str): SQLite embedded file store.
        ORACLE (str): Oracle enterprise relational engine.
    """

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    MONGODB = "mongodb"
    SQLITE = "sqlite"
    ORACLE = "oracle"

    @classmethod
    def tags(cls) -> List[str]:
        """
        Every supported tag, in declaration order.

        Returns:
            A list of backend tags.
        """
        return [kind.value for kind in cls]


class SchemaMode(str, Enum):
    """
    How a driver should make sure the postal table exists.

    Attributes:
        DESTRUCTIVE (str): Drop the table and create it again (benchmark reset).
        ADDITIVE (str): Create the table only if it is absent.
    """

    DESTRUCTIVE = "destructive"
    ADDITIVE = "additive"


class HealthStatus(str, Enum):
    """
    Result of a health check on one backend.

    Attributes:
        HEALTHY (str): A cached connection answered its liveness ping.
        UNREACHABLE (str): The cached connection failed its ping, or the last connection attempt failed.
        UNCONFIGURED (str): No connection has ever been attempted for this backend.
    """

    HEALTHY = "healthy"
    UNREACHABLE = "unreachable"
    UNCONFIGURED = "unconfigured"
