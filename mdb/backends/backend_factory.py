##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Backend factory for selecting and instantiating backend drivers in MDB.

This module defines the `BackendFactory` class, which maps every backend tag to
the `BackendDriver` subclass that implements it. It is the single place where a
tag coming from a URL or request body is validated; an unknown tag raises a
`BackendNotSupportedError` carrying the list of tags that would have been accepted.
"""

import logging
from types import SimpleNamespace
from typing import Any, Dict, List, Type

from mdb.backends.backend_driver import BackendDriver
from mdb.backends.mongodb.mongodb_driver import MongoDBDriver
from mdb.backends.mysql.mysql_driver import MySQLDriver
from mdb.backends.oracle.oracle_driver import OracleDriver
from mdb.backends.postgresql.postgresql_driver import PostgreSQLDriver
from mdb.backends.sqlite.sqlite_driver import SQLiteDriver
from mdb.common.enums import BackendKind
from mdb.exceptions import BackendNotSupportedError


LOG = logging.getLogger(__name__)


class BackendFactory:
    """
    Factory class for managing and instantiating the supported backend drivers.

    Attributes:
        _drivers (Dict[str, Type[BackendDriver]]): Maps backend tags to driver classes,
            in registration order.

    Methods:
        register: Register a driver class under a backend tag.
        list_available: Return a list of supported backend tags.
        resolve: Return the driver class for a backend tag.
        create_driver: Instantiate a driver by tag with its settings namespace.
        backend_info: Return the static metadata of every supported backend.
    """

    def __init__(self):
        self._drivers: Dict[str, Type[BackendDriver]] = {}
        self.register(BackendKind.MYSQL.value, MySQLDriver)
        self.register(BackendKind.POSTGRESQL.value, PostgreSQLDriver)
        self.register(BackendKind.MONGODB.value, MongoDBDriver)
        self.register(BackendKind.SQLITE.value, SQLiteDriver)
        self.register(BackendKind.ORACLE.value, OracleDriver)

    def register(self, backend: str, driver_class: Any):
        """
        Register `driver_class` as the implementation of `backend`.

        Args:
            backend: The backend tag.
            driver_class: The driver class to register.

        Raises:
            TypeError: If `driver_class` does not subclass `BackendDriver`.
        """
        if not isinstance(driver_class, type) or not issubclass(driver_class, BackendDriver):
            raise TypeError(f"{driver_class} must inherit from BackendDriver")
        self._drivers[backend] = driver_class
        LOG.debug(f"Registered driver {driver_class.__name__} for '{backend}'")

    def list_available(self) -> List[str]:
        """Every registered backend tag, in registration order."""
        return list(self._drivers)

    def resolve(self, backend: str) -> Type[BackendDriver]:
        """
        Look up the driver class registered for `backend`.

        Args:
            backend: The backend tag.

        Returns:
            The driver class.

        Raises:
            BackendNotSupportedError: If `backend` is not a known tag.
        """
        try:
            return self._drivers[backend]
        except KeyError:
            available = ", ".join(self._drivers)
            raise BackendNotSupportedError(
                f"Database '{backend}' is not supported. Available databases: {available}",
                backend=backend,
                supported=self.list_available(),
            ) from None

    def create_driver(self, backend: str, settings: SimpleNamespace = None) -> BackendDriver:
        """
        Instantiate the driver for `backend` without connecting it.

        Args:
            backend: The backend tag.
            settings: The configuration section for that backend.

        Returns:
            A disconnected driver.

        Raises:
            BackendNotSupportedError: If `backend` is not a known tag.
        """
        return self.resolve(backend)(settings=settings)

    def backend_info(self) -> Dict[str, Dict[str, Any]]:
        """
        Static metadata (type, default port, features) of every supported backend.

        Returns:
            A dictionary keyed by backend tag.
        """
        return {backend: dict(driver_class.info) for backend, driver_class in self._drivers.items()}


backend_factory = BackendFactory()
