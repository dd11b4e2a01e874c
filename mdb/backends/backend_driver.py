##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Abstract base class for backend drivers in the MDB application.

This module defines `BackendDriver`, an abstract base class that specifies the
capability interface every storage engine implements exactly once:

- connection lifecycle (`connect`, `ping`, `close`)
- the fixed postal table/collection shape (`ensure_schema`)
- per-record insert-or-ignore writes (`insert_one`, `finish_import`)
- paged reads and counts (`select_page`, `count`)

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be
    subclassed by backend-specific implementations such as `SQLiteDriver`.
"""

import logging
from abc import ABC, abstractmethod
from types import SimpleNamespace
from typing import Any, Dict, List

from mdb.common.enums import SchemaMode
from mdb.postal.data_models import PostalRecord


LOG = logging.getLogger(__name__)


class BackendDriver(ABC):
    """
    Abstract base class for a backend driver, which wraps one open connection to a
    storage engine and knows that engine's dialect for the postal table.

    Class Attributes:
        backend_name (str): The backend tag (e.g. "sqlite").
        import_schema_mode (SchemaMode): How the table is prepared before an import run.
        info (Dict[str, Any]): Static metadata reported by the info endpoint.

    Attributes:
        settings (SimpleNamespace): The configuration section for this backend.

    Methods:
        get_name: Retrieve the name of the backend.
        is_connected: Whether `connect` has succeeded and `close` has not been called since.
        connect: Open the connection.
        ping: Run a trivial liveness query.
        close: Release the connection.
        ensure_schema: Make sure the postal table exists, in the given mode.
        insert_one: Insert a single record, ignoring primary-key collisions.
        finish_import: Hook called once after an import loop.
        select_page: Read one page of records, newest first.
        count: Count every record.
    """

    backend_name: str = ""
    import_schema_mode: SchemaMode = SchemaMode.ADDITIVE
    info: Dict[str, Any] = {}

    def __init__(self, settings: SimpleNamespace = None):
        """
        Initialize the driver without connecting.

        Args:
            settings: The configuration section for this backend.
        """
        self.settings: SimpleNamespace = settings if settings is not None else SimpleNamespace()

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend (e.g. sqlite).
        """
        return self.backend_name

    def setting(self, key: str, default: Any = None) -> Any:
        """
        Read one value from this backend's configuration section.

        Args:
            key: The setting name.
            default: The value to return when the setting is absent.

        Returns:
            The configured value or `default`.
        """
        return getattr(self.settings, key, default)

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether this driver currently holds an open connection."""
        raise NotImplementedError("Subclasses of `BackendDriver` must implement an `is_connected` property.")

    @abstractmethod
    async def connect(self):
        """
        Open the connection to the backend.

        Raises:
            Exception: Whatever the underlying driver raises when the backend is unreachable.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement a `connect` method.")

    @abstractmethod
    async def ping(self) -> bool:
        """
        Run a trivial liveness query against the open connection.

        Returns:
            True if the backend answered.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement a `ping` method.")

    @abstractmethod
    async def close(self):
        """
        Release the connection. Calling this on a closed driver is a no-op.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement a `close` method.")

    @abstractmethod
    async def ensure_schema(self, mode: SchemaMode):
        """
        Make sure the postal table (or collection) exists.

        Args:
            mode: `DESTRUCTIVE` drops and recreates the table, `ADDITIVE` creates it only if absent.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement an `ensure_schema` method.")

    @abstractmethod
    async def insert_one(self, record: PostalRecord) -> bool:
        """
        Insert a single record, silently skipping it if its id already exists.

        Args:
            record: The record to insert. Its id is already set.

        Returns:
            True if a row was written, False if the id was already present.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement an `insert_one` method.")

    async def finish_import(self):
        """
        Hook called once after every record of an import has been attempted.
        Backends that auto-commit each insert have nothing to do here.
        """

    @abstractmethod
    async def select_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        """
        Read one page of records ordered newest first.

        Args:
            limit: The maximum number of records to return.
            offset: How many of the newest records to skip.

        Returns:
            The records, normalized to the camelCase shape.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement a `select_page` method.")

    @abstractmethod
    async def count(self) -> int:
        """
        Count every record in the postal table.

        Returns:
            The total number of records.
        """
        raise NotImplementedError("Subclasses of `BackendDriver` must implement a `count` method.")

    def __repr__(self) -> str:
        state = "connected" if self.is_connected else "disconnected"
        return f"<{self.__class__.__name__} {state}>"
