##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
This module contains the logic for reading pages of postal-code records.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from mdb.backends.connection_registry import ConnectionRegistry
from mdb.common.enums import SchemaMode


LOG = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


@dataclass
class PageResult:
    """
    One page of records read from a backend.

    Attributes:
        records: The records on this page, newest first, in camelCase form.
        totalCount: The number of records the backend holds in total.
    """

    # pylint: disable=invalid-name
    records: List[Dict[str, Any]] = field(default_factory=list)
    totalCount: int = 0

    @property
    def pageSize(self) -> int:  # pylint: disable=invalid-name
        """The number of records on this page."""
        return len(self.records)


async def read_records(
    registry: ConnectionRegistry, backend: str, limit: int = DEFAULT_LIMIT, offset: int = DEFAULT_OFFSET
) -> PageResult:
    """
    Read one page of records from `backend`, ordered newest first.

    The postal table is created if it does not exist yet, so reading a fresh
    backend returns an empty page rather than an error.

    Args:
        registry: The registry to acquire the backend's driver from.
        backend: The backend tag.
        limit: The maximum number of records to return.
        offset: How many of the newest records to skip.

    Returns:
        The page, along with the backend's total record count.

    Raises:
        BackendNotSupportedError: If `backend` is not a supported tag.
        BackendConnectionError: If the backend could not be reached.
    """
    driver = await registry.acquire(backend)
    await driver.ensure_schema(SchemaMode.ADDITIVE)

    records = await driver.select_page(limit, offset)
    total = await driver.count()
    LOG.debug(f"{backend}: read {len(records)} records (limit={limit}, offset={offset}, total={total}).")
    return PageResult(records=records, totalCount=total)
