##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
This module contains the logic for importing postal-code records into a backend.

Records are written one at a time so that a bad record only costs itself: a
record that fails to insert is logged and skipped, and a record whose id is
already stored is silently ignored. Neither counts towards the result.
"""

import logging
from typing import Any, Iterable, Mapping, Union

from mdb.backends.connection_registry import ConnectionRegistry
from mdb.postal.data_models import PostalRecord


LOG = logging.getLogger(__name__)


async def import_records(
    registry: ConnectionRegistry, backend: str, records: Iterable[Union[PostalRecord, Mapping[str, Any]]]
) -> int:
    """
    Insert `records` into `backend`, in order, one insert per record.

    Before the first insert the postal table is prepared using the driver's
    `import_schema_mode` (the row-store benchmarks start from an empty table).
    Records without an id get one synthesized.

    Args:
        registry: The registry to acquire the backend's driver from.
        backend: The backend tag.
        records: The records to insert, as `PostalRecord` objects or camelCase dictionaries.

    Returns:
        The number of records actually written.

    Raises:
        BackendNotSupportedError: If `backend` is not a supported tag.
        BackendConnectionError: If the backend could not be reached.
    """
    driver = await registry.acquire(backend)
    await driver.ensure_schema(driver.import_schema_mode)

    inserted = 0
    attempted = 0
    for index, data in enumerate(records):
        attempted += 1
        try:
            record = (data if isinstance(data, PostalRecord) else PostalRecord.from_dict(data)).with_id()
            if await driver.insert_one(record):
                inserted += 1
            else:
                LOG.debug(f"{backend}: record '{record.id}' already exists, skipped.")
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOG.error(f"{backend}: failed to insert record #{index}: {exc}")

    await driver.finish_import()
    LOG.info(f"{backend}: inserted {inserted} of {attempted} records.")
    return inserted
