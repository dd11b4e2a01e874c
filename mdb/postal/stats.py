##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
This module gathers the per-backend record counts reported by the stats endpoint.
"""

import logging
from typing import Any, Dict

from mdb.backends.connection_registry import ConnectionRegistry
from mdb.common.enums import SchemaMode
from mdb.exceptions import GENERIC_ERROR_MESSAGE
from mdb.utils import utc_timestamp


LOG = logging.getLogger(__name__)


async def backend_stats(registry: ConnectionRegistry, backend: str, expose_errors: bool = True) -> Dict[str, Any]:
    """
    Count the records held by one backend.

    Any failure (connecting, creating the table, counting) is reported in the
    result instead of being raised.

    Args:
        registry: The registry to acquire the backend's driver from.
        backend: The backend tag.
        expose_errors: Whether to report the raw failure message or a generic one.

    Returns:
        A dictionary with `recordCount`, `status` and `lastChecked` entries, plus
        `error` when the backend could not be counted.
    """
    try:
        driver = await registry.acquire(backend)
        await driver.ensure_schema(SchemaMode.ADDITIVE)
        count = await driver.count()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOG.warning(f"{backend}: could not collect stats: {exc}")
        return {
            "recordCount": 0,
            "status": "error",
            "error": (str(exc) or exc.__class__.__name__) if expose_errors else GENERIC_ERROR_MESSAGE,
            "lastChecked": utc_timestamp(),
        }
    return {"recordCount": count, "status": "connected", "lastChecked": utc_timestamp()}


async def collect_stats(registry: ConnectionRegistry, expose_errors: bool = True) -> Dict[str, Dict[str, Any]]:
    """
    Count the records held by every backend, one backend at a time.
    An outage on one backend never affects the entry of another.

    Args:
        registry: The registry to acquire drivers from.
        expose_errors: Whether to report raw failure messages or a generic one.

    Returns:
        A dictionary mapping each backend tag to its stats entry.
    """
    return {backend: await backend_stats(registry, backend, expose_errors) for backend in registry.backends}
