##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Tests for the `stats.py` module.
"""

import asyncio

from mdb.common.enums import BackendKind
from mdb.exceptions import GENERIC_ERROR_MESSAGE
from mdb.postal.importer import import_records
from mdb.postal.stats import backend_stats, collect_stats
from tests.fixture_data_classes import FakeDriver
from tests.fixture_types import FixtureDict, FixtureRegistry


def test_backend_stats_connected(backends_registry: FixtureRegistry):
    """
    Test that a reachable backend reports its record count.

    Args:
        backends_registry: A registry handing out the in-memory drivers.
    """

    async def scenario():
        await import_records(backends_registry, "mongodb", [{"id": "a"}, {"id": "b"}])
        return await backend_stats(backends_registry, "mongodb")

    stats = asyncio.run(scenario())

    assert stats["recordCount"] == 2
    assert stats["status"] == "connected"
    assert "error" not in stats
    assert stats["lastChecked"].endswith("Z")


def test_one_outage_does_not_affect_others(
    backends_registry: FixtureRegistry, backends_fake_drivers: FixtureDict[str, FakeDriver]
):
    """
    Test that an unreachable backend is reported as an error while the others are counted.

    Args:
        backends_registry: A registry handing out the in-memory drivers.
        backends_fake_drivers: The in-memory drivers, keyed by backend tag.
    """
    backends_fake_drivers["oracle"].fail_connect = ConnectionError("listener refused")

    stats = asyncio.run(collect_stats(backends_registry))

    assert list(stats) == BackendKind.tags()
    assert stats["oracle"]["status"] == "error"
    assert stats["oracle"]["recordCount"] == 0
    assert "listener refused" in stats["oracle"]["error"]
    for backend in ("mysql", "postgresql", "mongodb", "sqlite"):
        assert stats[backend]["status"] == "connected"


def test_hidden_errors_use_generic_message(
    backends_registry: FixtureRegistry, backends_fake_drivers: FixtureDict[str, FakeDriver]
):
    """
    Test that the raw failure message is replaced when errors are not exposed.

    Args:
        backends_registry: A registry handing out the in-memory drivers.
        backends_fake_drivers: The in-memory drivers, keyed by backend tag.
    """
    backends_fake_drivers["mysql"].fail_connect = ConnectionError("Access denied for user 'root'@'10.0.0.7'")

    stats = asyncio.run(collect_stats(backends_registry, expose_errors=False))

    assert stats["mysql"]["error"] == GENERIC_ERROR_MESSAGE
    assert stats["mysql"]["recordCount"] == 0
