##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Tests for the `/api/databases` routes.
"""

from fastapi.testclient import TestClient

from mdb.api.app import create_app
from mdb.backends.connection_registry import ConnectionRegistry
from mdb.common.enums import BackendKind
from tests.fixture_data_classes import FakeDriver
from tests.fixture_types import FixtureClient, FixtureConfig, FixtureDict


class TestConnect:
    """Tests for `POST /api/databases/connect/{database}`."""

    def test_connect(self, api_client: FixtureClient, backends_fake_drivers: FixtureDict[str, FakeDriver]):
        """
        Test that connecting twice reuses the first connection.

        Args:
            api_client: A test client backed by the in-memory drivers.
            backends_fake_drivers: The in-memory drivers, keyed by backend tag.
        """
        for _ in range(2):
            response = api_client.post("/api/databases/connect/postgresql")
            assert response.status_code == 200
            assert response.json()["status"] == "Connected"
            assert response.json()["database"] == "postgresql"

        assert backends_fake_drivers["postgresql"].connect_calls == 1

    def test_unknown_database(self, api_client: FixtureClient):
        """
        Test that an unknown tag is a 400 listing the supported tags.

        Args:
            api_client: A test client backed by the in-memory drivers.
        """
        response = api_client.post("/api/databases/connect/redis")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid database type",
            "database": "redis",
            "supported": BackendKind.tags(),
        }

    def test_connection_failure(
        self,
        api_client: FixtureClient,
        backends_fake_drivers: FixtureDict[str, FakeDriver],
        config_object: FixtureConfig,
    ):
        """
        Test that a failing connection is a 500 carrying the driver message, or a
        generic message when errors are hidden.

        Args:
            api_client: A test client backed by the in-memory drivers.
            backends_fake_drivers: The in-memory drivers, keyed by backend tag.
            config_object: The configuration the application runs with.
        """
        backends_fake_drivers["mongodb"].fail_connect = ConnectionError("connection refused")

        response = api_client.post("/api/databases/connect/mongodb")
        assert response.status_code == 500
        assert response.json() == {"status": "Failed", "database": "mongodb", "error": "connection refused"}

        config_object.server.expose_errors = False
        response = api_client.post("/api/databases/connect/mongodb")
        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"


def test_health_reports_every_backend(api_client: FixtureClient, backends_fake_drivers: FixtureDict[str, FakeDriver]):
    """
    Test that the health endpoint reports cached, failed and untouched backends
    without connecting anything itself.

    Args:
        api_client: A test client backed by the in-memory drivers.
        backends_fake_drivers: The in-memory drivers, keyed by backend tag.
    """
    backends_fake_drivers["oracle"].fail_connect = ConnectionError("down")
    api_client.post("/api/databases/connect/mysql")
    api_client.post("/api/databases/connect/oracle")

    body = api_client.get("/api/databases/health").json()

    assert body["status"] == "OK"
    assert body["connected"] == 1
    assert body["total"] == 5
    assert body["databases"] == {
        "mysql": True,
        "postgresql": False,
        "mongodb": False,
        "sqlite": False,
        "oracle": False,
    }
    assert body["details"]["mysql"] == "healthy"
    assert body["details"]["oracle"] == "unreachable"
    assert body["details"]["sqlite"] == "unconfigured"
    assert backends_fake_drivers["sqlite"].connect_calls == 0


def test_info(api_client: FixtureClient):
    """
    Test that the info endpoint describes every backend.

    Args:
        api_client: A test client backed by the in-memory drivers.
    """
    body = api_client.get("/api/databases/info").json()

    assert body["status"] == "OK"
    assert list(body["databases"]) == BackendKind.tags()
    assert body["databases"]["mongodb"]["port"] == 27017


def test_connect_replaces_dead_connection(
    config_object: FixtureConfig, backends_fake_drivers: FixtureDict[str, FakeDriver]
):
    """
    Test that the connect endpoint reconnects a backend whose cached connection died,
    and that later reads go through the fresh connection.

    Args:
        config_object: The configuration to run the application with.
        backends_fake_drivers: The in-memory drivers, keyed by backend tag.
    """
    old_driver = backends_fake_drivers["postgresql"]
    new_driver = FakeDriver("postgresql")
    handed_out = iter([old_driver, new_driver])
    registry = ConnectionRegistry(driver_factory=lambda tag: next(handed_out))
    app = create_app(config_object, registry=registry, connect_on_startup=False)

    with TestClient(app) as client:
        assert client.post("/api/databases/connect/postgresql").status_code == 200
        old_driver.fail_ping = True

        response = client.post("/api/databases/connect/postgresql")
        assert response.status_code == 200
        assert response.json()["status"] == "Connected"
        assert client.get("/api/postal/postgresql/data").status_code == 200

    assert old_driver.close_calls == 1
    assert new_driver.connect_calls == 1
    assert new_driver.schema_calls
