##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other MDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to MDB.
##############################################################################

"""
Connection registry for the MDB application.

This module defines the `ConnectionRegistry` class, which owns every live backend
connection in the process. It holds at most one connected `BackendDriver` per
backend tag, creates them lazily on first use, pings them for health checks, and
closes them all at shutdown.

One registry is created per application (see `mdb.api.app.create_app`) and shared
by every request handler through `app.state`.
"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Union

from mdb.backends.backend_driver import BackendDriver
from mdb.backends.backend_factory import backend_factory
from mdb.common.enums import BackendKind, HealthStatus
from mdb.config import Config
from mdb.exceptions import BackendConnectionError, BackendNotSupportedError


LOG = logging.getLogger(__name__)

DriverFactory = Callable[[str], BackendDriver]


class ConnectionRegistry:
    """
    Holds at most one live driver per backend kind.

    Connections are established lazily by `acquire` and reused by every later
    call for as long as they answer a liveness ping. A failed connection attempt leaves the slot empty so the next call
    tries again; there is no retry or backoff beyond that.

    Attributes:
        config (Optional[Config]): The configuration the default driver factory reads settings from.

    Methods:
        acquire: Return a live driver for a backend, connecting or reconnecting as needed.
        reset: Close and reconnect the driver for a backend.
        get: Return the cached driver for a backend without connecting.
        last_error: Return the message of the most recent failed connection attempt.
        health_check: Ping every backend and return its `HealthStatus`.
        health_flags: Collapse a health report to booleans.
        connect_all: Connect every backend concurrently.
        close_all: Close every cached driver.
    """

    def __init__(self, config: Config = None, driver_factory: DriverFactory = None):
        """
        Create an empty registry.

        Args:
            config: The application configuration. Each backend's section is handed
                to its driver when the driver is created.
            driver_factory: A callable taking a backend tag and returning a
                disconnected driver. Defaults to the `backend_factory`.
        """
        self.config = config
        self._driver_factory: DriverFactory = driver_factory or self._create_driver
        self._drivers: Dict[str, BackendDriver] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._last_errors: Dict[str, str] = {}

    @property
    def backends(self) -> List[str]:
        """Every backend tag this registry manages."""
        return BackendKind.tags()

    def _create_driver(self, backend: str) -> BackendDriver:
        settings = self.config.backend_settings(backend) if self.config is not None else None
        return backend_factory.create_driver(backend, settings)

    def _validate(self, backend: Union[str, BackendKind]) -> str:
        """
        Normalize a backend tag and make sure it is supported.

        Raises:
            BackendNotSupportedError: If the tag is not one of the supported backends.
        """
        tag = backend.value if isinstance(backend, BackendKind) else backend
        if tag not in self.backends:
            raise BackendNotSupportedError(
                f"Database '{tag}' is not supported.", backend=tag, supported=self.backends
            )
        return tag

    def _lock_for(self, backend: str) -> asyncio.Lock:
        if backend not in self._locks:
            self._locks[backend] = asyncio.Lock()
        return self._locks[backend]

    async def _connect(self, backend: str) -> BackendDriver:
        """
        Create, connect and cache a driver. Must be called with the backend's lock held.

        Raises:
            BackendConnectionError: If the driver could not connect.
        """
        driver = self._driver_factory(backend)
        try:
            await driver.connect()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            message = str(exc) or exc.__class__.__name__
            self._last_errors[backend] = message
            LOG.error(f"{backend} connection failed: {message}")
            raise BackendConnectionError(backend, message) from exc

        self._last_errors.pop(backend, None)
        self._drivers[backend] = driver
        return driver

    async def acquire(self, backend: Union[str, BackendKind]) -> BackendDriver:
        """
        Return a live driver for `backend`, connecting it on first use.

        A cached driver is pinged first; if it no longer answers it is closed and
        replaced by a fresh connection. Concurrent callers asking for the same
        backend share a single ping and connection attempt.

        Args:
            backend: The backend tag.

        Returns:
            The connected driver.

        Raises:
            BackendNotSupportedError: If the tag is not supported.
            BackendConnectionError: If the backend could not be reached.
        """
        backend = self._validate(backend)
        async with self._lock_for(backend):
            driver = self._drivers.get(backend)
            if driver is not None:
                if await self._is_alive(backend, driver):
                    return driver
                LOG.warning(f"{backend} connection is no longer alive, reconnecting")
                del self._drivers[backend]
                await self._close_driver(backend, driver)
            return await self._connect(backend)

        async with self._lock_for(backend):
            driver = self._drivers.get(backend)
            if driver is None:
                driver = await self._connect(backend)
        return driver

    async def reset(self, backend: Union[str, BackendKind]) -> BackendDriver:
        """
        Close the cached driver for `backend` (if any) and connect a fresh one.

        Args:
            backend: The backend tag.

        Returns:
            The newly connected driver.

        Raises:
            BackendNotSupportedError: If the tag is not supported.
            BackendConnectionError: If the backend could not be reached.
        """
        backend = self._validate(backend)
        async with self._lock_for(backend):
            old_driver = self._drivers.pop(backend, None)
            if old_driver is not None:
                await self._close_driver(backend, old_driver)
            return await self._connect(backend)

    def get(self, backend: Union[str, BackendKind]) -> Optional[BackendDriver]:
        """
        Return the cached driver for `backend` without connecting.

        Args:
            backend: The backend tag.

        Returns:
            The cached driver, or None if the backend is not connected.
        """
        return self._drivers.get(self._validate(backend))

    def last_error(self, backend: Union[str, BackendKind]) -> Optional[str]:
        """
        Return the message of the most recent failed connection attempt for `backend`.

        Args:
            backend: The backend tag.

        Returns:
            The error message, or None if the last attempt succeeded or none was made.
        """
        return self._last_errors.get(self._validate(backend))

    async def _is_alive(self, backend: str, driver: BackendDriver) -> bool:
        try:
            return bool(await driver.ping())
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOG.warning(f"{backend} liveness ping failed: {exc}")
            return False

    async def _check_health(self, backend: str) -> HealthStatus:
        driver = self._drivers.get(backend)
        if driver is None:
            return HealthStatus.UNREACHABLE if backend in self._last_errors else HealthStatus.UNCONFIGURED
        return HealthStatus.HEALTHY if await self._is_alive(backend, driver) else HealthStatus.UNREACHABLE

    async def health_check(self) -> Dict[str, HealthStatus]:
        """
        Ping every backend. A health check never connects a backend that is not cached
        and never raises.

        Returns:
            A dictionary mapping each backend tag to its `HealthStatus`.
        """
        statuses = await asyncio.gather(*(self._check_health(backend) for backend in self.backends))
        return dict(zip(self.backends, statuses))

    @staticmethod
    def health_flags(statuses: Dict[str, HealthStatus]) -> Dict[str, bool]:
        """
        Collapse a health report to booleans, `True` meaning healthy.

        Args:
            statuses: The output of `health_check`.

        Returns:
            A dictionary mapping each backend tag to whether it is healthy.
        """
        return {backend: status == HealthStatus.HEALTHY for backend, status in statuses.items()}

    async def connect_all(self) -> Dict[str, bool]:
        """
        Connect every backend concurrently and wait for all attempts to settle.
        A failing backend never prevents the others from connecting, and this never raises.

        Returns:
            A dictionary mapping each backend tag to whether it is connected.
        """
        LOG.info("Initializing database connections...")
        results = await asyncio.gather(*(self.acquire(backend) for backend in self.backends), return_exceptions=True)
        outcome = {backend: not isinstance(result, BaseException) for backend, result in zip(self.backends, results)}
        LOG.info(f"Connected to {sum(outcome.values())}/{len(outcome)} databases")
        return outcome

    async def _close_driver(self, backend: str, driver: BackendDriver):
        try:
            await driver.close()
            LOG.info(f"{backend} connection closed")
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOG.warning(f"Error closing {backend} connection: {exc}")

    async def close_all(self):
        """
        Close every cached driver. Errors from individual drivers are logged and ignored.
        """
        drivers, self._drivers = self._drivers, {}
        for backend, driver in drivers.items():
            await self._close_driver(backend, driver)
