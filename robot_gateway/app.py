"""Main application entry-point for robot-gateway."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .config import GatewayConfig, load_config
from .core.device import RobotDevice
from .devices import build_device
from .logging import configure_logging
from .server import RobotApiServer

LOGGER = logging.getLogger(__name__)


class GatewayApp:
    """Owns the bound device and the API server for one process.

    The device can be injected for testing or to wire real actuator and
    board drivers; otherwise it is built from ``config.device``.
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        *,
        device: Optional[RobotDevice] = None,
    ) -> None:
        self._config = config or load_config()
        self._device: Optional[RobotDevice] = device or build_device(
            self._config.device
        )
        server_config = self._config.server
        self._server = RobotApiServer(
            server_config.host,
            max_body_bytes=server_config.max_body_bytes,
            io_timeout_seconds=server_config.io_timeout_seconds,
        )
        self._shutdown_event: Optional[asyncio.Event] = None

    @property
    def server(self) -> RobotApiServer:
        return self._server

    @property
    def device(self) -> Optional[RobotDevice]:
        return self._device

    async def run(self) -> None:
        self._shutdown_event = asyncio.Event()

        LOGGER.info("robot-gateway starting with config: %s", self._config.path)
        started = await self._server.start(self._device, self._config.server.port)
        if not started:
            LOGGER.error("API server failed to start; shutting down")
            await self._close_device()
            return

        try:
            await self._shutdown_event.wait()
        except asyncio.CancelledError:
            LOGGER.info("robot-gateway received shutdown signal")
            raise
        finally:
            await self._server.stop()
            await self._close_device()

    def request_shutdown(self) -> None:
        if self._shutdown_event is not None:
            self._shutdown_event.set()

    async def _close_device(self) -> None:
        if self._device is not None:
            await self._device.close()

    @classmethod
    def start(cls, config: Optional[GatewayConfig] = None) -> None:
        instance = cls(config=config)
        configure_logging(
            instance._config.logging.level,
            log_path=instance._config.logging.path,
            log_access=instance._config.logging.log_access,
        )
        try:
            asyncio.run(instance.run())
        except KeyboardInterrupt:
            LOGGER.info("robot-gateway received shutdown signal")
