"""HTTP dispatcher exposing the robot device API."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Optional, Tuple, TypeVar

from aiohttp import web

from . import constants
from .codec import (
    ActionRejectedError,
    ServerUnavailableError,
    decode_action_request,
    decode_volume_request,
    envelope_middleware,
    envelope_response,
    parse_document,
    read_body,
)
from .core.action_ids import generate_action_id
from .core.device import RobotDevice
from .core.models import ActionResult, DeviceStatus
from .logging import ACCESS_LOG_FORMAT

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Route = Tuple[str, str]


class RobotApiServer:
    """Serves the five device routes for exactly one bound device.

    Lifetime is owned by the caller: construct it, ``await start(device,
    port)``, and ``await stop()`` when done.
    """

    def __init__(
        self,
        host: str = constants.DEFAULT_HOST,
        *,
        max_body_bytes: int = constants.MAX_BODY_BYTES,
        io_timeout_seconds: float = constants.IO_TIMEOUT_SECONDS,
    ) -> None:
        self._host = host
        self._max_body_bytes = max_body_bytes
        self._io_timeout = io_timeout_seconds
        self._device: Optional[RobotDevice] = None
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None
        self._routes: Tuple[Route, ...] = ()

    @property
    def device(self) -> Optional[RobotDevice]:
        return self._device

    @property
    def routes(self) -> Tuple[Route, ...]:
        return self._routes

    @property
    def port(self) -> Optional[int]:
        if self._runner is None:
            return None
        for address in self._runner.addresses:
            if isinstance(address, tuple) and len(address) >= 2:
                return int(address[1])
        return None

    def is_running(self) -> bool:
        return self._runner is not None

    async def start(
        self, device: Optional[RobotDevice], port: int = constants.DEFAULT_PORT
    ) -> bool:
        if self.is_running():
            LOGGER.warning("API server already running")
            return False
        if device is None:
            LOGGER.error("No robot device supplied; API server not started")
            return False

        LOGGER.info("Starting API server on %s:%s", self._host, port)
        self._device = device
        app = self.build_application()
        runner = web.AppRunner(app, access_log_format=ACCESS_LOG_FORMAT)
        await runner.setup()
        site = web.TCPSite(runner, self._host, port)
        try:
            await site.start()
        except OSError as exc:
            LOGGER.error("Failed to start HTTP listener: %s", exc)
            await runner.cleanup()
            self._device = None
            return False

        self._runner = runner
        self._site = site
        LOGGER.info(
            "API server started - device id: %s, model: %s",
            device.device_id,
            device.model,
        )
        return True

    async def stop(self) -> None:
        if self._runner is None:
            return
        with contextlib.suppress(Exception):
            if self._site is not None:
                await self._site.stop()
        await self._runner.cleanup()
        self._site = None
        self._runner = None
        self._device = None
        LOGGER.info("API server stopped")

    def build_application(self) -> web.Application:
        app = web.Application(middlewares=[envelope_middleware])
        app.router.add_get(constants.ROUTE_INFO, self._handle_info, allow_head=False)
        app.router.add_post(constants.ROUTE_ACTION, self._handle_action)
        app.router.add_get(
            constants.ROUTE_STATUS, self._handle_status, allow_head=False
        )
        app.router.add_get(
            constants.ROUTE_VOLUME, self._handle_volume_get, allow_head=False
        )
        app.router.add_post(constants.ROUTE_VOLUME, self._handle_volume_set)
        self._routes = tuple(
            (route.method, route.resource.canonical)
            for route in app.router.routes()
            if route.resource is not None
        )
        return app

    def _require_device(self) -> RobotDevice:
        device = self._device
        if device is None:
            raise ServerUnavailableError("no device bound")
        return device

    async def _call(self, operation: Awaitable[T], what: str) -> T:
        try:
            return await asyncio.wait_for(operation, self._io_timeout)
        except asyncio.TimeoutError:
            raise ServerUnavailableError(f"device did not respond to {what}") from None

    async def _read_document(self, request: web.Request) -> dict[str, Any]:
        raw = await read_body(
            request, max_bytes=self._max_body_bytes, timeout=self._io_timeout
        )
        return parse_document(raw)

    async def _handle_info(self, request: web.Request) -> web.Response:
        device = self._require_device()
        LOGGER.info("GET %s - ok", constants.ROUTE_INFO)
        return envelope_response(200, "ok", device.identity.as_dict())

    async def _handle_action(self, request: web.Request) -> web.Response:
        device = self._require_device()
        action = decode_action_request(await self._read_document(request))

        accepted = await self._call(
            device.execute_action(action.action, action.steps, action.speed),
            "action",
        )
        if not accepted:
            LOGGER.warning(
                "POST %s - action rejected: %s", constants.ROUTE_ACTION, action.action
            )
            raise ActionRejectedError(
                f"action '{action.action}' was rejected by the device"
            )

        result = ActionResult(accepted=True, action_id=generate_action_id())
        LOGGER.info(
            "POST %s - action: %s, steps=%d, speed=%d, action_id=%s",
            constants.ROUTE_ACTION,
            action.action,
            action.steps,
            action.speed,
            result.action_id,
        )
        return envelope_response(200, "action accepted", result.as_dict())

    async def _handle_status(self, request: web.Request) -> web.Response:
        device = self._require_device()
        status = DeviceStatus(
            current_action=await self._call(device.current_action(), "status"),
            is_idle=await self._call(device.is_idle(), "status"),
            battery_percent=await self._call(device.battery_level(), "status"),
            volume_percent=await self._call(device.get_volume(), "status"),
        )
        LOGGER.info("GET %s - ok", constants.ROUTE_STATUS)
        return envelope_response(200, "ok", status.as_dict())

    async def _handle_volume_get(self, request: web.Request) -> web.Response:
        device = self._require_device()
        volume = await self._call(device.get_volume(), "volume query")
        LOGGER.info("GET %s - volume: %d", constants.ROUTE_VOLUME, volume)
        return envelope_response(200, "ok", {"volume": volume})

    async def _handle_volume_set(self, request: web.Request) -> web.Response:
        device = self._require_device()
        setting = decode_volume_request(await self._read_document(request))

        applied = await self._call(
            device.set_volume(setting.applied), "volume change"
        )
        if not applied:
            LOGGER.warning("POST %s - audio path unavailable", constants.ROUTE_VOLUME)
            raise ServerUnavailableError("audio subsystem unavailable")

        volume = await self._call(device.get_volume(), "volume query")
        LOGGER.info(
            "POST %s - requested %d, volume now %d",
            constants.ROUTE_VOLUME,
            setting.requested,
            volume,
        )
        return envelope_response(200, "volume updated", {"volume": volume})
