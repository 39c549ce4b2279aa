"""Tests for GatewayApp lifecycle."""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiohttp
import pytest

from robot_gateway import constants
from robot_gateway.app import GatewayApp
from robot_gateway.config import GatewayConfig, ServerConfig


def _config(port: int) -> GatewayConfig:
    return GatewayConfig(
        server=ServerConfig(host="127.0.0.1", port=port),
        path=Path("robot-gateway.cfg"),
    )


async def _wait_running(app: GatewayApp) -> None:
    for _ in range(200):
        if app.server.is_running():
            return
        await asyncio.sleep(0.01)
    raise AssertionError("server never started")


@pytest.mark.asyncio
async def test_app_serves_until_shutdown(dog, unused_tcp_port):
    app = GatewayApp(_config(unused_tcp_port), device=dog)
    runner = asyncio.create_task(app.run())
    await _wait_running(app)

    async with aiohttp.ClientSession() as session:
        url = f"http://127.0.0.1:{unused_tcp_port}{constants.ROUTE_VOLUME}"
        async with session.post(url, json={"volume": 150}) as response:
            payload = await response.json()

    app.request_shutdown()
    await asyncio.wait_for(runner, timeout=5)

    assert payload == {
        "code": 200,
        "message": "volume updated",
        "data": {"volume": 100},
    }
    assert not app.server.is_running()


@pytest.mark.asyncio
async def test_app_builds_configured_device(unused_tcp_port):
    config = _config(unused_tcp_port)
    config.device.family = "palqiqi"
    config.device.device_id = "palqiqi-lab"

    app = GatewayApp(config)

    assert app.device is not None
    assert app.device.model == "palqiqi"
    assert app.device.device_id == "palqiqi-lab"


@pytest.mark.asyncio
async def test_app_returns_when_port_unavailable(dog, unused_tcp_port):
    blocker = await asyncio.start_server(
        lambda reader, writer: None, "127.0.0.1", unused_tcp_port
    )
    try:
        app = GatewayApp(_config(unused_tcp_port), device=dog)
        await asyncio.wait_for(app.run(), timeout=5)
    finally:
        blocker.close()
        await blocker.wait_closed()

    assert not app.server.is_running()
