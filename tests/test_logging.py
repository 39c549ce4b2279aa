import logging
from pathlib import Path

import aiohttp
import pytest

from robot_gateway import constants
from robot_gateway.logging import ACCESS_LOGGER, configure_logging
from robot_gateway.server import RobotApiServer


class _Collecting(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    access = logging.getLogger(ACCESS_LOGGER)
    handlers = list(root.handlers)
    root_level, access_level = root.level, access.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)
    access.setLevel(access_level)


@pytest.mark.parametrize(
    "level, expected",
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("verbose", logging.INFO),
    ],
)
def test_level_names(level: str, expected: int) -> None:
    configure_logging(level)

    assert logging.getLogger().level == expected


def test_access_log_quiet_by_default() -> None:
    configure_logging("DEBUG")

    assert logging.getLogger(ACCESS_LOGGER).level == logging.WARNING


def test_access_log_enabled() -> None:
    configure_logging("WARNING", log_access=True)

    assert logging.getLogger(ACCESS_LOGGER).level == logging.INFO


def test_replaces_existing_root_handlers() -> None:
    configure_logging()
    configure_logging()

    assert len(logging.getLogger().handlers) == 1


def test_file_handler_creates_directory(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "robot-gateway.log"

    configure_logging("INFO", log_path=log_path)
    logging.getLogger("robot_gateway.test").info("volume set to %d", 40)
    for handler in logging.getLogger().handlers:
        handler.flush()

    contents = log_path.read_text(encoding="utf-8")
    assert "| INFO | robot_gateway.test | volume set to 40" in contents


@pytest.mark.asyncio
async def test_access_line_per_request(dog, unused_tcp_port) -> None:
    configure_logging("INFO", log_access=True)
    collector = _Collecting()
    logging.getLogger(ACCESS_LOGGER).addHandler(collector)

    server = RobotApiServer("127.0.0.1")
    await server.start(dog, unused_tcp_port)
    try:
        async with aiohttp.ClientSession() as session:
            url = f"http://127.0.0.1:{unused_tcp_port}{constants.ROUTE_STATUS}"
            async with session.get(url) as response:
                await response.json()
    finally:
        await server.stop()
        logging.getLogger(ACCESS_LOGGER).removeHandler(collector)

    assert any(
        f'"GET {constants.ROUTE_STATUS} HTTP/1.1" 200' in message
        for message in collector.messages
    )
