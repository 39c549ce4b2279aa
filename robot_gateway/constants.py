"""Constants used across the robot-gateway package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "robot-gateway"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / f".{APP_NAME}" / DEFAULT_CONFIG_FILENAME
DEFAULT_LOG_PATH = Path.home() / f".{APP_NAME}" / "logs" / f"{APP_NAME}.log"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 80

# Request bodies larger than this are rejected with a 400 envelope.
MAX_BODY_BYTES = 256
IO_TIMEOUT_SECONDS = 10.0

API_PREFIX = "/api/v1/device"
ROUTE_INFO = f"{API_PREFIX}/info"
ROUTE_ACTION = f"{API_PREFIX}/action"
ROUTE_STATUS = f"{API_PREFIX}/status"
ROUTE_VOLUME = f"{API_PREFIX}/volume"

DEFAULT_STEPS = 4
DEFAULT_SPEED_MS = 1000

VOLUME_MIN = 0
VOLUME_MAX = 100
DEFAULT_VOLUME = 100

ACTION_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
ACTION_ID_LENGTH = 6
