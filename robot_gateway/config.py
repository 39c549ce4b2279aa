"""Configuration loader for robot-gateway."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import constants
from .core.utils import clamp_percent

DEFAULT_DEVICE_FAMILY = "dog"


class ConfigurationError(RuntimeError):
    """Raised when the configuration cannot produce a usable gateway."""


@dataclass(slots=True)
class ServerConfig:
    host: str = constants.DEFAULT_HOST
    port: int = constants.DEFAULT_PORT
    max_body_bytes: int = constants.MAX_BODY_BYTES
    io_timeout_seconds: float = constants.IO_TIMEOUT_SECONDS


@dataclass(slots=True)
class DeviceConfig:
    family: str = DEFAULT_DEVICE_FAMILY
    device_id: Optional[str] = None  # Falls back to the family default when unset
    firmware_version: Optional[str] = None
    has_hands: bool = False
    initial_volume: int = constants.DEFAULT_VOLUME
    battery_percent: int = 100
    audio_enabled: bool = True
    time_scale: float = 1.0  # Multiplier applied to simulated motion durations


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_access: bool = False


@dataclass(slots=True)
class GatewayConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    raw: ConfigParser = field(default_factory=ConfigParser)
    path: Path = constants.DEFAULT_CONFIG_PATH


def _optional(parser: ConfigParser, section: str, option: str) -> Optional[str]:
    value = parser.get(section, option, fallback="").strip()
    return value or None


def load_config(path: Optional[Path] = None) -> GatewayConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser()
    parser.read_dict(
        {
            "server": {
                "host": constants.DEFAULT_HOST,
                "port": str(constants.DEFAULT_PORT),
                "max_body_bytes": str(constants.MAX_BODY_BYTES),
                "io_timeout_seconds": str(constants.IO_TIMEOUT_SECONDS),
            },
            "device": {
                "family": DEFAULT_DEVICE_FAMILY,
                "has_hands": "false",
                "initial_volume": str(constants.DEFAULT_VOLUME),
                "battery_percent": "100",
                "audio_enabled": "true",
                "time_scale": "1.0",
            },
            "logging": {
                "level": "INFO",
                "log_access": "false",
            },
        }
    )

    if config_path.exists():
        parser.read(config_path)

    server_defaults = ServerConfig()
    server = ServerConfig(
        host=parser.get("server", "host", fallback=server_defaults.host),
        port=parser.getint("server", "port", fallback=server_defaults.port),
        max_body_bytes=max(
            1,
            parser.getint(
                "server", "max_body_bytes", fallback=server_defaults.max_body_bytes
            ),
        ),
        io_timeout_seconds=parser.getfloat(
            "server", "io_timeout_seconds", fallback=server_defaults.io_timeout_seconds
        ),
    )
    if server.io_timeout_seconds <= 0:
        server.io_timeout_seconds = server_defaults.io_timeout_seconds

    device = DeviceConfig(
        family=parser.get("device", "family", fallback=DEFAULT_DEVICE_FAMILY)
        .strip()
        .lower(),
        device_id=_optional(parser, "device", "device_id"),
        firmware_version=_optional(parser, "device", "firmware_version"),
        has_hands=parser.getboolean("device", "has_hands", fallback=False),
        initial_volume=clamp_percent(
            parser.getint(
                "device", "initial_volume", fallback=constants.DEFAULT_VOLUME
            )
        ),
        battery_percent=clamp_percent(
            parser.getint("device", "battery_percent", fallback=100)
        ),
        audio_enabled=parser.getboolean("device", "audio_enabled", fallback=True),
        time_scale=max(0.0, parser.getfloat("device", "time_scale", fallback=1.0)),
    )

    log_path = _optional(parser, "logging", "path")
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path).expanduser() if log_path else None,
        log_access=parser.getboolean("logging", "log_access", fallback=False),
    )

    return GatewayConfig(
        server=server,
        device=device,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )


def save_config(config: GatewayConfig) -> None:
    """Persist the current configuration to disk."""

    config_path = config.path
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as stream:
        config.raw.write(stream)
