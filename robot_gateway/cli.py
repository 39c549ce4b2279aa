"""Command-line interface for robot-gateway."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import constants
from .app import GatewayApp
from .config import ConfigurationError, load_config, save_config
from .devices import build_device

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=constants.APP_NAME,
        description="Local-network REST gateway for a single robot device",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    start_parser = subparsers.add_parser("start", help="Start the device API server")
    start_parser.add_argument(
        "--port", type=int, default=None, help="Override the configured listen port"
    )

    subparsers.add_parser(
        "show-config", help="Print the resolved configuration and exit"
    )
    subparsers.add_parser(
        "capabilities", help="Print the configured device identity and capabilities"
    )

    device_id_parser = subparsers.add_parser(
        "set-device-id", help="Persist the device identifier reported by the API"
    )
    device_id_parser.add_argument(
        "device_id", nargs="?", default="", help="New identifier; omit to clear it"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)

    if args.command == "start":
        if args.port is not None:
            config.server.port = args.port
        try:
            GatewayApp.start(config)
        except ConfigurationError as exc:
            LOGGER.error("Invalid configuration: %s", exc)
            return 1
        return 0

    if args.command == "show-config":
        print(f"Configuration loaded from {config.path!s}\n")
        for section in config.raw.sections():
            print(f"[{section}]")
            for key, value in config.raw[section].items():
                print(f"{key} = {value}")
            print()
        return 0

    if args.command == "capabilities":
        try:
            device = build_device(config.device)
        except ConfigurationError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        identity = device.identity
        print(f"device_id  = {identity.device_id}")
        print(f"model      = {identity.model}")
        print(f"fw_version = {identity.firmware_version}")
        print("capabilities:")
        for capability in identity.capabilities:
            print(f"  - {capability}")
        return 0

    if args.command == "set-device-id":
        device_id = args.device_id.strip()
        config.raw.set("device", "device_id", device_id)
        save_config(config)
        if device_id:
            print(f"Device id set to {device_id} in {config.path}")
        else:
            print(f"Device id cleared in {config.path}; the family default applies")
        return 0

    LOGGER.error("Unknown command: %s", args.command)
    return 1


if __name__ == "__main__":
    sys.exit(main())
