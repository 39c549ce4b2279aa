"""Robot device-family adaptors."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from ..config import ConfigurationError, DeviceConfig
from ..core.device import RobotDevice
from .base import BaseRobotAdaptor, BoardPeripherals, MotionController
from .dog import DogAdaptor
from .palqiqi import PalqiqiAdaptor
from .simulated import SimulatedBoard, SimulatedMotionController

AdaptorFactory = Callable[..., BaseRobotAdaptor]

DEVICE_FAMILIES: Dict[str, AdaptorFactory] = {
    DogAdaptor.model: DogAdaptor,
    PalqiqiAdaptor.model: PalqiqiAdaptor,
}


def build_device(
    config: DeviceConfig,
    *,
    motion: Optional[MotionController] = None,
    board: Optional[BoardPeripherals] = None,
) -> RobotDevice:
    """Create the adaptor for the configured device family.

    Without explicit collaborators the adaptor is wired to simulated
    hardware seeded from ``config``.

    Raises:
        ConfigurationError: If ``config.family`` names no known family.
    """
    factory = DEVICE_FAMILIES.get(config.family)
    if factory is None:
        known = ", ".join(sorted(DEVICE_FAMILIES))
        raise ConfigurationError(
            f"Unknown device family {config.family!r} (expected one of: {known})"
        )

    if motion is None:
        motion = SimulatedMotionController(
            time_scale=config.time_scale, hands=config.has_hands
        )
    if board is None:
        board = SimulatedBoard(
            battery_percent=config.battery_percent,
            volume=config.initial_volume,
            audio_enabled=config.audio_enabled,
        )

    return factory(
        motion,
        board,
        device_id=config.device_id,
        firmware_version=config.firmware_version,
    )


__all__ = [
    "DEVICE_FAMILIES",
    "BaseRobotAdaptor",
    "BoardPeripherals",
    "DogAdaptor",
    "MotionController",
    "PalqiqiAdaptor",
    "SimulatedBoard",
    "SimulatedMotionController",
    "build_device",
]
