"""Core primitives for robot-gateway."""

from .action_ids import generate_action_id, is_action_id
from .device import DeviceIdentity, RobotDevice
from .models import ActionRequest, ActionResult, DeviceStatus, VolumeSetting
from .utils import clamp_percent

__all__ = [
    "ActionRequest",
    "ActionResult",
    "DeviceIdentity",
    "DeviceStatus",
    "RobotDevice",
    "VolumeSetting",
    "clamp_percent",
    "generate_action_id",
    "is_action_id",
]
