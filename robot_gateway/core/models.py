"""Request and status models exchanged between the codec and devices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .. import constants


@dataclass(slots=True, frozen=True)
class ActionRequest:
    action: str
    steps: int = constants.DEFAULT_STEPS
    speed: int = constants.DEFAULT_SPEED_MS


@dataclass(slots=True, frozen=True)
class ActionResult:
    accepted: bool
    action_id: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        if not self.accepted or self.action_id is None:
            return {}
        return {"action_id": self.action_id}


@dataclass(slots=True, frozen=True)
class DeviceStatus:
    current_action: str
    is_idle: bool
    battery_percent: int
    volume_percent: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "action": self.current_action,
            "is_idle": self.is_idle,
            "battery": self.battery_percent,
            "volume": self.volume_percent,
        }


@dataclass(slots=True, frozen=True)
class VolumeSetting:
    requested: int
    applied: int
