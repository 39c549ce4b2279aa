"""Adaptor for the biped ("palqiqi") robot family.

Some palqiqi boards ship with hand servos. Hand motions are advertised
only when the motion controller reports them at construction time.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .base import (
    FEATURE_CAPABILITIES,
    BaseRobotAdaptor,
    BoardPeripherals,
    MotionController,
)

PALQIQI_ACTIONS = (
    "walk_forward",
    "walk_backward",
    "turn_left",
    "turn_right",
    "home",
    "stop",
    "jump",
    "swing",
    "moonwalk",
    "bend",
    "shake_leg",
    "updown",
    "look_around",
)

HAND_ACTIONS = ("hands_up", "hands_down", "hand_wave")


class BipedMotionController(MotionController, Protocol):
    def has_hands(self) -> bool:
        """Whether hand actuators were detected on this board."""
        ...


class PalqiqiAdaptor(BaseRobotAdaptor):
    model = "palqiqi"
    default_device_id = "palqiqi-002"

    def __init__(
        self,
        motion: BipedMotionController,
        board: BoardPeripherals,
        *,
        device_id: Optional[str] = None,
        firmware_version: Optional[str] = None,
    ) -> None:
        self._biped = motion
        super().__init__(
            motion, board, device_id=device_id, firmware_version=firmware_version
        )

    def _detect_capabilities(self) -> List[str]:
        capabilities = list(PALQIQI_ACTIONS)
        if self._biped.has_hands():
            capabilities.extend(HAND_ACTIONS)
        capabilities.extend(FEATURE_CAPABILITIES)
        return capabilities
