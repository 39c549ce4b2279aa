"""Adaptor for the quadruped ("dog") robot family."""

from __future__ import annotations

from typing import List

from .base import FEATURE_CAPABILITIES, BaseRobotAdaptor

DOG_ACTIONS = (
    "walk_forward",
    "walk_backward",
    "turn_left",
    "turn_right",
    "home",
    "stop",
    "say_hello",
    "sway_back_forth",
    "push_up",
    "sleep",
)


class DogAdaptor(BaseRobotAdaptor):
    model = "dog"
    default_device_id = "dog-001"

    def _detect_capabilities(self) -> List[str]:
        return [*DOG_ACTIONS, *FEATURE_CAPABILITIES]
