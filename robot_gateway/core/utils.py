"""Core utility functions shared across modules."""

from __future__ import annotations

from .. import constants


def clamp_percent(value: int) -> int:
    """Clamp ``value`` into the inclusive percentage range used for volume and battery.

    Examples:
        >>> clamp_percent(150)
        100
        >>> clamp_percent(-5)
        0
    """
    return max(constants.VOLUME_MIN, min(constants.VOLUME_MAX, int(value)))
