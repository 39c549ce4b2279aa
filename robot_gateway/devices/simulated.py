"""In-process stand-ins for actuator and board hardware.

Used when the gateway runs without a physical robot attached and by the
test suite.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .. import constants
from ..core.utils import clamp_percent

LOGGER = logging.getLogger(__name__)


class SimulatedMotionController:
    """Pretends to move for ``steps * speed`` milliseconds, scaled by ``time_scale``."""

    def __init__(self, *, time_scale: float = 1.0, hands: bool = False) -> None:
        self._time_scale = max(0.0, time_scale)
        self._hands = hands
        self.performed: List[Tuple[str, int, int]] = []

    def has_hands(self) -> bool:
        return self._hands

    async def perform(self, action: str, steps: int, speed: int) -> None:
        self.performed.append((action, steps, speed))
        if action == "stop":
            return
        duration = steps * speed / 1000.0 * self._time_scale
        LOGGER.debug("Simulating %s for %.2fs", action, duration)
        await asyncio.sleep(duration)


@dataclass(slots=True)
class SimulatedAudioCodec:
    volume: int = constants.DEFAULT_VOLUME

    @property
    def output_volume(self) -> int:
        return self.volume

    def set_output_volume(self, volume: int) -> None:
        self.volume = clamp_percent(volume)


class SimulatedBoard:
    def __init__(
        self,
        *,
        battery_percent: int = 100,
        volume: int = constants.DEFAULT_VOLUME,
        audio_enabled: bool = True,
    ) -> None:
        self.battery_percent = battery_percent
        self._codec: Optional[SimulatedAudioCodec] = (
            SimulatedAudioCodec(clamp_percent(volume)) if audio_enabled else None
        )

    def battery_level(self) -> int:
        return self.battery_percent

    def audio_codec(self) -> Optional[SimulatedAudioCodec]:
        return self._codec
