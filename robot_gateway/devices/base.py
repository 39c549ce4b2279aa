"""Shared adaptor behaviour for robot device families.

Each family adaptor wraps two external collaborators:

- a :class:`MotionController` that drives the actuators for a named motion
- :class:`BoardPeripherals`, the board's battery gauge and audio output

The adaptor owns the asyncio task a motion runs on, so
:meth:`BaseRobotAdaptor.execute_action` returns as soon as the motion has
been scheduled. Action and volume changes go through a single lock so two
requests never interleave hardware commands.
"""

from __future__ import annotations

import asyncio
import logging
from typing import ClassVar, FrozenSet, List, Optional, Protocol, Tuple

from .. import constants
from ..core.device import DeviceIdentity
from ..core.utils import clamp_percent

LOGGER = logging.getLogger(__name__)

FEATURE_CAPABILITIES: Tuple[str, ...] = ("battery", "status", "volume")

# Accepted even while another motion is running; they cancel it first.
PREEMPTING_ACTIONS: FrozenSet[str] = frozenset({"stop", "home"})


class MotionController(Protocol):
    """Actuator driver for one device family."""

    async def perform(self, action: str, steps: int, speed: int) -> None:
        """Run a motion to completion. Cancellation must halt the actuators."""
        ...


class AudioOutput(Protocol):
    @property
    def output_volume(self) -> int:
        ...

    def set_output_volume(self, volume: int) -> None:
        ...


class BoardPeripherals(Protocol):
    """Hardware battery and audio query surface."""

    def battery_level(self) -> int:
        ...

    def audio_codec(self) -> Optional[AudioOutput]:
        """Return the audio output, or None when the board has no audio path."""
        ...


class BaseRobotAdaptor:
    """Common implementation of the :class:`~robot_gateway.core.RobotDevice` contract.

    Subclasses set the class-level identity defaults and implement
    :meth:`_detect_capabilities`, which is called exactly once.
    """

    model: ClassVar[str] = ""
    default_device_id: ClassVar[str] = ""
    default_firmware_version: ClassVar[str] = "1.0.0"

    def __init__(
        self,
        motion: MotionController,
        board: BoardPeripherals,
        *,
        device_id: Optional[str] = None,
        firmware_version: Optional[str] = None,
    ) -> None:
        self._motion = motion
        self._board = board
        capabilities = tuple(self._detect_capabilities())
        self._identity = DeviceIdentity(
            device_id=device_id or self.default_device_id,
            model=self.model,
            firmware_version=firmware_version or self.default_firmware_version,
            capabilities=capabilities,
        )
        self._actions = frozenset(
            name for name in capabilities if name not in FEATURE_CAPABILITIES
        )
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task[None]] = None
        self._current_action = ""
        LOGGER.info(
            "%s adaptor initialised - device id: %s",
            self.model,
            self._identity.device_id,
        )

    def _detect_capabilities(self) -> List[str]:
        raise NotImplementedError

    @property
    def identity(self) -> DeviceIdentity:
        return self._identity

    @property
    def device_id(self) -> str:
        return self._identity.device_id

    @property
    def firmware_version(self) -> str:
        return self._identity.firmware_version

    @property
    def capabilities(self) -> Tuple[str, ...]:
        return self._identity.capabilities

    def _busy(self) -> bool:
        return self._task is not None and not self._task.done()

    async def execute_action(self, action: str, steps: int, speed: int) -> bool:
        if action not in self._actions:
            LOGGER.warning("Unknown action for %s: %s", self.model, action)
            return False
        if steps < 1 or speed < 1:
            LOGGER.warning(
                "Rejecting %s with steps=%d speed=%d", action, steps, speed
            )
            return False

        async with self._lock:
            if self._busy():
                if action not in PREEMPTING_ACTIONS:
                    LOGGER.info(
                        "Rejecting %s: %s still running", action, self._current_action
                    )
                    return False
                await self._cancel_running()

            self._current_action = action
            self._task = asyncio.create_task(
                self._run_motion(action, steps, speed),
                name=f"{self.model}-{action}",
            )
        return True

    async def _run_motion(self, action: str, steps: int, speed: int) -> None:
        try:
            await self._motion.perform(action, steps, speed)
        except asyncio.CancelledError:
            LOGGER.debug("Motion %s cancelled", action)
            raise
        except Exception:
            LOGGER.exception("Motion %s failed", action)
        finally:
            if asyncio.current_task() is self._task:
                self._current_action = ""

    async def _cancel_running(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        # The halt must finish even if this caller is cancelled meanwhile.
        await asyncio.wait({task})
        self._current_action = ""

    async def is_idle(self) -> bool:
        return not self._busy()

    async def current_action(self) -> str:
        return self._current_action if self._busy() else ""

    async def battery_level(self) -> int:
        return clamp_percent(self._board.battery_level())

    async def get_volume(self) -> int:
        codec = self._board.audio_codec()
        if codec is None:
            return constants.DEFAULT_VOLUME
        return clamp_percent(codec.output_volume)

    async def set_volume(self, volume: int) -> bool:
        applied = clamp_percent(volume)
        async with self._lock:
            codec = self._board.audio_codec()
            if codec is None:
                LOGGER.error("%s has no audio codec; volume unchanged", self.model)
                return False
            codec.set_output_volume(applied)
        LOGGER.info("%s volume set to %d", self.model, applied)
        return True

    async def close(self) -> None:
        async with self._lock:
            await self._cancel_running()
        self._task = None
