"""Device command contract shared by every robot family.

The dispatcher only ever talks to a :class:`RobotDevice`. Differences
between families (optional limbs, differing action vocabularies) are
expressed through the capability list and the action names a device
accepts, never through type checks in the dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Protocol, Tuple, runtime_checkable


@dataclass(slots=True, frozen=True)
class DeviceIdentity:
    """Immutable identity built once when an adaptor is constructed.

    Attributes:
        device_id: Identifier advertised to clients, e.g. ``"dog-001"``.
        model: Family name, e.g. ``"dog"`` or ``"palqiqi"``.
        firmware_version: Version string reported as ``fw_version``.
        capabilities: Ordered action and feature tokens the device supports.
    """

    device_id: str
    model: str
    firmware_version: str
    capabilities: Tuple[str, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "model": self.model,
            "capabilities": list(self.capabilities),
            "fw_version": self.firmware_version,
        }


@runtime_checkable
class RobotDevice(Protocol):
    """Contract for device-family adaptors.

    Implementations must return promptly from every coroutine. Physical
    motion started by :meth:`execute_action` continues on an execution
    context owned by the adaptor after the call returns.
    """

    @property
    def identity(self) -> DeviceIdentity:
        ...

    @property
    def device_id(self) -> str:
        ...

    @property
    def model(self) -> str:
        ...

    @property
    def firmware_version(self) -> str:
        ...

    @property
    def capabilities(self) -> Tuple[str, ...]:
        """Capability tokens, identical on every call for the adaptor's lifetime."""
        ...

    async def execute_action(self, action: str, steps: int, speed: int) -> bool:
        """Begin executing ``action``.

        Returns:
            False when the action name is unknown or the device cannot accept
            it right now; True once execution has been started.
        """
        ...

    async def is_idle(self) -> bool:
        ...

    async def current_action(self) -> str:
        """Name of the running action, or an empty string when idle."""
        ...

    async def battery_level(self) -> int:
        ...

    async def get_volume(self) -> int:
        ...

    async def set_volume(self, volume: int) -> bool:
        """Clamp ``volume`` into [0, 100] and apply it.

        Returns:
            False only when the audio path is unavailable.
        """
        ...

    async def close(self) -> None:
        """Stop any running motion and release adaptor resources."""
        ...
