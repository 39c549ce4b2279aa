import asyncio
from typing import Callable

import pytest

from robot_gateway.devices import DogAdaptor, PalqiqiAdaptor
from robot_gateway.devices.simulated import SimulatedBoard, SimulatedMotionController


@pytest.fixture
def motion() -> SimulatedMotionController:
    """Motion controller whose motions finish on the next loop iteration."""
    return SimulatedMotionController(time_scale=0.0)


@pytest.fixture
def slow_motion() -> SimulatedMotionController:
    """Motion controller that keeps a default action running for seconds."""
    return SimulatedMotionController(time_scale=1.0)


@pytest.fixture
def board() -> SimulatedBoard:
    return SimulatedBoard(battery_percent=87, volume=60)


@pytest.fixture
def dog(motion, board) -> DogAdaptor:
    return DogAdaptor(motion, board)


@pytest.fixture
def busy_dog(slow_motion, board) -> DogAdaptor:
    return DogAdaptor(slow_motion, board)


@pytest.fixture
def palqiqi_factory(board) -> Callable[..., PalqiqiAdaptor]:
    def factory(*, hands: bool) -> PalqiqiAdaptor:
        return PalqiqiAdaptor(
            SimulatedMotionController(time_scale=0.0, hands=hands), board
        )

    return factory



class SlowHaltMotion:
    """Runs every motion until cancelled, then takes a while to halt."""

    def __init__(self, halt_seconds: float = 0.2) -> None:
        self.halt_seconds = halt_seconds
        self.performed: list[str] = []
        self.halted: list[str] = []

    async def perform(self, action: str, steps: int, speed: int) -> None:
        self.performed.append(action)
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            await asyncio.sleep(self.halt_seconds)
            self.halted.append(action)
            raise


@pytest.fixture
def slow_halt_motion() -> SlowHaltMotion:
    return SlowHaltMotion()


@pytest.fixture
def slow_halt_dog(slow_halt_motion, board) -> DogAdaptor:
    return DogAdaptor(slow_halt_motion, board)
