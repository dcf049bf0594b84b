"""Keep a tracked target centred by steering a pan/tilt camera.

:class:`FollowMe` turns the target position into relative pan and tilt
moves. Pan and tilt take turns on a fixed seven-frame cycle, so the camera
is not flooded with commands. :func:`trajectory_centroid` gives the point to
follow when no single trajectory is selected. :class:`FpsCounter` measures
the frame rate.
"""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from polytrack.drawing import TrajectoryPoint

__all__ = [
    "Axis",
    "CameraMove",
    "FollowMe",
    "FpsCounter",
    "trajectory_centroid",
]

Point = tuple[int, int]


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division that rounds toward zero."""
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


def trajectory_centroid(
    trajectories: Iterable[Sequence[TrajectoryPoint]],
) -> Optional[Point]:
    """Mean of the newest point of every trajectory, or ``None`` if there are none.

    Coordinates are averaged with integer division that rounds toward zero.
    """
    sum_x = sum_y = count = 0
    for trajectory in trajectories:
        if not trajectory:
            raise ValueError("trajectory has no points")
        head = trajectory[0]
        sum_x += head.x
        sum_y += head.y
        count += 1
    if count == 0:
        return None
    return _trunc_div(sum_x, count), _trunc_div(sum_y, count)


class Axis(enum.Enum):
    """Camera axis a move applies to."""

    PAN = "pan"
    TILT = "tilt"


@dataclass(frozen=True)
class CameraMove:
    """A relative camera move along one axis."""

    axis: Axis
    amount: float


class FollowMe:
    """Steers the camera toward a target point, one axis per cycle step."""

    DEAD_ZONE = 40
    GAIN = 1.75
    PAN_STEP = 0
    TILT_STEP = 2
    CYCLE = 7

    def __init__(self) -> None:
        self.delay = 0

    def step(self, point: Point, width: int, height: int) -> Optional[CameraMove]:
        """Advance one frame and return the move to make, if any.

        ``point`` is the target in image coordinates and ``width`` and
        ``height`` are the image size. Nothing moves while the target is
        within :attr:`DEAD_ZONE` pixels of the image centre.
        """
        x, y = point
        dx = x - width // 2
        dy = y - height // 2
        distance = (dx * dx + dy * dy) ** 0.5

        move: Optional[CameraMove] = None
        if distance > self.DEAD_ZONE:
            if self.delay == self.PAN_STEP:
                move = CameraMove(Axis.PAN, -dx * self.GAIN)
            elif self.delay == self.TILT_STEP:
                move = CameraMove(Axis.TILT, dy * self.GAIN)

        self.delay = 0 if self.delay >= self.CYCLE - 1 else self.delay + 1
        return move


class FpsCounter:
    """Counts frames and updates a frames-per-second estimate about once a second."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.frames = 0
        self.next_update = 0.0
        self.fps = 0.0

    def tick(self) -> float:
        """Record one frame and return the current estimate."""
        self.frames += 1
        now = self._clock()
        overtime = now - self.next_update
        if overtime > 0:
            self.fps = self.frames / (1 + overtime)
            self.frames = 0
            self.next_update = now + 1.0
        return self.fps