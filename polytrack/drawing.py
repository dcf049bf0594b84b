"""Image views that draw overlays: colour seeds, tracked objects and trajectories.

The overlay methods return the shapes to paint on top of the image, in paint
order, each carrying the pen it is drawn with.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Union

from polytrack.imageview import ImageHolder, MouseEvent

__all__ = [
    "Pen",
    "Circle",
    "Line",
    "TrackedObject",
    "TrajectoryPoint",
    "SeedImageHolder",
    "TrackImageHolder",
    "WHITE",
    "RED",
    "YELLOW",
    "BLACK",
]

Point = tuple[int, int]
Colour = tuple[int, int, int]

WHITE: Colour = (255, 255, 255)
RED: Colour = (255, 0, 0)
YELLOW: Colour = (255, 255, 0)
BLACK: Colour = (0, 0, 0)


@dataclass(frozen=True)
class Pen:
    """Outline colour and width of a shape."""

    colour: Colour
    width: int = 1


@dataclass(frozen=True)
class Circle:
    x: int
    y: int
    radius: int
    pen: Pen


@dataclass(frozen=True)
class Line:
    x1: int
    y1: int
    x2: int
    y2: int
    pen: Pen


Shape = Union[Circle, Line]


@dataclass(frozen=True)
class TrackedObject:
    """An object found in a frame: its centre and bounding box."""

    center: Point
    left: int
    right: int
    top: int
    bottom: int
    index: int = 0
    area: int = 0


@dataclass(frozen=True)
class TrajectoryPoint:
    """One position of a trajectory; ``tr_index`` identifies the trajectory."""

    x: int
    y: int
    tr_index: int = 0


class SeedImageHolder(ImageHolder):
    """Image view that marks the colour samples picked by the user."""

    MAX_SEEDS = 10000

    def __init__(self, parent: Any = None, show_seeds: bool = True) -> None:
        super().__init__(parent)
        self.seeds: list[Point] = []
        self.show_seeds = show_seeds

    def add_coordinate(self, point: Point) -> None:
        """Record a sample position in image coordinates."""
        if len(self.seeds) >= self.MAX_SEEDS:
            raise OverflowError(f"at most {self.MAX_SEEDS} seeds can be stored")
        x, y = point
        self.seeds.append((int(x), int(y)))
        self._refresh()

    def clear_coordinates(self) -> None:
        self.seeds.clear()

    def overlay(self) -> list[Shape]:
        """White dots at every seed, in screen coordinates."""
        if not self.show_seeds:
            return []
        pen = Pen(WHITE, 2)
        return [Circle(*self.image_to_screen(x, y), 2, pen) for x, y in self.seeds]


class TrackImageHolder(ImageHolder):
    """Image view that draws tracked objects, trajectories and the selection."""

    MAX_TRAJECTORY_POINTS = 20
    SELECTION_RADIUS = 150
    _NO_DISTANCE = 99999

    def __init__(self, parent: Any = None) -> None:
        super().__init__(parent)
        self.track_selection = False
        self.current_pos: Point = (0, 0)
        self.tracking_index = -1
        self.nearest_index = -1
        self.objects: Optional[list[TrackedObject]] = None
        self.trajectories: Optional[list[list[TrajectoryPoint]]] = None

    def set_object_list(self, objects: Iterable[TrackedObject]) -> None:
        self.objects = list(objects)

    def clear_object_list(self) -> None:
        self.objects = None

    def set_trajectories(self, trajectories: Iterable[Sequence[TrajectoryPoint]]) -> None:
        self.trajectories = [list(trajectory) for trajectory in trajectories]

    def clear_trajectories(self) -> None:
        self.trajectories = None

    def selected_index(self) -> int:
        """Position of the selected trajectory in the current list, or -1."""
        for i, trajectory in enumerate(self.trajectories or ()):
            if trajectory[0].tr_index == self.tracking_index:
                return i
        return -1

    def enable_track_selection(self, option: bool = True) -> None:
        self.track_selection = option

    def on_mouse_motion(self, event: MouseEvent) -> None:
        self.current_pos = (event.x, event.y)

    def on_left_up(self, event: MouseEvent) -> None:
        """Select the trajectory nearest to the pointer, if any."""
        if not self.trajectories or self.nearest_index == -1:
            return
        self.tracking_index = self.trajectories[self.nearest_index][0].tr_index

    def overlay(self) -> list[Shape]:
        """Boxes, trajectories and the selection line, in paint order.

        Also updates :attr:`nearest_index` when selection is enabled.
        """
        shapes: list[Shape] = []
        shapes.extend(self._object_shapes())
        shapes.extend(self._trajectory_shapes())
        if self.track_selection:
            shapes.extend(self._selection_shapes())
        return shapes

    def _object_shapes(self) -> list[Shape]:
        if self.objects is None:
            return []
        shapes: list[Shape] = []
        pen = Pen(RED, 1)
        tracking = self.selected_index()
        for obj in self.objects:
            sx, sy = self.image_to_screen(*obj.center)
            if tracking != -1 and self.trajectories is not None and self.track_selection:
                head = self.trajectories[tracking][0]
                if (head.x, head.y) == tuple(obj.center):
                    pen = Pen(YELLOW, 2)
                else:
                    pen = Pen(RED, 1)
            shapes.append(Circle(sx, sy, 3, pen))
            shapes.append(Line(obj.left, obj.top, obj.right, obj.top, pen))
            shapes.append(Line(obj.right, obj.top, obj.right, obj.bottom, pen))
            shapes.append(Line(obj.right, obj.bottom, obj.left, obj.bottom, pen))
            shapes.append(Line(obj.left, obj.bottom, obj.left, obj.top, pen))
        return shapes

    def _trajectory_shapes(self) -> list[Shape]:
        shapes: list[Shape] = []
        for trajectory in self.trajectories or ():
            if not trajectory:
                continue
            tr = trajectory[0].tr_index
            pen = Pen(((tr * 150) & 0xFF, (tr * 100) & 0xFF, (tr * 50) & 0xFF), 2)
            previous: Optional[Point] = None
            for point in trajectory[: self.MAX_TRAJECTORY_POINTS]:
                shapes.append(Circle(point.x, point.y, 2, pen))
                if previous is not None:
                    shapes.append(Line(point.x, point.y, *previous, pen))
                previous = (point.x, point.y)
        return shapes

    def _selection_shapes(self) -> list[Shape]:
        self.nearest_index = -1
        min_distance: float = self._NO_DISTANCE
        cx, cy = self.current_pos
        trajectories = self.trajectories or []
        for i, trajectory in enumerate(trajectories):
            head = trajectory[0]
            distance = math.hypot(cx - head.x, cy - head.y)
            if distance < min_distance and distance < self.SELECTION_RADIUS:
                min_distance = distance
                self.nearest_index = i
        if self.nearest_index == -1:
            return []
        head = trajectories[self.nearest_index][0]
        return [Line(head.x, head.y, cx, cy, Pen(BLACK, 4))]