"""Picking colour samples from an image to build a classifier pattern.

A :class:`PatternSampler` keeps the picked samples as a table of rows. Each
row holds the colour of one pixel and the image position that was clicked.
Clicking samples an ``n x n`` neighbourhood around the point, where ``n`` is
the odd grid size. :class:`OddSizeSpinner` keeps that size odd as the user
steps it up or down.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from polytrack.drawing import SeedImageHolder

__all__ = ["Sample", "PatternData", "PatternSampler", "OddSizeSpinner"]

Point = tuple[int, int]
Colour = tuple[int, int, int]

MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 9


@dataclass(frozen=True)
class Sample:
    """One sampled colour and the image position that was clicked for it."""

    x: int
    y: int
    colour: Colour


class PatternData(NamedTuple):
    """Sampled colours as an ``(n, 3)`` float array with their ``(n, 2)`` positions."""

    data: np.ndarray
    coordinates: np.ndarray

    @property
    def dim(self) -> int:
        return self.data.shape[1]

    @property
    def size(self) -> int:
        return self.data.shape[0]


def _check_grid_size(size: int) -> int:
    if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE or size % 2 == 0:
        raise ValueError(
            f"grid size must be odd and within {MIN_GRID_SIZE}..{MAX_GRID_SIZE}, got {size}"
        )
    return size


class PatternSampler:
    """Collects colour samples clicked on an image."""

    DIM = 3

    def __init__(self, grid_size: int = 1, holder: Optional[SeedImageHolder] = None) -> None:
        self._grid_size = _check_grid_size(grid_size)
        self.holder = holder
        self.samples: list[Sample] = []
        self.selected_row = 0

    @property
    def grid_size(self) -> int:
        """Side of the square neighbourhood sampled around each click."""
        return self._grid_size

    @grid_size.setter
    def grid_size(self, size: int) -> None:
        self._grid_size = _check_grid_size(size)

    def __len__(self) -> int:
        return len(self.samples)

    def add_sampling(self, image: np.ndarray, x: int, y: int) -> list[Sample]:
        """Sample the neighbourhood of ``(x, y)`` in image coordinates.

        Returns the samples added. A point outside the image adds nothing;
        neighbours that fall outside the image are skipped.
        """
        array = np.asarray(image)
        if array.ndim != 3 or array.shape[2] < 3:
            raise ValueError(f"expected an RGB image of shape (h, w, 3), got {array.shape}")
        height, width = array.shape[:2]
        if x < 0 or y < 0 or x >= width or y >= height:
            return []

        bounds = (self._grid_size - 1) // 2
        added: list[Sample] = []
        for i in range(-bounds, bounds + 1):
            for j in range(-bounds, bounds + 1):
                px, py = x + j, y + i
                if not (0 <= px < width and 0 <= py < height):
                    continue
                r, g, b = (int(c) for c in array[py, px, :3])
                sample = Sample(int(x), int(y), (r, g, b))
                self.samples.append(sample)
                added.append(sample)
                self.selected_row = len(self.samples) - 1
                if self.holder is not None:
                    self.holder.add_coordinate((int(x), int(y)))
        return added

    def clear_all(self) -> None:
        """Drop every sample and the marks drawn for them."""
        self.samples.clear()
        self.selected_row = 0
        if self.holder is not None:
            self.holder.clear_coordinates()

    def select_row(self, row: int) -> int:
        """Select a row; a row past the last sample selects one before it."""
        if row >= len(self.samples):
            row -= 1
        self.selected_row = row
        return row

    def clear_selected(self) -> Optional[Sample]:
        """Remove the selected sample, if it exists, and reset the selection."""
        removed: Optional[Sample] = None
        if 0 <= self.selected_row < len(self.samples):
            removed = self.samples.pop(self.selected_row)
        self.selected_row = 0
        return removed

    def can_confirm(self) -> bool:
        """True when there is at least one sample to build a pattern from."""
        return len(self.samples) > 0

    def pattern(self) -> PatternData:
        """The sampled colours and their positions as arrays."""
        data = np.array([s.colour for s in self.samples], dtype=float).reshape(-1, self.DIM)
        coords = np.array([(s.x, s.y) for s in self.samples], dtype=int).reshape(-1, 2)
        return PatternData(data, coords)


class OddSizeSpinner:
    """Keeps a spinner value odd by skipping every even step."""

    def __init__(self, value: int = 1, minimum: int = MIN_GRID_SIZE,
                 maximum: int = MAX_GRID_SIZE) -> None:
        if minimum > maximum:
            raise ValueError(f"minimum {minimum} exceeds maximum {maximum}")
        self.minimum = minimum
        self.maximum = maximum
        self.value = self._clamp(value)

    def _clamp(self, value: int) -> int:
        return min(self.maximum, max(self.minimum, value))

    def update(self, value: int) -> int:
        """Take a new value from the user and return the value kept.

        A step up moves one further up, a step down one further down.
        """
        current = value
        if current > self.value:
            current += 1
        elif current < self.value:
            current -= 1
        self.value = self._clamp(current)
        return self.value