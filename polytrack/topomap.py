"""Colour-plane projections of a frame: where each colour lands in RG, RB and GB."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

__all__ = ["ProjectionMaps", "projection_maps"]


class ProjectionMaps(NamedTuple):
    """Three 256x256 RGB images indexed by pairs of colour channels."""

    rg: np.ndarray
    rb: np.ndarray
    gb: np.ndarray


def _project(pixels: np.ndarray, row_channel: int, col_channel: int) -> np.ndarray:
    plane = np.zeros((256, 256, 3), dtype=np.uint8)
    if len(pixels) == 0:
        return plane
    keys = pixels[:, row_channel].astype(np.int64) * 256 + pixels[:, col_channel]
    # The last pixel with a given key is the one that remains visible.
    reversed_keys = keys[::-1]
    _, first = np.unique(reversed_keys, return_index=True)
    chosen = pixels[::-1][first]
    plane[chosen[:, row_channel], chosen[:, col_channel]] = chosen
    return plane


def projection_maps(frame: np.ndarray) -> ProjectionMaps:
    """Plot every pixel's colour at its (R,G), (R,B) and (G,B) coordinates.

    ``frame`` is an RGB image of shape ``(height, width, 3)`` with 8-bit
    values. Unused cells stay black; where several pixels share a cell the
    later one in row-major order wins.
    """
    array = np.asarray(frame)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"expected an RGB frame of shape (h, w, 3), got {array.shape}")
    if array.size and (array.min() < 0 or array.max() > 255):
        raise ValueError("frame values must lie in 0..255")
    pixels = array.reshape(-1, 3).astype(np.uint8)
    return ProjectionMaps(
        rg=_project(pixels, 0, 1),
        rb=_project(pixels, 0, 2),
        gb=_project(pixels, 1, 2),
    )