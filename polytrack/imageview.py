"""A zoomable, pannable image view that works in image and screen coordinates.

Images are ``numpy`` arrays of shape ``(height, width, 3)``. The holder
tracks the zoom ratio, the pan offset and the window size, converts between
screen and image coordinates, computes which part of the image is visible,
and forwards mouse events to callbacks registered by its owner.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np

__all__ = ["MouseTool", "MouseEvent", "Rect", "ImageHolder", "MouseCallback"]


class MouseTool(enum.Enum):
    """What a left-button drag does on the view."""

    NO_TOOL = enum.auto()
    ZOOM = enum.auto()
    FASTZOOM = enum.auto()
    PAN = enum.auto()


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event in screen coordinates."""

    x: int
    y: int
    left_down: bool = False
    right_down: bool = False


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


MouseCallback = Callable[[MouseEvent, Any], None]


def _rescale_nearest(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize with nearest-neighbour sampling."""
    width, height = max(1, width), max(1, height)
    old_h, old_w = image.shape[:2]
    rows = (np.arange(height) * old_h) // height
    cols = (np.arange(width) * old_w) // width
    return image[rows[:, None], cols[None, :]]


class ImageHolder:
    """Holds an image together with its zoom, pan and mouse-event state."""

    MIN_ZOOM = 0.25

    def __init__(self, parent: Any = None) -> None:
        self.parent = parent
        self.mouse_tool = MouseTool.NO_TOOL
        self.image: Optional[np.ndarray] = None
        self.image_raw: Optional[np.ndarray] = None
        self.zoom_ratio = 1.0
        self.max_zoom_ratio = 4.0
        self.pan_offset: tuple[int, int] = (0, 0)
        self.pan_anchor: tuple[int, int] = (0, 0)
        self.window_width = 0
        self.window_height = 0
        self.image_raw_view = Rect()
        self.refresh_count = 0
        self.disable_all_callbacks()

    # --- image and coordinates ---------------------------------------------

    def set_image(self, image: np.ndarray) -> None:
        """Replace the shown image and size the window to it."""
        array = np.asarray(image)
        if array.ndim not in (2, 3) or array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError(f"expected a non-empty 2-D or 3-D image, got shape {array.shape}")
        self.image = array
        self.image_raw = array.copy()
        self.set_window_size(array.shape[1], array.shape[0])
        self._refresh()

    def screen_to_image(self, x: int, y: int) -> tuple[int, int]:
        """Map a screen position to image coordinates."""
        px, py = self.pan_offset
        return int((x - px) / self.zoom_ratio), int((y - py) / self.zoom_ratio)

    def image_to_screen(self, x: int, y: int) -> tuple[int, int]:
        """Map an image position to screen coordinates."""
        px, py = self.pan_offset
        return int(x * self.zoom_ratio) + px, int(y * self.zoom_ratio) + py

    def set_window_size(self, width: int, height: int) -> None:
        """Set the window size; a zero dimension leaves that one unchanged."""
        if width:
            self.window_width = width
        if height:
            self.window_height = height

    def set_zoom_limit(self, limit: float) -> None:
        self.max_zoom_ratio = limit

    def restore_defaults(self) -> None:
        """Reset zoom to 1 and the pan offset to the origin."""
        self.zoom_ratio = 1.0
        self.pan_offset = (0, 0)

    # --- mouse tool and zoom -----------------------------------------------

    def set_mouse_state(self, tool: MouseTool) -> None:
        self.mouse_tool = MouseTool(tool)

    def set_pan_mouse(self, active: bool = True) -> None:
        self.mouse_tool = MouseTool.PAN if active else MouseTool.NO_TOOL

    def zoom_in(self, scale: float, incremental: bool = True) -> None:
        """Increase (or set) the zoom ratio, staying below the zoom limit."""
        if self.image_raw is None:
            return
        self.zoom_ratio = self.zoom_ratio + scale if incremental else scale
        if self.zoom_ratio >= self.max_zoom_ratio:
            self.zoom_ratio -= scale
        self.update_zoom_rate(self.zoom_ratio)
        self._refresh()

    def zoom_out(self, scale: float, incremental: bool = True) -> None:
        """Decrease (or set) the zoom ratio, staying above the minimum zoom."""
        if self.image_raw is None:
            return
        self.zoom_ratio = self.zoom_ratio - scale if incremental else scale
        if self.zoom_ratio <= self.MIN_ZOOM:
            self.zoom_ratio += scale
        self.update_zoom_rate(self.zoom_ratio)
        self._refresh()

    def update_zoom_rate(self, scale: float) -> None:
        """Move the pan offset so the zoom is centred on the window middle."""
        if self.image is None or self.image_raw is None:
            raise RuntimeError("no image set")
        center_x = self.window_width // 2
        center_y = self.window_height // 2
        diff_x = self.image.shape[1] * scale / self.image_raw.shape[1]
        diff_y = self.image.shape[0] * scale / self.image_raw.shape[0]
        px, py = self.pan_offset
        new_x = int((center_x - px) * diff_x)
        new_y = int((center_y - py) * diff_y)
        self.pan_offset = (center_x - new_x, center_y - new_y)
        self.pan_anchor = self.pan_offset

    # --- drawing ------------------------------------------------------------

    def compute_view(self) -> Optional[tuple[np.ndarray, tuple[int, int]]]:
        """Return the visible part of the image and where it starts on screen.

        Returns ``None`` when no image is set. The visible rectangle is also
        kept in :attr:`image_raw_view`.
        """
        if self.image_raw is None or self.image is None:
            return None

        if self.zoom_ratio != 1:
            height, width = self.image.shape[:2]
            self.image_raw = _rescale_nearest(
                self.image, int(width * self.zoom_ratio), int(height * self.zoom_ratio)
            )

        pan_x, pan_y = self.pan_offset
        if pan_x >= 0:
            x1, x2, start_x = 0, self.window_width - pan_x, pan_x
        else:
            x1, x2, start_x = -pan_x, self.window_width, 0
        if pan_y >= 0:
            y1, y2, start_y = 0, self.window_height - pan_y, pan_y
        else:
            y1, y2, start_y = -pan_y, self.window_height, 0

        raw_h, raw_w = self.image_raw.shape[:2]
        if x1 + x2 > raw_w:
            x2 = raw_w - x1
        if y1 + y2 > raw_h:
            y2 = raw_h - y1

        self.image_raw_view = Rect(x1, y1, x2, y2)
        if x2 <= 0 or y2 <= 0:
            visible = self.image_raw[0:0, 0:0]
        else:
            visible = self.image_raw[y1 : y1 + y2, x1 : x1 + x2]
        return visible, (start_x, start_y)

    def _refresh(self) -> None:
        self.refresh_count += 1

    # --- mouse events -------------------------------------------------------

    def disable_all_callbacks(self) -> None:
        """Detach every registered mouse callback."""
        self.left_up_callback: Optional[MouseCallback] = None
        self.left_down_callback: Optional[MouseCallback] = None
        self.right_up_callback: Optional[MouseCallback] = None
        self.left_double_click_callback: Optional[MouseCallback] = None
        self.left_drag_callback: Optional[MouseCallback] = None
        self.right_drag_callback: Optional[MouseCallback] = None

    def on_left_double_click(self, event: MouseEvent) -> None:
        if self.left_double_click_callback:
            self.left_double_click_callback(event, self.parent)

    def on_left_up(self, event: MouseEvent) -> None:
        if self.left_up_callback:
            self.left_up_callback(event, self.parent)

    def on_right_up(self, event: MouseEvent) -> None:
        if self.right_up_callback:
            self.right_up_callback(event, self.parent)

    def on_left_down(self, event: MouseEvent) -> None:
        if self.left_down_callback:
            self.left_down_callback(event, self.parent)
            return
        if self.mouse_tool is MouseTool.PAN:
            self.pan_anchor = (event.x, event.y)

    def on_mouse_motion(self, event: MouseEvent) -> None:
        if event.left_down:
            if self.mouse_tool is MouseTool.NO_TOOL and self.left_drag_callback:
                self.left_drag_callback(event, self.parent)
            if self.mouse_tool is MouseTool.PAN:
                px, py = self.pan_offset
                ax, ay = self.pan_anchor
                self.pan_offset = (px + event.x - ax, py + event.y - ay)
                self.pan_anchor = (event.x, event.y)
                self._refresh()
        if event.right_down:
            if self.mouse_tool is MouseTool.NO_TOOL and self.right_drag_callback:
                self.right_drag_callback(event, self.parent)