"""Screen rectangles for the four panes of a split editor view."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Optional


class ViewScreenLocation(enum.Enum):
    """Which quarter of the screen a viewport occupies."""

    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its top-left corner and size."""

    left_top_x: float = 0.0
    left_top_y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class ViewportRect:
    """The area and depth range a viewport renders into."""

    top_left_x: float = 0.0
    top_left_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    min_depth: float = 0.0
    max_depth: float = 0.0


class Viewport:
    """One pane of the editor screen."""

    def __init__(self, location: Optional[ViewScreenLocation] = None) -> None:
        self.location = location
        self.rect = ViewportRect()

    def _place(self, x: float, y: float, width: float, height: float) -> None:
        self.rect = replace(self.rect, top_left_x=x, top_left_y=y, width=width, height=height)

    def resize_to_screen(self, width: float, height: float) -> ViewportRect:
        """Fill this viewport's quarter of a screen of the given size."""
        half_w = float(width) * 0.5
        half_h = float(height) * 0.5
        corners = {
            ViewScreenLocation.TOP_LEFT: (0.0, 0.0),
            ViewScreenLocation.TOP_RIGHT: (half_w, 0.0),
            ViewScreenLocation.BOTTOM_LEFT: (0.0, half_h),
            ViewScreenLocation.BOTTOM_RIGHT: (half_w, half_h),
        }
        corner = corners.get(self.location)
        if corner is not None:
            self._place(corner[0], corner[1], half_w, half_h)
        self.rect = replace(self.rect, min_depth=0.0, max_depth=1.0)
        return self.rect

    def resize_to_splits(self, top: Rect, bottom: Rect, left: Rect, right: Rect) -> ViewportRect:
        """Take the column from left or right and the row from top or bottom."""
        column = {
            ViewScreenLocation.TOP_LEFT: (left, top),
            ViewScreenLocation.TOP_RIGHT: (right, top),
            ViewScreenLocation.BOTTOM_LEFT: (left, bottom),
            ViewScreenLocation.BOTTOM_RIGHT: (right, bottom),
        }.get(self.location)
        if column is not None:
            horizontal, vertical = column
            self._place(
                horizontal.left_top_x, vertical.left_top_y, horizontal.width, vertical.height
            )
        return self.rect

    def resize_to_rect(self, rect: Rect) -> ViewportRect:
        """Occupy exactly the given rectangle, keeping the depth range."""
        self._place(rect.left_top_x, rect.left_top_y, rect.width, rect.height)
        return self.rect