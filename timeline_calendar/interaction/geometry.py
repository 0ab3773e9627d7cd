"""
Popup Geometry

Viewport-aware placement of a floating popup relative to the element
that triggered it. All values are CSS pixels in viewport coordinates.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


VIEWPORT_MARGIN = 10.0
ANCHOR_GAP = 10.0


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Viewport:
    width: float = 1280.0
    height: float = 800.0


def _clamp(value: float, low: float, high: float) -> float:
    # When the popup is larger than the viewport, the low edge wins.
    return max(low, min(value, high))


def position_popup(
    anchor: Rect,
    popup: Size,
    viewport: Viewport,
    margin: float = VIEWPORT_MARGIN,
    gap: float = ANCHOR_GAP
) -> Tuple[float, float]:
    """
    Centre the popup horizontally over the anchor and place it below with
    a gap, flipping above when there is no room below. Both axes are then
    clamped to the viewport minus the margin.
    """
    left = anchor.center_x - popup.width / 2
    top = anchor.bottom + gap
    if top + popup.height > viewport.height - margin:
        top = anchor.top - popup.height - gap

    left = _clamp(left, margin, viewport.width - popup.width - margin)
    top = _clamp(top, margin, viewport.height - popup.height - margin)
    return left, top
