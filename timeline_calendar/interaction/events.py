"""
Interaction Contracts

Tagged interactive targets, pointer events and the hit-test that turns a
host element description into a target.

Every interactive element variant is an explicit type carrying its
payload. Widgets consume targets by type; the only place that inspects
raw element roles and data attributes is hit_test().
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union

from .geometry import Rect


class Direction(Enum):
    PREV = "prev"
    NEXT = "next"

    @property
    def sign(self) -> int:
        return -1 if self is Direction.PREV else 1


class NavScope(Enum):
    """What a navigation button moves."""
    RANGE = "range"     # sparkline window
    MONTH = "month"     # month grid month
    YEAR = "year"       # month grid year / year switcher


# =============================================================================
# TARGETS
# =============================================================================

@dataclass(frozen=True)
class NavButton:
    direction: Direction
    scope: NavScope = NavScope.RANGE


@dataclass(frozen=True)
class YearLabel:
    year: int


@dataclass(frozen=True)
class MonthCell:
    year: int
    month: int


@dataclass(frozen=True)
class DayCell:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class PopupSurface:
    popup_id: str


@dataclass(frozen=True)
class Background:
    """Anything that is not interactive."""


Target = Union[NavButton, YearLabel, MonthCell, DayCell, PopupSurface, Background]


# =============================================================================
# POINTER EVENTS
# =============================================================================

class PointerKind(Enum):
    ENTER = "enter"
    LEAVE = "leave"
    CLICK = "click"
    AUX_CLICK = "auxclick"          # non-primary button press
    CONTEXT_MENU = "contextmenu"


class PointerButton(Enum):
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer event already resolved to its target.

    related is the element the pointer moved to (LEAVE) or came from
    (ENTER), when known. anchor is the target element's box.
    """
    kind: PointerKind
    target: Target
    button: PointerButton = PointerButton.PRIMARY
    ctrl: bool = False
    meta: bool = False
    related: Optional[Target] = None
    anchor: Optional[Rect] = None

    @property
    def opens_new_context(self) -> bool:
        """ctrl/cmd modifier or a non-primary button."""
        return self.ctrl or self.meta or self.button is not PointerButton.PRIMARY


@dataclass(frozen=True)
class EventResult:
    """
    Outcome of dispatching one event.

    prevent_default is False whenever the host's native behaviour (such
    as the context menu) must stay available.
    """
    handled: bool
    prevent_default: bool = False
    navigated_to: Optional[str] = None


IGNORED = EventResult(handled=False)


# =============================================================================
# HIT TEST
# =============================================================================

def _int(data: Mapping[str, str], key: str) -> int:
    return int(str(data[key]).strip())


def hit_test(role: Optional[str], data: Optional[Mapping[str, str]] = None) -> Target:
    """
    Resolve a host element (role name + data attributes) to a target.

    Unknown roles and malformed attributes resolve to Background.
    """
    data = data or {}
    try:
        if role == 'nav-button':
            return NavButton(
                direction=Direction(data.get('direction', 'next')),
                scope=NavScope(data.get('scope', 'range')),
            )
        if role == 'year-label':
            return YearLabel(_int(data, 'year'))
        if role == 'month-cell':
            return MonthCell(_int(data, 'year'), _int(data, 'month'))
        if role == 'day-cell':
            return DayCell(_int(data, 'year'), _int(data, 'month'), _int(data, 'day'))
        if role == 'popup':
            return PopupSurface(str(data.get('popup', '')))
    except (KeyError, ValueError):
        return Background()
    return Background()
