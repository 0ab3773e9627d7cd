"""
Interaction Layer

Tagged targets, pointer events, hit-testing, popup geometry and the
preview popup hover state machine.
"""

from .events import (
    Background, DayCell, Direction, EventResult, IGNORED, MonthCell, NavButton,
    NavScope, PointerButton, PointerEvent, PointerKind, PopupSurface, Target,
    YearLabel, hit_test,
)
from .geometry import Rect, Size, Viewport, position_popup
from .popup import (
    DAY_POPUP_ID, EMPTY_TEXT, LOADING_TEXT, MONTH_POPUP_ID, HoverState,
    PopupItem, PopupRequest, PopupTimings, PopupView, PreviewPopup,
    build_items, sort_day_articles, sort_month_articles,
)

__all__ = [
    'Background', 'DayCell', 'Direction', 'EventResult', 'IGNORED', 'MonthCell',
    'NavButton', 'NavScope', 'PointerButton', 'PointerEvent', 'PointerKind',
    'PopupSurface', 'Target', 'YearLabel', 'hit_test',
    'Rect', 'Size', 'Viewport', 'position_popup',
    'DAY_POPUP_ID', 'EMPTY_TEXT', 'LOADING_TEXT', 'MONTH_POPUP_ID', 'HoverState',
    'PopupItem', 'PopupRequest', 'PopupTimings', 'PopupView', 'PreviewPopup',
    'build_items', 'sort_day_articles', 'sort_month_articles',
]
