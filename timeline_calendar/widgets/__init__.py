"""
Widgets

Month grid, sparkline strip and year switcher. Each widget owns its
data sources and renders immutable view models.
"""

from .month_grid import GridCell, GridPhase, MonthGrid, MonthGridView
from .page import TimelinePage
from .sparkline import (
    MAX_HEIGHT, MIN_HEIGHT, NO_MORE_CONTENT_TOOLTIP, NavControl, SparklineCell,
    SparklineColumn, SparklineStrip, SparklineView, cell_height, month_tooltip,
)
from .year_switcher import YearItem, YearSwitcher, YearSwitcherView

__all__ = [
    'GridCell', 'GridPhase', 'MonthGrid', 'MonthGridView',
    'TimelinePage',
    'MAX_HEIGHT', 'MIN_HEIGHT', 'NO_MORE_CONTENT_TOOLTIP', 'NavControl',
    'SparklineCell', 'SparklineColumn', 'SparklineStrip', 'SparklineView',
    'cell_height', 'month_tooltip',
    'YearItem', 'YearSwitcher', 'YearSwitcherView',
]
