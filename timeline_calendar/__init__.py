"""
Timeline Calendar

Client-side core of a fictional-calendar timeline browser. Articles are
dated in an in-story calendar (year, month, day, optional time of day) and
this package drives the widgets that let a visitor browse them.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Frozen data model: FictionalDate, YearPolicy, YearRange,
     ArticleSummary, SparklineDataset
   - Explicit error codes for logged degradations

2. TEMPORAL (temporal/)
   - Calendar arithmetic (weekday mapping, month lengths, policy bounds)
   - Injectable timer scheduler (live asyncio / manual virtual time)

3. DATA ACCESS (access/)
   - Async HTTP client for the Article Store endpoints
   - Latest-wins sources: superseded responses never touch state

4. INTERACTION (interaction/)
   - Tagged interaction events, hit-testing and dispatch
   - Preview popup hover-intent state machine and positioning

5. WIDGETS (widgets/)
   - MonthGrid, SparklineStrip, YearSwitcher
   - Each renders immutable view models; no markup is produced here

CONSTRAINTS ENFORCED:
=====================
- Single-threaded, event-loop driven; suspension only at fetches/timers
- Fetch failures degrade (empty list / keep prior data), never raise
- Popup hides only when its timer fires AND the hover latch is clear
"""

from .config import TimelineConfig
from .contracts import (
    ArticleSummary,
    FictionalDate,
    MonthCount,
    SparklineDataset,
    TimeOfDay,
    YearPolicy,
    YearRange,
)

__version__ = "1.0.0"

__all__ = [
    'TimelineConfig',
    'ArticleSummary',
    'FictionalDate',
    'MonthCount',
    'SparklineDataset',
    'TimeOfDay',
    'YearPolicy',
    'YearRange',
]
