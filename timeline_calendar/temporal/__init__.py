"""
Temporal Layer
==============

Calendar arithmetic and timer scheduling.

Modules:
- calendar: weekday mapping, month lengths, policy bounds, range windows
- scheduler: injectable timer source (asyncio / virtual time)
"""

from .calendar import (
    centered_range,
    day_of_week,
    day_title,
    days_in_month,
    default_range,
    default_year,
    first_day_of_week,
    is_year_allowed,
    min_allowed_year,
    month_title,
    next_day,
    previous_day,
    real_year,
    shift_month,
)
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler, TimerHandle

__all__ = [
    'centered_range',
    'day_of_week',
    'day_title',
    'days_in_month',
    'default_range',
    'default_year',
    'first_day_of_week',
    'is_year_allowed',
    'min_allowed_year',
    'month_title',
    'next_day',
    'previous_day',
    'real_year',
    'shift_month',
    'AsyncioScheduler',
    'ManualScheduler',
    'Scheduler',
    'TimerHandle',
]
