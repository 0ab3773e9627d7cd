"""
Contracts

Immutable data shared by every layer of the timeline calendar.
"""

from .base import (
    DEFAULT_REFERENCE_YEAR,
    MONTH_ABBREVIATIONS,
    MONTH_LENGTHS,
    MONTH_NAMES,
    NEGATIVE_YEAR_FLOOR,
    Error,
    ErrorCode,
    FictionalDate,
    TimeOfDay,
    YearPolicy,
    YearRange,
    validate_month,
)
from .content import ArticleSummary, MonthCount, SparklineDataset

__all__ = [
    'DEFAULT_REFERENCE_YEAR',
    'MONTH_ABBREVIATIONS',
    'MONTH_LENGTHS',
    'MONTH_NAMES',
    'NEGATIVE_YEAR_FLOOR',
    'Error',
    'ErrorCode',
    'FictionalDate',
    'TimeOfDay',
    'YearPolicy',
    'YearRange',
    'validate_month',
    'ArticleSummary',
    'MonthCount',
    'SparklineDataset',
]
