"""
Calendar Math
=============

Pure functions over fictional dates.

INVARIANTS:
- real_year(1) == policy.reference_year, and the mapping is affine
- Weekday is computed on the proleptic Gregorian calendar for any integer
  real year (including zero and negatives)
- February is 28 days in every year
- Policy gates display/navigation; it never alters the arithmetic
"""

from __future__ import annotations
from typing import Tuple

from ..contracts.base import (
    MONTH_LENGTHS, MONTH_NAMES, NEGATIVE_YEAR_FLOOR, DEFAULT_REFERENCE_YEAR,
    FictionalDate, YearPolicy, YearRange, validate_month,
)


# Sakamoto's month offsets for the Gregorian weekday formula.
_MONTH_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)


def real_year(fictional_year: int, reference_year: int = DEFAULT_REFERENCE_YEAR) -> int:
    """Year 1 aligns with the reference year."""
    return reference_year + (fictional_year - 1)


def day_of_week(
    fictional_year: int,
    month: int,
    day: int,
    reference_year: int = DEFAULT_REFERENCE_YEAR
) -> int:
    """0 = Sunday .. 6 = Saturday."""
    validate_month(month)
    year = real_year(fictional_year, reference_year)
    if month < 3:
        year -= 1
    # Floor division keeps this correct for year <= 0.
    return (year + year // 4 - year // 100 + year // 400 + _MONTH_OFFSETS[month - 1] + day) % 7


def first_day_of_week(
    fictional_year: int,
    month: int,
    reference_year: int = DEFAULT_REFERENCE_YEAR
) -> int:
    return day_of_week(fictional_year, month, 1, reference_year)


def days_in_month(month: int) -> int:
    return MONTH_LENGTHS[validate_month(month) - 1]


def is_year_allowed(year: int, policy: YearPolicy) -> bool:
    if year == 0:
        return policy.allow_year_zero
    if year < 0:
        return policy.allow_negative_years
    return True


def min_allowed_year(policy: YearPolicy) -> int:
    if policy.allow_negative_years:
        return NEGATIVE_YEAR_FLOOR
    if policy.allow_year_zero:
        return 0
    return 1


def default_year(policy: YearPolicy) -> int:
    """Year shown when nothing else selects one."""
    return 0 if policy.allow_year_zero else 1


# =============================================================================
# RANGE WINDOWS
# =============================================================================

def default_range(policy: YearPolicy) -> YearRange:
    """
    Seven-year overview window keeping the current era centred while
    excluding disallowed years.
    """
    if policy.allow_negative_years and policy.allow_year_zero:
        return YearRange(-2, 4)
    if policy.allow_negative_years:
        return YearRange(-2, 5)
    if policy.allow_year_zero:
        return YearRange(0, 6)
    return YearRange(1, 7)


def centered_range(year: int, policy: YearPolicy, radius: int = 3) -> YearRange:
    """
    Window around a page's year, used on year/month/day/article pages.

    Year zero (when allowed) shows [-radius, radius], or [0, radius] without
    negative years. Otherwise the window is clamped at the policy floor.
    """
    if year == 0 and policy.allow_year_zero:
        return YearRange(-radius if policy.allow_negative_years else 0, radius)
    return YearRange(max(min_allowed_year(policy), year - radius), year + radius)


# =============================================================================
# DAY ADJACENCY
# =============================================================================

def previous_day(date: FictionalDate) -> FictionalDate:
    if date.day > 1:
        return FictionalDate(date.year, date.month, date.day - 1)
    if date.month > 1:
        return FictionalDate(date.year, date.month - 1, days_in_month(date.month - 1))
    return FictionalDate(date.year - 1, 12, days_in_month(12))


def next_day(date: FictionalDate) -> FictionalDate:
    if date.day < days_in_month(date.month):
        return FictionalDate(date.year, date.month, date.day + 1)
    if date.month < 12:
        return FictionalDate(date.year, date.month + 1, 1)
    return FictionalDate(date.year + 1, 1, 1)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move by whole months, wrapping 12 <-> 1 with a correlated year change."""
    validate_month(month)
    index = (year * 12 + (month - 1)) + delta
    return index // 12, index % 12 + 1


# =============================================================================
# TITLES
# =============================================================================

def month_title(month: int, year: int) -> str:
    return f"{MONTH_NAMES[validate_month(month) - 1]}, Year {year}"


def day_title(day: int, month: int, year: int) -> str:
    return f"{MONTH_NAMES[validate_month(month) - 1]} {day}, Year {year}"


def disallowed_year_tooltip(year: int) -> str:
    return f"Year {year} is not allowed with current settings"


