"""
Base Contracts and Shared Types

Foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- Layers may import types but MUST NOT modify this module
- All types are frozen dataclasses or enums
- Construction-time validation only; no I/O, no clocks
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Optional, Tuple


# =============================================================================
# ERROR STATES (Explicit, logged, never raised to widgets)
# =============================================================================

class ErrorCode(Enum):
    """
    Enumerated degradations of the data access layer.

    These are recorded and logged. Widgets never see them as exceptions.
    """
    # Transport
    TRANSPORT_FAILED = auto()
    HTTP_STATUS = auto()

    # Decode
    MALFORMED_PAYLOAD = auto()
    UNSUCCESSFUL_RESPONSE = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with context.
    Errors are data, not exceptions.
    """
    code: ErrorCode
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )

    def describe(self) -> str:
        extra = ", ".join(f"{k}={v}" for k, v in self.context)
        return f"{self.code.name}: {self.message}" + (f" ({extra})" if extra else "")


# =============================================================================
# CALENDAR CONSTANTS
# =============================================================================

# February is always 28 days; leap years are not lengthened.
MONTH_LENGTHS: Tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

MONTH_NAMES: Tuple[str, ...] = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

MONTH_ABBREVIATIONS: Tuple[str, ...] = tuple(name[:3] for name in MONTH_NAMES)

# Lowest year reachable when negative years are enabled.
NEGATIVE_YEAR_FLOOR = -9999

DEFAULT_REFERENCE_YEAR = 1989


def validate_month(month: int) -> int:
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise ValueError(f"Month must be an integer in 1..12, got {month!r}")
    return month


# =============================================================================
# TIME OF DAY
# =============================================================================

class TimeOfDay(Enum):
    """
    Optional categorical tag on an article.

    Used for sort order and badge display only; no time arithmetic.
    Declaration order is the display order.
    """
    MORNING = "Morning"
    DAY = "Day"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"

    @property
    def rank(self) -> int:
        return _TIME_OF_DAY_ORDER.index(self)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['TimeOfDay']:
        """Map a wire label to a member. Empty or unknown labels map to None."""
        if not value:
            return None
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        return None


_TIME_OF_DAY_ORDER: Tuple[TimeOfDay, ...] = tuple(TimeOfDay)


# =============================================================================
# POLICY
# =============================================================================

@dataclass(frozen=True)
class YearPolicy:
    """
    Process-wide year policy.

    Loaded once from settings and read-only afterwards. Gates display and
    navigation only; the weekday arithmetic ignores it.
    """
    allow_year_zero: bool = False
    allow_negative_years: bool = False
    reference_year: int = DEFAULT_REFERENCE_YEAR


# =============================================================================
# DATES AND RANGES
# =============================================================================

@dataclass(frozen=True)
class FictionalDate:
    """
    An in-story date.

    INVARIANT: day never exceeds the month length table (February = 28).
    """
    year: int
    month: int
    day: int

    def __post_init__(self):
        validate_month(self.month)
        limit = MONTH_LENGTHS[self.month - 1]
        if not isinstance(self.day, int) or not 1 <= self.day <= limit:
            raise ValueError(
                f"Day {self.day!r} out of range for month {self.month} (1..{limit})"
            )


@dataclass(frozen=True)
class YearRange:
    """
    Inclusive span of years.

    INVARIANT: start <= end
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Invalid year range: start {self.start} > end {self.end}")

    def shifted(self, delta: int) -> YearRange:
        return YearRange(self.start + delta, self.end + delta)

    def years(self) -> Tuple[int, ...]:
        return tuple(range(self.start, self.end + 1))

    def contains(self, year: int) -> bool:
        return self.start <= year <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1
