"""
Timeline Configuration

Unified configuration for the widgets and the data access layer.

Loaded once per page (process) and read-only afterwards. Sources, in
precedence order: explicit arguments, TIMELINE_* environment variables,
a JSON settings file using the plugin's camelCase keys.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import json
import os

from .contracts.base import DEFAULT_REFERENCE_YEAR, YearPolicy


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

# Settings-file keys (camelCase, as the Settings collaborator writes them)
_SETTINGS_KEYS = {
    'referenceYear': 'reference_year',
    'allowYearZero': 'allow_year_zero',
    'allowNegativeYears': 'allow_negative_years',
    'yearsPerView': 'years_per_view',
    'baseUrl': 'base_url',
}

_ENV_KEYS = {
    'TIMELINE_BASE_URL': 'base_url',
    'TIMELINE_REQUEST_TIMEOUT': 'request_timeout',
    'TIMELINE_REFERENCE_YEAR': 'reference_year',
    'TIMELINE_ALLOW_YEAR_ZERO': 'allow_year_zero',
    'TIMELINE_ALLOW_NEGATIVE_YEARS': 'allow_negative_years',
    'TIMELINE_YEARS_PER_VIEW': 'years_per_view',
}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Not an integer: {value!r}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"Not an integer: {value!r}") from None


@dataclass(frozen=True)
class TimelineConfig:
    """
    Configuration for the timeline calendar.

    Popup timings are in seconds. intent_delay of 0 shows popups
    synchronously on hover.
    """
    base_url: str = "http://localhost:8000"
    request_timeout: float = 10.0
    reference_year: int = DEFAULT_REFERENCE_YEAR
    allow_year_zero: bool = False
    allow_negative_years: bool = False
    years_per_view: int = 7
    intent_delay: float = 0.0
    source_grace: float = 0.05
    popup_grace: float = 0.1

    def __post_init__(self):
        if self.years_per_view < 1:
            raise ValueError(f"years_per_view must be >= 1, got {self.years_per_view}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        for name in ('intent_delay', 'source_grace', 'popup_grace'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

    def policy(self) -> YearPolicy:
        return YearPolicy(
            allow_year_zero=self.allow_year_zero,
            allow_negative_years=self.allow_negative_years,
            reference_year=self.reference_year,
        )

    # =========================================================================
    # LOADERS
    # =========================================================================

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], base: Optional['TimelineConfig'] = None) -> 'TimelineConfig':
        """Coerce raw values (snake_case field names) onto a config."""
        base = base or cls()
        types = {f.name: f.type for f in fields(cls)}
        updates: Dict[str, Any] = {}
        for name, raw in values.items():
            if name not in types:
                raise ValueError(f"Unknown configuration key: {name}")
            kind = types[name]
            if kind == 'bool':
                updates[name] = _parse_bool(raw)
            elif kind == 'int':
                updates[name] = _parse_int(raw)
            elif kind == 'float':
                updates[name] = float(raw)
            else:
                updates[name] = str(raw)
        return replace(base, **updates)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional['TimelineConfig'] = None) -> 'TimelineConfig':
        environ = os.environ if environ is None else environ
        values = {
            field_name: environ[key]
            for key, field_name in _ENV_KEYS.items()
            if key in environ
        }
        return cls.from_mapping(values, base)

    @classmethod
    def load(cls, settings_path: Path, base: Optional['TimelineConfig'] = None) -> 'TimelineConfig':
        """Load the Settings object ({referenceYear, allowYearZero, ...}) from JSON."""
        with open(settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must hold an object: {settings_path}")
        values = {
            _SETTINGS_KEYS[key]: value
            for key, value in data.items()
            if key in _SETTINGS_KEYS
        }
        return cls.from_mapping(values, base)
