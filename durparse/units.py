"""Canonical duration units and the aliases that resolve to them.

Multipliers are expressed in milliseconds. Months and years use fixed
averages (a year of 365.25 days, a month of one twelfth of that), so
nothing here is calendar aware.
"""

from typing import Dict, List, Literal, Optional, Tuple

UnitTime = Literal["ms", "s", "m", "h", "d", "w", "mo", "y"]

TIME_MULTIPLIERS: Dict[str, int] = {
    "ms": 1,
    "s": 1_000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
    "w": 604_800_000,
    "mo": 2_629_785_600,
    "y": 31_557_600_000,
}

LONG_NAMES: Dict[str, str] = {
    "ms": "millisecond",
    "s": "second",
    "m": "minute",
    "h": "hour",
    "d": "day",
    "w": "week",
    "mo": "month",
    "y": "year",
}

# "m" is left out on purpose: it could mean minutes or months.
UNIT_ALIASES: Dict[str, str] = {
    "ms": "ms",
    "millisecond": "ms",
    "milliseconds": "ms",
    "msec": "ms",
    "msecs": "ms",
    "s": "s",
    "sec": "s",
    "secs": "s",
    "second": "s",
    "seconds": "s",
    "min": "m",
    "mins": "m",
    "minute": "m",
    "minutes": "m",
    "h": "h",
    "hr": "h",
    "hrs": "h",
    "hour": "h",
    "hours": "h",
    "d": "d",
    "day": "d",
    "days": "d",
    "w": "w",
    "wk": "w",
    "wks": "w",
    "week": "w",
    "weeks": "w",
    "mo": "mo",
    "month": "mo",
    "months": "mo",
    "y": "y",
    "yr": "y",
    "yrs": "y",
    "year": "y",
    "years": "y",
}

AMBIGUOUS_UNIT = "m"


def resolve_alias(alias: str) -> Optional[str]:
    return UNIT_ALIASES.get(alias.strip().lower())


def is_unit(value: str) -> bool:
    return value in TIME_MULTIPLIERS


def multiplier(unit: str) -> int:
    try:
        return TIME_MULTIPLIERS[unit]
    except KeyError:
        raise ValueError(f"Unknown unit: {unit!r}") from None


def units_descending() -> List[Tuple[str, int]]:
    """Return ``(unit, multiplier)`` pairs from years down to milliseconds."""
    return sorted(TIME_MULTIPLIERS.items(), key=lambda item: item[1], reverse=True)


def aliases() -> List[str]:
    return list(UNIT_ALIASES)
