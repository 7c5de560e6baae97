"""General utilities for FinTraj

Contents
--------
- Validation helpers
- Rounding (half-up, matching the spreadsheet/JS convention)
- Guarded ratios (growth %, relative deltas) with DivisionGuardWarning
- Calendar helpers (injectable clock, year labels)
- Inflation helpers (deflate a nominal series)
- Reporting helpers (currency formatting)
"""

from __future__ import annotations

import math
import warnings
from datetime import date
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .exceptions import DivisionGuardWarning

__all__ = [
    # Validation
    "is_finite_number",
    # Rounding
    "round_half_up",
    # Ratios
    "safe_ratio",
    "percent_change",
    "guarded_percent",
    "clamp",
    # Calendar
    "Clock",
    "current_year",
    "year_labels",
    # Inflation
    "deflate",
    # Reporting
    "format_currency",
]

Clock = Callable[[], date]


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def is_finite_number(value: object) -> bool:
    """True for real, finite numbers (bools excluded)."""
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return bool(np.isfinite(float(value)))


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +inf (``Math.round``).

    Python's built-in ``round`` uses banker's rounding (2.5 → 2); displayed
    figures must follow the usual convention (2.5 → 3, -2.5 → -2).
    """
    return int(math.floor(float(value) + 0.5))


# ---------------------------------------------------------------------------
# Guarded ratios
# ---------------------------------------------------------------------------

def safe_ratio(
    numerator: float,
    denominator: float,
    *,
    label: str = "ratio",
) -> Optional[float]:
    """Return numerator / denominator, or None when it cannot be a finite number.

    Guarded cases are a zero or non-finite denominator, a non-finite
    numerator, and a quotient that overflows. A DivisionGuardWarning is
    emitted for each so callers can surface "N/A" instead of propagating
    inf/nan.
    """
    ratio: Optional[float] = None
    if denominator != 0 and math.isfinite(denominator) and math.isfinite(numerator):
        ratio = float(numerator) / float(denominator)
    if ratio is None or not math.isfinite(ratio):
        warnings.warn(
            f"{label}: {numerator!r} / {denominator!r} guarded, reported as N/A",
            DivisionGuardWarning,
            stacklevel=2,
        )
        return None
    return ratio


def percent_change(initial: float, final: float, *, label: str = "growth") -> Optional[int]:
    """Integer percent change ``(final / initial - 1) * 100``.

    None if initial is 0 or the change is not a finite number.
    """
    ratio = safe_ratio(final, initial, label=label)
    if ratio is None:
        return None
    return guarded_percent(ratio - 1.0, label=label)


def guarded_percent(fraction: float, *, label: str = "percent") -> Optional[int]:
    """``round_half_up(fraction * 100)``, or None (with a warning) if that overflows."""
    pct = fraction * 100.0
    if not math.isfinite(pct):
        warnings.warn(
            f"{label}: {pct!r}% guarded, reported as N/A",
            DivisionGuardWarning,
            stacklevel=2,
        )
        return None
    return round_half_up(pct)


def clamp(value: float, bounds: Tuple[float, float]) -> float:
    """Clamp *value* into the closed interval *bounds*."""
    lo, hi = bounds
    return float(min(hi, max(lo, value)))


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def current_year(clock: Optional[Clock] = None) -> int:
    """Calendar year reported by *clock* (defaults to ``date.today``)."""
    today = (clock or date.today)()
    return int(today.year)


def year_labels(
    n_points: int,
    *,
    start_year: Optional[int] = None,
    clock: Optional[Clock] = None,
) -> Tuple[int, ...]:
    """Consecutive integer year labels ``start_year + i`` for i in 0..n_points-1.

    If *start_year* is None, uses the current calendar year from *clock*.
    Pass ``start_year=0`` for plain offsets.
    """
    first = current_year(clock) if start_year is None else int(start_year)
    return tuple(first + i for i in range(max(0, int(n_points))))


# ---------------------------------------------------------------------------
# Inflation helpers
# ---------------------------------------------------------------------------

def deflate(values: Sequence[float], inflation_rate: float) -> Tuple[float, ...]:
    """Deflate a yearly nominal series by compounding *inflation_rate* (percent).

    ``out[i] = values[i] / (1 + inflation_rate/100) ** i``; index 0 is unchanged.
    """
    arr = np.asarray(values, dtype=float)
    factors = (1.0 + float(inflation_rate) / 100.0) ** np.arange(arr.size)
    with np.errstate(divide="ignore", invalid="ignore"):
        out = arr / factors
    out[0:1] = arr[0:1]
    return tuple(float(x) for x in out)


# ---------------------------------------------------------------------------
# Reporting helpers
# ---------------------------------------------------------------------------

def format_currency(value: Optional[float], decimals: int = 0, symbol: str = "€") -> str:
    """
    Format a monetary value for tables and CLI output.

    Examples
    --------
    >>> format_currency(12_345.6)
    '12,346 €'
    >>> format_currency(None)
    'N/A'
    >>> format_currency(float("inf"))
    'N/A'
    """
    if value is None or not math.isfinite(value):
        return "N/A"
    return f"{value:,.{decimals}f} {symbol}"
