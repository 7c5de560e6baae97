"""
Global constants for FinTraj.

Purpose
-------
Centralizes default values and magic numbers used throughout the FinTraj
codebase: default simulation assumptions, scenario multipliers and the
sizing of crisis shocks.

Usage
-----
>>> from fintraj.constants import OPTIMISTIC_MULTIPLIER, JOB_LOSS_YEAR_INDEX
>>> adjusted_growth = 2.0 * OPTIMISTIC_MULTIPLIER

Categories
----------
- Simulation defaults: rates used when the caller supplies none
- Scenario multipliers: optimistic / pessimistic transforms
- Shocks: target year indices and cost factors
- Time: months per year
"""

from typing import Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    # Simulation defaults
    "DEFAULT_SIMULATION_NAME",
    "DEFAULT_YEARS",
    "DEFAULT_INCOME_GROWTH",
    "DEFAULT_EXPENSE_REDUCTION",
    "DEFAULT_SAVINGS_RATE",
    "DEFAULT_INVESTMENT_RETURN",
    "DEFAULT_INFLATION_RATE",
    # Scenario multipliers
    "OPTIMISTIC_MULTIPLIER",
    "PESSIMISTIC_MULTIPLIER",
    "PESSIMISTIC_INFLATION_MULTIPLIER",
    "INFLATION_SHOCK_RATE",
    # Shocks
    "JOB_LOSS_YEAR_INDEX",
    "JOB_LOSS_INCOME_FACTOR",
    "JOB_LOSS_EXPENSE_COVER",
    "MEDICAL_EMERGENCY_YEAR_INDEX",
    "MEDICAL_EMERGENCY_MONTHS",
    "RATE_RISE_FIRST_INDEX",
    "RATE_RISE_EXPENSE_FACTOR",
    "HOUSING_YEAR_INDEX",
    "HOUSING_DOWN_PAYMENT_MONTHS",
    "HOUSING_PAYMENT_RATIO",
    "HOUSING_EQUITY_SHARE",
    # Ratios
    "SAVINGS_RATE_BOUNDS",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (monthly totals → annual seeds)."""


# =============================================================================
# Simulation Defaults
# =============================================================================

DEFAULT_SIMULATION_NAME: str = "Simulation"
"""Label used when the caller does not name a simulation."""

DEFAULT_YEARS: int = 10
"""Default projection horizon used by presets and the CLI."""

DEFAULT_INCOME_GROWTH: float = 2.0
"""Default annual income growth (percent)."""

DEFAULT_EXPENSE_REDUCTION: float = 1.0
"""Default annual expense reduction (percent)."""

DEFAULT_SAVINGS_RATE: float = 50.0
"""Default share of the yearly surplus that is saved (percent)."""

DEFAULT_INVESTMENT_RETURN: float = 5.0
"""Default annual investment return (percent)."""

DEFAULT_INFLATION_RATE: float = 2.0
"""Default annual inflation (percent)."""


# =============================================================================
# Scenario Multipliers
# =============================================================================

OPTIMISTIC_MULTIPLIER: float = 1.5
"""Applied to income growth, investment return and expense reduction."""

PESSIMISTIC_MULTIPLIER: float = 0.5
"""Applied to income growth, investment return and expense reduction."""

PESSIMISTIC_INFLATION_MULTIPLIER: float = 1.5
"""Applied to the inflation rate in the pessimistic scenario."""

INFLATION_SHOCK_RATE: float = 8.0
"""Inflation rate (percent) forced by the inflation-shock preset."""


# =============================================================================
# Shocks
# =============================================================================

JOB_LOSS_YEAR_INDEX: int = 2
"""Year offset hit by the job-loss shock."""

JOB_LOSS_INCOME_FACTOR: float = 0.3
"""Share of the year's income kept after a job loss."""

JOB_LOSS_EXPENSE_COVER: float = 0.7
"""Share of the year's expenses drawn from savings during a job loss."""

MEDICAL_EMERGENCY_YEAR_INDEX: int = 1
"""Year offset hit by the medical-emergency shock."""

MEDICAL_EMERGENCY_MONTHS: float = 6.0
"""Emergency cost expressed in months of current income."""

RATE_RISE_FIRST_INDEX: int = 1
"""First year offset affected by an interest-rate rise (lasts to the end)."""

RATE_RISE_EXPENSE_FACTOR: float = 0.15
"""Yearly extra debt cost as a fraction of current monthly expenses."""

HOUSING_YEAR_INDEX: int = 2
"""Year offset of the housing purchase."""

HOUSING_DOWN_PAYMENT_MONTHS: float = 24.0
"""Down payment expressed in months of current income."""

HOUSING_PAYMENT_RATIO: float = 0.33
"""Monthly mortgage payment as a fraction of current monthly income."""

HOUSING_EQUITY_SHARE: float = 0.3
"""Share of each year's mortgage payments credited back as equity."""


# =============================================================================
# Ratios
# =============================================================================

SAVINGS_RATE_BOUNDS: Tuple[float, float] = (0.0, 100.0)
"""Clamp applied to savings rates consumed by health/ratio calculations."""
