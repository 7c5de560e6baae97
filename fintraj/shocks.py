"""
Crisis shocks for FinTraj.

Purpose
-------
Post-process a completed projection by perturbing specific year indices
to model discrete crisis events. Each shock is a frozen dataclass carrying
its own payload (the current monthly figures that size it), forming a
closed set dispatched by ``apply_shock``:

- JobLoss           : year 2 income collapses, expenses drawn from savings
- MedicalEmergency  : one-time cost (6 months of income) in year 1
- InterestRateRise  : recurring debt cost from year 1 to the end
- HousingPurchase   : down payment in year 2, then mortgage payments with
                      30% credited back as equity

Rules
-----
- The input result is never modified; every shock works on
  ``result.copy()`` and returns a new ``SimulationResult``.
- Only targeted indices change; all other entries are left untouched.
- Touched ``savings`` entries are floored at 0; ``net_worth`` is not.
- A target index past the end of the series (short horizons) is skipped.

Example
-------
>>> shocked = apply_shock(baseline, JobLoss())
>>> shocked.income[2] == baseline.income[2] * 0.3
True
>>> shocked.income[1] == baseline.income[1]
True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Union

from .constants import (
    HOUSING_DOWN_PAYMENT_MONTHS,
    HOUSING_EQUITY_SHARE,
    HOUSING_PAYMENT_RATIO,
    HOUSING_YEAR_INDEX,
    JOB_LOSS_EXPENSE_COVER,
    JOB_LOSS_INCOME_FACTOR,
    JOB_LOSS_YEAR_INDEX,
    MEDICAL_EMERGENCY_MONTHS,
    MEDICAL_EMERGENCY_YEAR_INDEX,
    MONTHS_PER_YEAR,
    RATE_RISE_EXPENSE_FACTOR,
    RATE_RISE_FIRST_INDEX,
)
from .model import SimulationResult

__all__ = [
    "JobLoss",
    "MedicalEmergency",
    "InterestRateRise",
    "HousingPurchase",
    "Shock",
    "apply_shock",
    "apply_shocks",
]

logger = logging.getLogger(__name__)


class _Series:
    """Mutable working copy of a result's metric series."""

    def __init__(self, result: SimulationResult):
        self.income = list(result.income)
        self.expenses = list(result.expenses)
        self.savings = list(result.savings)
        self.net_worth = list(result.net_worth)

    def charge(self, i: int, cost: float) -> None:
        """Add *cost* to expenses and take it from savings (floored) and net worth."""
        self.expenses[i] += cost
        self.savings[i] = max(0.0, self.savings[i] - cost)
        self.net_worth[i] -= cost

    def build(self, result: SimulationResult) -> SimulationResult:
        return result.with_series(
            income=self.income,
            expenses=self.expenses,
            savings=self.savings,
            net_worth=self.net_worth,
        )


# ---------------------------------------------------------------------------
# Shock Specifications
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class JobLoss:
    """
    Job loss hitting a single year.

    income[y] keeps ``income_factor`` of its value; ``expense_cover`` of
    the year's expenses is drawn from savings (floored at 0) and net worth.
    """

    year_index: int = JOB_LOSS_YEAR_INDEX
    income_factor: float = JOB_LOSS_INCOME_FACTOR
    expense_cover: float = JOB_LOSS_EXPENSE_COVER

    key = "job_loss"

    def apply(self, result: SimulationResult) -> SimulationResult:
        s = _Series(result)
        y = self.year_index
        if 0 <= y < len(result):
            drawn = s.expenses[y] * self.expense_cover
            s.income[y] *= self.income_factor
            s.savings[y] = max(0.0, s.savings[y] - drawn)
            s.net_worth[y] -= drawn
        return s.build(result)


@dataclass(frozen=True)
class MedicalEmergency:
    """One-time cost of ``months`` × current monthly income in a single year."""

    monthly_income: float
    year_index: int = MEDICAL_EMERGENCY_YEAR_INDEX
    months: float = MEDICAL_EMERGENCY_MONTHS

    key = "medical_emergency"

    @property
    def cost(self) -> float:
        return self.monthly_income * self.months

    def apply(self, result: SimulationResult) -> SimulationResult:
        s = _Series(result)
        if 0 <= self.year_index < len(result):
            s.charge(self.year_index, self.cost)
        return s.build(result)


@dataclass(frozen=True)
class InterestRateRise:
    """Recurring debt cost (``expense_factor`` × monthly expenses) every year from ``first_index``."""

    monthly_expenses: float
    first_index: int = RATE_RISE_FIRST_INDEX
    expense_factor: float = RATE_RISE_EXPENSE_FACTOR

    key = "interest_rate_rise"

    @property
    def yearly_cost(self) -> float:
        return self.monthly_expenses * self.expense_factor

    def apply(self, result: SimulationResult) -> SimulationResult:
        s = _Series(result)
        for i in range(max(0, self.first_index), len(result)):
            s.charge(i, self.yearly_cost)
        return s.build(result)


@dataclass(frozen=True)
class HousingPurchase:
    """
    Housing purchase in ``year_index``.

    A down payment of ``down_payment_months`` × monthly income is taken
    once from savings (floored) and net worth. From that year on, the
    yearly mortgage (``payment_ratio`` × monthly income × 12) is added to
    expenses and ``equity_share`` of it is credited to net worth.
    """

    monthly_income: float
    year_index: int = HOUSING_YEAR_INDEX
    down_payment_months: float = HOUSING_DOWN_PAYMENT_MONTHS
    payment_ratio: float = HOUSING_PAYMENT_RATIO
    equity_share: float = HOUSING_EQUITY_SHARE

    key = "housing_purchase"

    @property
    def down_payment(self) -> float:
        return self.monthly_income * self.down_payment_months

    @property
    def yearly_payment(self) -> float:
        return self.monthly_income * self.payment_ratio * MONTHS_PER_YEAR

    def apply(self, result: SimulationResult) -> SimulationResult:
        s = _Series(result)
        y = self.year_index
        if 0 <= y < len(result):
            s.savings[y] = max(0.0, s.savings[y] - self.down_payment)
            s.net_worth[y] -= self.down_payment
            payment = self.yearly_payment
            for i in range(y, len(result)):
                s.expenses[i] += payment
                s.net_worth[i] += payment * self.equity_share
        return s.build(result)


Shock = Union[JobLoss, MedicalEmergency, InterestRateRise, HousingPurchase]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def apply_shock(result: SimulationResult, shock: Shock) -> SimulationResult:
    """
    Apply one crisis shock to a completed projection.

    Parameters
    ----------
    result : SimulationResult
        Baseline projection. Left unchanged.
    shock : JobLoss | MedicalEmergency | InterestRateRise | HousingPurchase
        Shock specification.

    Returns
    -------
    SimulationResult
        New result sharing no series with *result*.
    """
    if not isinstance(shock, (JobLoss, MedicalEmergency, InterestRateRise, HousingPurchase)):
        raise TypeError(f"Unsupported shock type: {type(shock).__name__}")
    logger.debug("applying %s to %r", shock.key, result.name)
    return shock.apply(result)


def apply_shocks(result: SimulationResult, shocks: Iterable[Shock]) -> SimulationResult:
    """Apply several shocks in order; the input result is left unchanged."""
    out = result.copy()
    for shock in shocks:
        out = apply_shock(out, shock)
    return out
