# fintraj/goals.py
"""
Savings goal projection and progress tracking.

Purpose
-------
A simpler compounding routine than the main projection, for a single
target-amount goal (emergency fund, holidays, a down payment...). Produces
nominal and inflation-adjusted trajectories and the UI-facing "years
remaining" estimate.

Recurrence
----------
    amounts[0] = current_amount
    for i in 1..years:
        total += monthly_contribution * 12
        total *= 1 + interest_rate/100
        amounts[i] = round(total)
    adjusted_for_inflation[i] = round(total_i / (1 + inflation_rate/100) ** i)

Rounding is half-up. Index 0 is the unrounded current amount in both
series (no contribution, interest or deflation has been applied yet).
A total that leaves the float range is reported as inf from that year
on (UserWarning emitted) rather than raising.

Example
-------
>>> goal = GoalDefinition(target_amount=10_000, current_amount=2_000,
...                       monthly_contribution=300, interest_rate=1,
...                       inflation_rate=2, years=3)
>>> res = project_goal(goal, start_year=2025)
>>> res.years
(2025, 2026, 2027, 2028)
>>> res.amounts[1]
5656.0
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import MONTHS_PER_YEAR
from .model import GoalDefinition, GoalResult
from .utils import Clock, round_half_up, safe_ratio, year_labels

__all__ = [
    "project_goal",
    "years_remaining",
    "GoalProgress",
    "goal_progress",
    "DEFAULT_GOALS",
]


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def project_goal(
    definition: GoalDefinition,
    *,
    start_year: Optional[int] = None,
    clock: Optional[Clock] = None,
) -> GoalResult:
    """
    Project a savings goal year by year.

    Parameters
    ----------
    definition : GoalDefinition
        Validated goal (non-negative amounts and rates).
    start_year : int, optional
        Label of index 0; None uses the current calendar year from *clock*.
    clock : callable, optional
        Zero-argument callable returning a ``date``.

    Returns
    -------
    GoalResult
        Series of length ``definition.years + 1``; the input is untouched.
    """
    yearly = definition.monthly_contribution * MONTHS_PER_YEAR
    growth = 1.0 + definition.interest_rate / 100.0
    inflation = 1.0 + definition.inflation_rate / 100.0

    total = float(definition.current_amount)
    deflator = 1.0
    amounts = [total]
    adjusted = [total]
    for i in range(1, definition.years + 1):
        total = (total + yearly) * growth
        # saturates to inf instead of raising like ``inflation ** i``
        deflator *= inflation
        if math.isfinite(total):
            amounts.append(float(round_half_up(total)))
            adjusted.append(float(round_half_up(total / deflator)))
        else:
            if math.isfinite(amounts[-1]):
                warnings.warn(
                    f"goal {definition.name!r} leaves the float range in year {i}; "
                    f"amounts from there on are reported as inf",
                    UserWarning,
                    stacklevel=2,
                )
            amounts.append(math.inf)
            adjusted.append(math.inf)

    return GoalResult(
        years=year_labels(definition.years + 1, start_year=start_year, clock=clock),
        amounts=tuple(amounts),
        adjusted_for_inflation=tuple(adjusted),
    )


def years_remaining(definition: GoalDefinition) -> Optional[int]:
    """
    Years of contributions still needed to reach the target (no interest).

    ``max(0, ceil((target - current) / (monthly_contribution * 12)))``.
    Returns 0 when the target is already met and None when it is unmet
    and nothing is being contributed (the goal is never reached).
    """
    gap = definition.target_amount - definition.current_amount
    if gap <= 0:
        return 0
    yearly = definition.monthly_contribution * MONTHS_PER_YEAR
    if yearly <= 0:
        return None
    return max(0, math.ceil(gap / yearly))


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GoalProgress:
    """Summary card for a goal: where the projection ends relative to the target."""

    name: str
    target_amount: float
    final_amount: float
    reached: bool
    progress_pct: Optional[float]
    years_remaining: Optional[int]
    total_contributed: float
    interest_earned: Optional[float]


def goal_progress(definition: GoalDefinition, result: Optional[GoalResult] = None) -> GoalProgress:
    """
    Compare a goal's projected final amount with its target.

    ``progress_pct`` is the final amount as a percentage of the target,
    None for a zero target or an overflowed projection (DivisionGuardWarning
    emitted). ``total_contributed`` is the current amount plus every
    monthly contribution over the horizon; ``interest_earned`` is the
    final amount minus that, None when it is not a finite number.
    """
    if result is None:
        result = project_goal(definition, start_year=0)
    final = result.final_amount
    ratio = safe_ratio(final, definition.target_amount, label=f"progress of {definition.name!r}")
    contributed = (
        definition.current_amount
        + definition.monthly_contribution * MONTHS_PER_YEAR * definition.years
    )
    interest = final - contributed
    return GoalProgress(
        name=definition.name,
        target_amount=definition.target_amount,
        final_amount=final,
        reached=final >= definition.target_amount,
        progress_pct=None if ratio is None else ratio * 100.0,
        years_remaining=years_remaining(definition),
        total_contributed=contributed,
        interest_earned=interest if math.isfinite(interest) else None,
    )


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_GOALS: Tuple[GoalDefinition, ...] = (
    GoalDefinition(
        name="Emergency fund",
        target_amount=10_000,
        current_amount=2_000,
        monthly_contribution=300,
        interest_rate=1,
        inflation_rate=2,
        years=3,
    ),
    GoalDefinition(
        name="Holidays",
        target_amount=5_000,
        current_amount=1_500,
        monthly_contribution=200,
        interest_rate=1,
        inflation_rate=2,
        years=2,
    ),
    GoalDefinition(
        name="Home down payment",
        target_amount=50_000,
        current_amount=10_000,
        monthly_contribution=600,
        interest_rate=3,
        inflation_rate=2,
        years=5,
    ),
)
