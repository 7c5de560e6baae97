"""Projection engine for FinTraj

Turns validated ``SimulationParameters`` and a year-0 ``ProjectionSeed``
into a year-indexed ``SimulationResult`` by deterministic annual
compounding.

Recurrence (i > 0)
------------------
    income[i]    = income[i-1] * (1 + income_growth/100)
    expenses[i]  = max(0, expenses[i-1] * (1 - expense_reduction/100))
    surplus[i]   = income[i] - expenses[i]
    savings[i]   = savings[i-1] + surplus[i] * savings_rate/100
    net_worth[i] = net_worth[i-1] * (1 + investment_return/100) + surplus[i]

Index 0 holds the seed values. The engine is pure: no I/O, no shared state,
and it never raises for extreme assumptions (negative net worth is a valid
arithmetic outcome).

Typical usage
-------------
>>> from fintraj.model import ProjectionSeed, SimulationParameters
>>> params = SimulationParameters(years=10, income_growth=2, expense_reduction=1,
...                               savings_rate=50, investment_return=5, inflation_rate=2)
>>> seed = ProjectionSeed(income=2000, expenses=1500)
>>> res = project(params, seed, start_year=0)
>>> res.income[1], res.expenses[1]
(2040.0, 1485.0)
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .model import ProjectionSeed, SimulationParameters, SimulationResult
from .utils import Clock, year_labels

__all__ = [
    "project",
    "ProjectionEngine",
]

logger = logging.getLogger(__name__)


def project(
    params: SimulationParameters,
    seed: Optional[ProjectionSeed] = None,
    *,
    start_year: Optional[int] = None,
    clock: Optional[Clock] = None,
) -> SimulationResult:
    """
    Project income, expenses, savings and net worth over ``params.years``.

    Parameters
    ----------
    params : SimulationParameters
        Validated assumptions (see ``fintraj.validation.validate_parameters``).
        Scenario transforms are not applied here; see ``fintraj.scenario.adjust``.
    seed : ProjectionSeed, optional
        Year-0 totals. Defaults to all zeros.
    start_year : int, optional
        Label of index 0. None uses the current calendar year from *clock*;
        0 yields plain offsets.
    clock : callable, optional
        Zero-argument callable returning a ``date`` (default ``date.today``).

    Returns
    -------
    SimulationResult
        Five series of length ``params.years + 1``.
    """
    seed = seed or ProjectionSeed()
    n_years = int(params.years)

    growth = 1.0 + params.income_growth / 100.0
    reduction = 1.0 - params.expense_reduction / 100.0
    ret = 1.0 + params.investment_return / 100.0
    save_share = params.savings_rate / 100.0

    income: List[float] = [float(seed.income)]
    expenses: List[float] = [float(seed.expenses)]
    savings: List[float] = [float(seed.savings)]
    net_worth: List[float] = [float(seed.net_worth)]

    for i in range(1, n_years + 1):
        inc = income[i - 1] * growth
        exp = max(0.0, expenses[i - 1] * reduction)
        surplus = inc - exp
        income.append(inc)
        expenses.append(exp)
        savings.append(savings[i - 1] + surplus * save_share)
        net_worth.append(net_worth[i - 1] * ret + surplus)

    logger.debug(
        "projected %r over %d years: final net worth %.2f",
        params.name, n_years, net_worth[-1],
    )
    return SimulationResult(
        years=year_labels(n_years + 1, start_year=start_year, clock=clock),
        income=income,
        expenses=expenses,
        savings=savings,
        net_worth=net_worth,
        params=params,
    )


class ProjectionEngine:
    """Binds a seed and a calendar to the projection routine.

    Useful when several parameter sets share the same current totals
    (e.g. five named scenarios compared side by side).
    """

    def __init__(
        self,
        seed: Optional[ProjectionSeed] = None,
        *,
        start_year: Optional[int] = None,
        clock: Optional[Clock] = None,
    ):
        self.seed = seed or ProjectionSeed()
        self.start_year = start_year
        self.clock = clock

    def project(self, params: SimulationParameters) -> SimulationResult:
        return project(params, self.seed, start_year=self.start_year, clock=self.clock)

    def run_many(self, params_list: Iterable[SimulationParameters]) -> List[SimulationResult]:
        """Independent projections, one per parameter set, in input order."""
        return [self.project(p) for p in params_list]
