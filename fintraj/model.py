"""
Immutable value types for FinTraj.

Purpose
-------
Explicit, frozen records that flow between the validator, the projection
engine, the shock applier, the goal calculator and the comparator:

- SimulationType      : closed set of scenario tags
- SimulationParameters: engine-safe assumptions (output of the validator)
- ProjectionSeed      : year-0 totals supplied by the current-totals provider
- SimulationResult    : year-indexed income/expenses/savings/net worth series
- GoalDefinition      : a single target-amount savings goal
- GoalResult          : nominal and inflation-adjusted goal trajectory
- ScenarioComparison  : named, described parameters + result

Design Principles
-----------------
- Frozen dataclasses with tuple-backed series: a result can never be
  mutated in place, so a baseline stays valid after variants are derived.
- Derived variants are built with ``copy()`` / ``with_series()`` which
  always allocate new tuples.
- Series lengths are checked at construction.

Example
-------
>>> params = SimulationParameters(name="Base", years=2, income_growth=2.0)
>>> params.replace(income_growth=3.0).income_growth
3.0
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Iterable, Literal, Tuple

import pandas as pd

from .constants import DEFAULT_SIMULATION_NAME
from .exceptions import InvalidParameterError
from .types import GoalResultDict, ParametersDict, SimulationResultDict
from .utils import deflate, is_finite_number

__all__ = [
    "SimulationType",
    "Metric",
    "METRICS",
    "SimulationParameters",
    "ProjectionSeed",
    "SimulationResult",
    "GoalDefinition",
    "GoalResult",
    "ScenarioComparison",
]

Metric = Literal["income", "expenses", "savings", "net_worth"]
METRICS: Tuple[str, ...] = ("income", "expenses", "savings", "net_worth")


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

class SimulationType(str, Enum):
    """Scenario tag selecting the parameter transform applied before projection."""

    NORMAL = "normal"
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"
    CRISIS = "crisis"


@dataclass(frozen=True)
class SimulationParameters:
    """
    Validated assumptions for one projection.

    All rates are annual percentages (``2.0`` means 2%). Values are not
    range-checked beyond finiteness: out-of-range assumptions are the
    caller's choice. Build instances from raw input with
    ``fintraj.validation.validate_parameters``.

    Parameters
    ----------
    name : str
        Non-semantic label, used to name rows in comparisons.
    years : int
        Projection horizon; the result holds ``years + 1`` points.
    income_growth : float
        Annual income growth.
    expense_reduction : float
        Annual expense reduction (negative values model expense growth).
    investment_return : float
        Annual return applied to the previous year's net worth.
    inflation_rate : float
        Annual inflation, used to deflate series for real-terms views.
    savings_rate : float
        Share of each year's surplus added to savings.
    simulation_type : SimulationType
        Scenario transform to apply before projection.
    """

    name: str = DEFAULT_SIMULATION_NAME
    years: int = 0
    income_growth: float = 0.0
    expense_reduction: float = 0.0
    investment_return: float = 0.0
    inflation_rate: float = 0.0
    savings_rate: float = 0.0
    simulation_type: SimulationType = SimulationType.NORMAL

    def replace(self, **changes: Any) -> "SimulationParameters":
        """Return a copy with *changes* applied (the instance is untouched)."""
        return replace(self, **changes)

    def as_dict(self) -> ParametersDict:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["simulation_type"] = self.simulation_type.value
        return out


@dataclass(frozen=True)
class ProjectionSeed:
    """
    Year-0 totals for a projection (annual figures).

    Supplied by the current-totals provider
    (``fintraj.totals.FinancialSnapshot.to_seed``); the engine never
    computes these itself.
    """

    income: float = 0.0
    expenses: float = 0.0
    savings: float = 0.0
    net_worth: float = 0.0


# ---------------------------------------------------------------------------
# Projection result
# ---------------------------------------------------------------------------

def _as_float_tuple(values: Iterable[float]) -> Tuple[float, ...]:
    return tuple(float(v) for v in values)


@dataclass(frozen=True)
class SimulationResult:
    """
    Year-indexed projection output.

    Five same-length sequences (``years``, ``income``, ``expenses``,
    ``savings``, ``net_worth``) plus the parameters that produced them.
    Length is ``params.years + 1``: a year-0 snapshot plus one point per
    projected year.
    """

    years: Tuple[int, ...]
    income: Tuple[float, ...]
    expenses: Tuple[float, ...]
    savings: Tuple[float, ...]
    net_worth: Tuple[float, ...]
    params: SimulationParameters = field(default_factory=SimulationParameters)

    def __post_init__(self) -> None:
        object.__setattr__(self, "years", tuple(int(y) for y in self.years))
        for name in METRICS:
            object.__setattr__(self, name, _as_float_tuple(getattr(self, name)))
        lengths = {name: len(getattr(self, name)) for name in ("years",) + METRICS}
        if len(set(lengths.values())) != 1:
            raise ValueError(f"SimulationResult series must share one length, got {lengths}.")
        expected = self.params.years + 1
        if lengths["years"] != expected:
            raise ValueError(
                f"SimulationResult series must have length years + 1 = {expected}, "
                f"got {lengths['years']}."
            )

    # -------------------- Accessors --------------------
    @property
    def name(self) -> str:
        return self.params.name

    def __len__(self) -> int:
        return len(self.years)

    def series(self, metric: str) -> Tuple[float, ...]:
        """Return the series for *metric* (income, expenses, savings, net_worth)."""
        if metric not in METRICS:
            raise KeyError(f"Unknown metric {metric!r}; expected one of {METRICS}.")
        return getattr(self, metric)

    def initial(self, metric: str = "net_worth") -> float:
        return self.series(metric)[0]

    def final(self, metric: str = "net_worth") -> float:
        return self.series(metric)[-1]

    def real_values(self, metric: str = "net_worth") -> Tuple[float, ...]:
        """*metric* deflated by compounding ``params.inflation_rate``."""
        return deflate(self.series(metric), self.params.inflation_rate)

    # -------------------- Builders --------------------
    def copy(self) -> "SimulationResult":
        """Deep, independent copy (new tuples for every series)."""
        return SimulationResult(
            years=tuple(self.years),
            income=tuple(self.income),
            expenses=tuple(self.expenses),
            savings=tuple(self.savings),
            net_worth=tuple(self.net_worth),
            params=self.params,
        )

    def with_series(self, **series: Iterable[float]) -> "SimulationResult":
        """New result with the given metric series replaced.

        >>> shocked = result.with_series(income=[...], savings=[...])
        """
        unknown = set(series) - set(METRICS)
        if unknown:
            raise KeyError(f"Unknown series {sorted(unknown)}; expected a subset of {METRICS}.")
        base = self.copy()
        return replace(base, **{k: _as_float_tuple(v) for k, v in series.items()})

    # -------------------- Export --------------------
    def to_frame(self) -> pd.DataFrame:
        """DataFrame indexed by year with one column per metric."""
        df = pd.DataFrame(
            {name: list(getattr(self, name)) for name in METRICS},
            index=pd.Index(list(self.years), name="year"),
        )
        df.attrs["name"] = self.params.name
        return df

    def as_dict(self) -> SimulationResultDict:
        return {
            "years": list(self.years),
            "income": list(self.income),
            "expenses": list(self.expenses),
            "savings": list(self.savings),
            "net_worth": list(self.net_worth),
            "params": self.params.as_dict(),
        }


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GoalDefinition:
    """
    Single target-amount savings goal.

    Contributions are monthly; interest and inflation are annual
    percentages. All amounts must be non-negative and finite, ``years``
    a non-negative integer.

    Examples
    --------
    >>> goal = GoalDefinition(target_amount=10_000, current_amount=2_000,
    ...                       monthly_contribution=300, interest_rate=1,
    ...                       inflation_rate=2, years=3, name="Emergency fund")
    """

    target_amount: float
    current_amount: float = 0.0
    monthly_contribution: float = 0.0
    interest_rate: float = 0.0
    inflation_rate: float = 0.0
    years: int = 0
    name: str = "Goal"

    def __post_init__(self):
        for attr in (
            "target_amount",
            "current_amount",
            "monthly_contribution",
            "interest_rate",
            "inflation_rate",
        ):
            value = getattr(self, attr)
            if not is_finite_number(value):
                raise InvalidParameterError(attr, f"must be a finite number, got {value!r}")
            if value < 0:
                raise InvalidParameterError(attr, f"must be non-negative, got {value!r}")
        if isinstance(self.years, bool) or not isinstance(self.years, int):
            raise InvalidParameterError("years", f"must be an integer, got {self.years!r}")
        if self.years < 0:
            raise InvalidParameterError("years", f"must be non-negative, got {self.years}")


@dataclass(frozen=True)
class GoalResult:
    """Nominal and inflation-adjusted trajectory of a goal (length ``years + 1``)."""

    years: Tuple[int, ...]
    amounts: Tuple[float, ...]
    adjusted_for_inflation: Tuple[float, ...]

    def __post_init__(self) -> None:
        if not (len(self.years) == len(self.amounts) == len(self.adjusted_for_inflation)):
            raise ValueError("GoalResult series must share one length.")

    @property
    def final_amount(self) -> float:
        return self.amounts[-1]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "amount": list(self.amounts),
                "adjusted_for_inflation": list(self.adjusted_for_inflation),
            },
            index=pd.Index(list(self.years), name="year"),
        )

    def as_dict(self) -> GoalResultDict:
        return {
            "years": list(self.years),
            "amounts": list(self.amounts),
            "adjusted_for_inflation": list(self.adjusted_for_inflation),
        }


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScenarioComparison:
    """Named, described parameter set together with its projection."""

    name: str
    description: str
    params: SimulationParameters
    result: SimulationResult
