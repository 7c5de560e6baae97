"""
Scenario comparison for FinTraj.

Purpose
-------
Rank a set of completed projections against each other and against an
optional baseline:

- growth_pct          : round((final / initial - 1) * 100)
- delta_from_baseline : final - baseline_final
- delta_pct           : round(delta_from_baseline / baseline_final * 100)
- rank                : 1 for the highest final value

Divisions by a zero initial/baseline value are guarded: the metric is
None (rendered "N/A") and a DivisionGuardWarning is emitted. Nothing here
raises over validated projections.

Example
-------
>>> rows = compare([base, optimistic], baseline_name="Base")
>>> [(r.name, r.rank) for r in rows]
[('Base', 2), ('Optimistic', 1)]
>>> summary_frame(rows)
"""

from __future__ import annotations

import logging
import math
import warnings
from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence, Union

import pandas as pd

from .constants import DEFAULT_YEARS
from .model import ProjectionSeed, ScenarioComparison, SimulationParameters, SimulationResult
from .projection import ProjectionEngine
from .exceptions import DivisionGuardWarning
from .types import ComparisonRowDict
from .utils import Clock, guarded_percent, percent_change, safe_ratio

__all__ = [
    "ComparisonRow",
    "compare",
    "summary_frame",
    "best",
    "default_comparisons",
]

logger = logging.getLogger(__name__)

Comparable = Union[SimulationResult, ScenarioComparison]


@dataclass(frozen=True)
class ComparisonRow:
    """One projection's standing in a comparison. None means "N/A"."""

    name: str
    initial_value: float
    final_value: float
    growth_pct: Optional[int]
    delta_from_baseline: Optional[float]
    delta_pct: Optional[int]
    rank: int
    is_baseline: bool = False

    def as_dict(self) -> ComparisonRowDict:
        """Display-ready dict with guarded metrics rendered as ``"N/A"``."""
        out = asdict(self)
        for key in ("growth_pct", "delta_from_baseline", "delta_pct"):
            if out[key] is None:
                out[key] = "N/A"
        return out


def _unpack(item: Comparable) -> tuple[str, SimulationResult]:
    if isinstance(item, ScenarioComparison):
        return item.name, item.result
    return item.params.name, item


def compare(
    results: Sequence[Comparable],
    baseline_name: Optional[str] = None,
    *,
    metric: str = "net_worth",
) -> List[ComparisonRow]:
    """
    Compare projections on the first and last value of *metric*.

    Parameters
    ----------
    results : sequence of SimulationResult or ScenarioComparison
        Completed projections; names come from ``params.name`` or the
        comparison's name.
    baseline_name : str, optional
        Name of the reference projection. If it is not among *results*, a
        UserWarning is emitted and deltas are None.
    metric : str, default "net_worth"
        One of income, expenses, savings, net_worth.

    Returns
    -------
    list of ComparisonRow
        One row per input, in input order.
    """
    items = [_unpack(r) for r in results]
    if not items:
        return []

    finals = [res.final(metric) for _, res in items]
    # nan finals rank last
    order = sorted(
        range(len(items)),
        key=lambda i: -math.inf if math.isnan(finals[i]) else finals[i],
        reverse=True,
    )
    ranks = {idx: pos + 1 for pos, idx in enumerate(order)}

    baseline: Optional[SimulationResult] = None
    if baseline_name is not None:
        baseline = next((res for name, res in items if name == baseline_name), None)
        if baseline is None:
            warnings.warn(
                f"Baseline {baseline_name!r} not found among {[n for n, _ in items]}; "
                f"deltas reported as N/A",
                UserWarning,
                stacklevel=2,
            )

    rows: List[ComparisonRow] = []
    for i, (name, res) in enumerate(items):
        initial, final = res.initial(metric), res.final(metric)
        growth = percent_change(initial, final, label=f"growth of {name!r}")

        delta: Optional[float] = None
        delta_pct: Optional[int] = None
        if baseline is not None:
            base_initial, base_final = baseline.initial(metric), baseline.final(metric)
            label = f"delta of {name!r}"
            if math.isfinite(final) and math.isfinite(base_final):
                delta = final - base_final
            else:
                warnings.warn(
                    f"{label}: non-finite final value, reported as N/A",
                    DivisionGuardWarning,
                    stacklevel=2,
                )
            if base_initial == 0 or base_final == 0:
                warnings.warn(
                    f"{label}: baseline {baseline_name!r} starts or ends at 0, "
                    f"reported as N/A",
                    DivisionGuardWarning,
                    stacklevel=2,
                )
            elif delta is not None:
                ratio = safe_ratio(delta, base_final, label=label)
                if ratio is not None:
                    delta_pct = guarded_percent(ratio, label=label)

        rows.append(
            ComparisonRow(
                name=name,
                initial_value=initial,
                final_value=final,
                growth_pct=growth,
                delta_from_baseline=delta,
                delta_pct=delta_pct,
                rank=ranks[i],
                is_baseline=baseline is not None and res is baseline,
            )
        )
    logger.debug("compared %d projections on %s", len(rows), metric)
    return rows


def best(rows: Sequence[ComparisonRow]) -> Optional[ComparisonRow]:
    """Row ranked first, or None for an empty comparison."""
    return min(rows, key=lambda r: r.rank, default=None)


def summary_frame(rows: Sequence[ComparisonRow]) -> pd.DataFrame:
    """
    Build a comparison table indexed by scenario name.

    Guarded metrics stay missing (``pd.NA``) rather than inf/nan-producing
    arithmetic.
    """
    columns = [
        "initial_value", "final_value", "growth_pct",
        "delta_from_baseline", "delta_pct", "rank", "is_baseline",
    ]
    if not rows:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame([asdict(r) for r in rows]).set_index("name")
    for col in ("growth_pct", "delta_pct"):
        df[col] = df[col].astype("Int64")
    df["delta_from_baseline"] = df["delta_from_baseline"].astype("Float64")
    return df[columns]


# ---------------------------------------------------------------------------
# Default comparison set
# ---------------------------------------------------------------------------

def default_comparisons(
    seed: ProjectionSeed,
    current_savings_rate: float,
    *,
    years: int = DEFAULT_YEARS,
    start_year: Optional[int] = None,
    clock: Optional[Clock] = None,
) -> List[ScenarioComparison]:
    """
    The five strategies shown side by side on the comparison dashboard.

    The first one ("Current situation") is the natural baseline. Savings
    rates build on the user's current rate (see
    ``FinancialSnapshot.savings_rate``).
    """
    specs = (
        ("Current situation", "Your current situation without any change",
         dict(income_growth=2, expense_reduction=0, savings_rate=current_savings_rate, investment_return=3)),
        ("Expense reduction", "Cut expenses by 15% while keeping income",
         dict(income_growth=2, expense_reduction=15, savings_rate=current_savings_rate + 10, investment_return=3)),
        ("Income increase", "Raise income by about 20% over five years",
         dict(income_growth=4, expense_reduction=0, savings_rate=current_savings_rate + 5, investment_return=3)),
        ("Optimized investments", "Reach a 6% return on investments",
         dict(income_growth=2, expense_reduction=0, savings_rate=current_savings_rate, investment_return=6)),
        ("Combined strategy", "Lower expenses and better investments together",
         dict(income_growth=3, expense_reduction=10, savings_rate=current_savings_rate + 15, investment_return=5)),
    )
    engine = ProjectionEngine(seed, start_year=start_year, clock=clock)
    out: List[ScenarioComparison] = []
    for name, description, rates in specs:
        params = SimulationParameters(
            name=name,
            years=years,
            inflation_rate=2.0,
            **{k: float(v) for k, v in rates.items()},
        )
        out.append(
            ScenarioComparison(
                name=name,
                description=description,
                params=params,
                result=engine.project(params),
            )
        )
    return out
