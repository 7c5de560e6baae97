"""
Scenario engine for FinTraj

Purpose
-------
This module connects the pieces of a what-if run:
- Scenario Adjuster → multiplicative transform of the assumptions
  (optimistic / pessimistic), applied once before projection.
- Named crisis presets → parameter overrides plus an optional shock,
  one per scenario button of the dashboard.
- Pipeline → validate → adjust → project → shock.

Scenario transforms
-------------------
- optimistic : income_growth, investment_return, expense_reduction × 1.5
- pessimistic: income_growth, investment_return, expense_reduction × 0.5,
               inflation_rate × 1.5
- crisis     : identity here; crises are modelled by shocks after projection
- normal     : identity

Design goals
------------
- Pure: ``adjust`` never mutates its input and always returns new parameters.
- Exhaustive dispatch over ``SimulationType``.
- The baseline projection stays available: shocks run on copies.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .constants import (
    INFLATION_SHOCK_RATE,
    OPTIMISTIC_MULTIPLIER,
    PESSIMISTIC_INFLATION_MULTIPLIER,
    PESSIMISTIC_MULTIPLIER,
)
from .exceptions import ConfigurationError
from .model import ProjectionSeed, SimulationParameters, SimulationResult, SimulationType
from .projection import project
from .shocks import HousingPurchase, InterestRateRise, JobLoss, MedicalEmergency, Shock, apply_shock
from .utils import Clock
from .validation import RawParameters, validate_parameters

__all__ = [
    "adjust",
    "CrisisPreset",
    "PRESETS",
    "get_preset",
    "run_simulation",
    "run_preset",
    "preset_table",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scenario Adjuster
# ---------------------------------------------------------------------------

def _optimistic(p: SimulationParameters) -> SimulationParameters:
    k = OPTIMISTIC_MULTIPLIER
    return p.replace(
        income_growth=p.income_growth * k,
        investment_return=p.investment_return * k,
        expense_reduction=p.expense_reduction * k,
    )


def _pessimistic(p: SimulationParameters) -> SimulationParameters:
    k = PESSIMISTIC_MULTIPLIER
    return p.replace(
        income_growth=p.income_growth * k,
        investment_return=p.investment_return * k,
        inflation_rate=p.inflation_rate * PESSIMISTIC_INFLATION_MULTIPLIER,
        expense_reduction=p.expense_reduction * k,
    )


def _identity(p: SimulationParameters) -> SimulationParameters:
    return p.replace()


_ADJUSTERS: Dict[SimulationType, Callable[[SimulationParameters], SimulationParameters]] = {
    SimulationType.NORMAL: _identity,
    SimulationType.OPTIMISTIC: _optimistic,
    SimulationType.PESSIMISTIC: _pessimistic,
    SimulationType.CRISIS: _identity,
}


def adjust(
    params: SimulationParameters,
    scenario_type: Optional[Union[SimulationType, str]] = None,
) -> SimulationParameters:
    """
    Apply a scenario's multiplicative transform to *params*.

    Parameters
    ----------
    params : SimulationParameters
        Validated assumptions; left unchanged.
    scenario_type : SimulationType or str, optional
        Transform to apply. Defaults to ``params.simulation_type``.

    Returns
    -------
    SimulationParameters
        New parameter set (equal to *params* for normal/crisis).
    """
    kind = params.simulation_type if scenario_type is None else SimulationType(scenario_type)
    return _ADJUSTERS[kind](params)


# ---------------------------------------------------------------------------
# Named crisis presets
# ---------------------------------------------------------------------------

ShockFactory = Callable[[float, float], Shock]


@dataclass(frozen=True)
class CrisisPreset:
    """
    A named what-if: parameter overrides plus an optional shock.

    ``shock_factory(monthly_income, monthly_expenses)`` builds the shock
    sized from the user's current monthly totals.
    """

    key: str
    name: str
    description: str
    simulation_type: SimulationType
    overrides: Tuple[Tuple[str, Any], ...] = ()
    shock_factory: Optional[ShockFactory] = None

    def parameters(self, base: SimulationParameters) -> SimulationParameters:
        """Base parameters with this preset's name, type and overrides."""
        return base.replace(
            name=self.name,
            simulation_type=self.simulation_type,
            **dict(self.overrides),
        )

    def shock(self, monthly_income: float, monthly_expenses: float) -> Optional[Shock]:
        if self.shock_factory is None:
            return None
        return self.shock_factory(monthly_income, monthly_expenses)


PRESETS: Dict[str, CrisisPreset] = {
    p.key: p
    for p in (
        CrisisPreset(
            key="job_loss",
            name="Job loss",
            description="Job loss with most of a year's income gone",
            simulation_type=SimulationType.CRISIS,
            shock_factory=lambda inc, exp: JobLoss(),
        ),
        CrisisPreset(
            key="medical_emergency",
            name="Medical emergency",
            description="One-time medical costs worth six months of income",
            simulation_type=SimulationType.CRISIS,
            shock_factory=lambda inc, exp: MedicalEmergency(monthly_income=inc),
        ),
        CrisisPreset(
            key="inflation_shock",
            name="Inflation shock",
            description="Inflation jumps to 8% in a pessimistic economy",
            simulation_type=SimulationType.PESSIMISTIC,
            overrides=(("inflation_rate", INFLATION_SHOCK_RATE),),
        ),
        CrisisPreset(
            key="interest_rate_rise",
            name="Interest rate rise",
            description="Higher rates make debt more expensive every year",
            simulation_type=SimulationType.PESSIMISTIC,
            shock_factory=lambda inc, exp: InterestRateRise(monthly_expenses=exp),
        ),
        CrisisPreset(
            key="housing_purchase",
            name="Housing purchase",
            description="Home purchase with a down payment and a mortgage",
            simulation_type=SimulationType.NORMAL,
            shock_factory=lambda inc, exp: HousingPurchase(monthly_income=inc),
        ),
    )
}


def get_preset(key: str) -> CrisisPreset:
    """Look up a preset by key (e.g. ``"job_loss"``)."""
    try:
        return PRESETS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown scenario preset {key!r}; expected one of {sorted(PRESETS)}."
        ) from None


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def run_simulation(
    raw_params: RawParameters,
    seed: Optional[ProjectionSeed] = None,
    *,
    shock: Optional[Shock] = None,
    start_year: Optional[int] = None,
    clock: Optional[Clock] = None,
) -> SimulationResult:
    """
    Validate → adjust → project → (optionally) shock.

    The returned result's ``params`` is the adjusted parameter set, so a
    saved result records the assumptions that actually produced it.

    Raises
    ------
    InvalidParameterError
        If *raw_params* is malformed (only the validator raises).
    """
    params = validate_parameters(raw_params)
    adjusted = adjust(params)
    result = project(adjusted, seed, start_year=start_year, clock=clock)
    if shock is not None:
        result = apply_shock(result, shock)
    logger.info(
        "simulation %r (%s) done: %d points",
        adjusted.name, adjusted.simulation_type.value, len(result),
    )
    return result


def run_preset(
    key: str,
    base: RawParameters,
    seed: Optional[ProjectionSeed] = None,
    *,
    monthly_income: float = 0.0,
    monthly_expenses: float = 0.0,
    start_year: Optional[int] = None,
    clock: Optional[Clock] = None,
) -> Tuple[SimulationResult, SimulationResult]:
    """
    Run a named preset and return ``(baseline, scenario)``.

    The baseline is the unshocked projection of the preset's adjusted
    parameters; the scenario is the shocked variant (identical to the
    baseline when the preset has no shock).
    """
    preset = get_preset(key)
    params = preset.parameters(validate_parameters(base))
    adjusted = adjust(params)
    baseline = project(adjusted, seed, start_year=start_year, clock=clock)
    shock = preset.shock(monthly_income, monthly_expenses)
    scenario = apply_shock(baseline, shock) if shock is not None else baseline.copy()
    return baseline, scenario


def preset_table() -> List[Dict[str, str]]:
    """Key/name/description rows for listing presets."""
    return [
        {"key": p.key, "name": p.name, "type": p.simulation_type.value, "description": p.description}
        for p in PRESETS.values()
    ]
