"""
Parameter validation for FinTraj.

Purpose
-------
Single narrowing boundary between raw user input (loosely typed mappings
from forms, profile files or the CLI) and engine-safe
``SimulationParameters``. Everything downstream of this module (projection,
scenarios, shocks, comparison) assumes validated input and never raises.

Rules
-----
- ``years`` is required and must be a non-negative integer; 0 is legal.
- Rates must be finite numbers. Missing or NaN rates default to 0 (lenient,
  as form inputs often leave them blank); non-numeric values raise.
- Rates are not clamped: assumptions are the caller's choice.

Example
-------
>>> params = validate_parameters({"years": 10, "incomeGrowth": 2})
>>> params.years, params.income_growth, params.savings_rate
(10, 2.0, 0.0)
>>> validate_parameters({"years": -1})
Traceback (most recent call last):
    ...
fintraj.exceptions.InvalidParameterError: Invalid parameter years: ...
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Union

import pydantic

from .config import GoalInput, SimulationParametersInput
from .exceptions import InvalidParameterError
from .model import GoalDefinition, SimulationParameters

__all__ = [
    "validate_parameters",
    "validate_goal",
]

logger = logging.getLogger(__name__)

RawParameters = Union[Mapping[str, Any], SimulationParameters, SimulationParametersInput]


def _field_name(model: type[pydantic.BaseModel], loc: tuple) -> str:
    """Map a pydantic error location (possibly an alias) to the snake_case field name."""
    if not loc:
        return "<root>"
    key = str(loc[0])
    if key in model.model_fields:
        return key
    for name, info in model.model_fields.items():
        if info.alias == key:
            return name
    return key


def _raise_invalid(model: type[pydantic.BaseModel], exc: pydantic.ValidationError) -> NoReturn:
    first = exc.errors()[0]
    field = _field_name(model, tuple(first.get("loc", ())))
    raise InvalidParameterError(field, first.get("msg", "invalid value")) from exc


def validate_parameters(raw: RawParameters) -> SimulationParameters:
    """
    Validate and coerce raw simulation parameters.

    Parameters
    ----------
    raw : Mapping or SimulationParameters or SimulationParametersInput
        Parameter bag. Mappings may use camelCase keys (``incomeGrowth``)
        or snake_case names; unknown keys are ignored.

    Returns
    -------
    SimulationParameters
        A new, immutable, engine-safe parameter set.

    Raises
    ------
    InvalidParameterError
        If a required field is missing, a value is non-numeric or
        infinite, or ``years`` is negative or fractional. ``.field`` names
        the offending field.
    """
    if isinstance(raw, SimulationParameters):
        data: Any = asdict(raw)
    elif isinstance(raw, SimulationParametersInput):
        data = raw.model_dump()
    elif isinstance(raw, Mapping):
        data = dict(raw)
    else:
        raise InvalidParameterError(
            "<root>", f"expected a mapping of parameters, got {type(raw).__name__}"
        )

    try:
        cfg = SimulationParametersInput.model_validate(data)
    except pydantic.ValidationError as exc:
        _raise_invalid(SimulationParametersInput, exc)

    params = SimulationParameters(
        name=cfg.name,
        years=int(cfg.years),
        income_growth=float(cfg.income_growth),
        expense_reduction=float(cfg.expense_reduction),
        investment_return=float(cfg.investment_return),
        inflation_rate=float(cfg.inflation_rate),
        savings_rate=float(cfg.savings_rate),
        simulation_type=cfg.simulation_type,
    )
    logger.debug("validated parameters %s", params)
    return params


def validate_goal(raw: Union[Mapping[str, Any], GoalInput, GoalDefinition]) -> GoalDefinition:
    """
    Validate a raw goal definition.

    Raises
    ------
    InvalidParameterError
        If an amount/rate is negative, non-numeric or infinite, or
        ``years`` is not a non-negative integer.
    """
    if isinstance(raw, GoalDefinition):
        return raw
    if isinstance(raw, GoalInput):
        cfg = raw
    elif isinstance(raw, Mapping):
        try:
            cfg = GoalInput.model_validate(dict(raw))
        except pydantic.ValidationError as exc:
            _raise_invalid(GoalInput, exc)
    else:
        raise InvalidParameterError(
            "<root>", f"expected a mapping for a goal, got {type(raw).__name__}"
        )
    return GoalDefinition(
        target_amount=float(cfg.target_amount),
        current_amount=float(cfg.current_amount),
        monthly_contribution=float(cfg.monthly_contribution),
        interest_rate=float(cfg.interest_rate),
        inflation_rate=float(cfg.inflation_rate),
        years=int(cfg.years),
        name=cfg.name,
    )
