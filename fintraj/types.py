"""
Type definitions for FinTraj.

Purpose
-------
TypedDict definitions for the plain-dict shapes produced by ``as_dict``
methods and written to JSON by ``fintraj.serialization``.

Usage
-----
>>> from fintraj.types import SimulationResultDict
>>> data: SimulationResultDict = result.as_dict()

Type Definitions
----------------
ParametersDict
    Serialized SimulationParameters (simulation_type as its string value)

SimulationResultDict
    Projection output: {"years", "income", "expenses", "savings", "net_worth", "params"}

GoalResultDict
    Goal trajectory: {"years", "amounts", "adjusted_for_inflation"}

ComparisonRowDict
    Display row of a comparison; guarded metrics may be "N/A"
"""

from typing import List, Union

from typing_extensions import NotRequired, TypedDict

__all__ = [
    "ParametersDict",
    "SimulationResultDict",
    "GoalResultDict",
    "ComparisonRowDict",
    "SavedResultDict",
]


class ParametersDict(TypedDict):
    """
    Serialized simulation parameters.

    Rates are annual percentages; ``simulation_type`` is one of
    "normal", "optimistic", "pessimistic", "crisis".
    """

    name: str
    years: int
    income_growth: float
    expense_reduction: float
    investment_return: float
    inflation_rate: float
    savings_rate: float
    simulation_type: str


class SimulationResultDict(TypedDict):
    """
    Serialized projection; every list has length ``params["years"] + 1``.

    Examples
    --------
    >>> data: SimulationResultDict = {
    ...     "years": [2025, 2026], "income": [2000.0, 2040.0],
    ...     "expenses": [1500.0, 1485.0], "savings": [0.0, 277.5],
    ...     "net_worth": [0.0, 555.0], "params": {...},
    ... }
    """

    years: List[int]
    income: List[float]
    expenses: List[float]
    savings: List[float]
    net_worth: List[float]
    params: ParametersDict


class GoalResultDict(TypedDict):
    years: List[int]
    amounts: List[float]
    adjusted_for_inflation: List[float]


class ComparisonRowDict(TypedDict):
    """One row of a comparison table, as produced by ``ComparisonRow.as_dict``."""

    name: str
    initial_value: float
    final_value: float
    growth_pct: Union[int, str]
    delta_from_baseline: Union[float, str]
    delta_pct: Union[int, str]
    rank: int
    is_baseline: bool


class SavedResultDict(SimulationResultDict):
    """Projection file written by ``fintraj.serialization.save_result``."""

    schema_version: str
    saved_at: NotRequired[str]
