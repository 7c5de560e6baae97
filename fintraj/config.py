"""
Configuration management module for FinTraj.

Purpose
-------
Centralized configuration using Pydantic models for type-safe parameter
management, validation, and serialization:

- SimulationParametersInput: raw simulation assumptions (camelCase or
  snake_case keys) narrowed into engine-safe values
- GoalInput: raw goal definition
- SeedConfig: year-0 totals for a projection
- ProfileConfig: a JSON profile bundling seed, simulations and goals
- AppSettings: environment-driven application settings

Design Principles
-----------------
- Type-safe: Pydantic enforces types; lenient where form input is
  sloppy (missing or NaN rates become 0)
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for profile files
- Environment-aware: Supports .env files (FINTRAJ_ prefix)

Example
-------
>>> raw = {"name": "Base", "years": 10, "incomeGrowth": 2, "savingsRate": 50}
>>> cfg = SimulationParametersInput.model_validate(raw)
>>> cfg.income_growth
2.0
>>> cfg.inflation_rate
0.0
"""

from __future__ import annotations

import math
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_SIMULATION_NAME, MONTHS_PER_YEAR, SAVINGS_RATE_BOUNDS
from .model import ProjectionSeed, SimulationType
from .utils import clamp

__all__ = [
    "SimulationParametersInput",
    "GoalInput",
    "SeedConfig",
    "ProfileConfig",
    "AppSettings",
]


def _lenient_rate(v: Any) -> float:
    """Missing/NaN → 0.0; numeric strings coerced; bools, junk and inf rejected."""
    if v is None:
        return 0.0
    if isinstance(v, bool):
        raise ValueError("must be a number, not a boolean")
    if isinstance(v, str):
        text = v.strip().replace(",", ".")
        if not text:
            return 0.0
        try:
            v = float(text)
        except ValueError:
            raise ValueError(f"must be numeric, got {v!r}") from None
    try:
        value = float(v)
    except (TypeError, ValueError):
        raise ValueError(f"must be numeric, got {type(v).__name__}") from None
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        raise ValueError("must be finite")
    return value


# ---------------------------------------------------------------------------
# Simulation Parameters
# ---------------------------------------------------------------------------

class SimulationParametersInput(BaseModel):
    """
    Raw simulation assumptions as entered by a user or a profile file.

    Accepts camelCase keys as exported by web front ends
    (``incomeGrowth``, ``simulationType``...) as well as snake_case names.
    Unknown keys are ignored.

    Attributes
    ----------
    name : str
        Label (defaults to "Simulation").
    years : int
        Required, non-negative integer horizon.
    income_growth, expense_reduction, investment_return, inflation_rate, savings_rate : float
        Annual percentages. Missing or NaN values default to 0.
    simulation_type : SimulationType
        normal / optimistic / pessimistic / crisis (case-insensitive).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(default=DEFAULT_SIMULATION_NAME, description="Simulation label")
    years: int = Field(ge=0, description="Projection horizon in years")
    income_growth: float = Field(default=0.0, alias="incomeGrowth")
    expense_reduction: float = Field(default=0.0, alias="expenseReduction")
    investment_return: float = Field(default=0.0, alias="investmentReturn")
    inflation_rate: float = Field(default=0.0, alias="inflationRate")
    savings_rate: float = Field(default=0.0, alias="savingsRate")
    simulation_type: SimulationType = Field(
        default=SimulationType.NORMAL, alias="simulationType"
    )

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        """None or blank names fall back to the default label."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_SIMULATION_NAME
        return v

    @field_validator("years", mode="before")
    @classmethod
    def reject_bool_years(cls, v):
        """Booleans are not horizons (pydantic would coerce True → 1)."""
        if isinstance(v, bool):
            raise ValueError("must be an integer, not a boolean")
        if v is None:
            raise ValueError("is required")
        return v

    @field_validator(
        "income_growth",
        "expense_reduction",
        "investment_return",
        "inflation_rate",
        "savings_rate",
        mode="before",
    )
    @classmethod
    def lenient_rates(cls, v):
        return _lenient_rate(v)

    @field_validator("simulation_type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        if v is None:
            return SimulationType.NORMAL
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class GoalInput(BaseModel):
    """Configuration for a savings goal (camelCase or snake_case keys)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(default="Goal")
    target_amount: float = Field(ge=0, alias="targetAmount")
    current_amount: float = Field(default=0.0, ge=0, alias="currentAmount")
    monthly_contribution: float = Field(default=0.0, ge=0, alias="monthlyContribution")
    interest_rate: float = Field(default=0.0, ge=0, alias="interestRate")
    inflation_rate: float = Field(default=0.0, ge=0, alias="inflationRate")
    years: int = Field(ge=0)

    @field_validator(
        "target_amount",
        "current_amount",
        "monthly_contribution",
        "interest_rate",
        "inflation_rate",
        mode="before",
    )
    @classmethod
    def finite_amounts(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        if isinstance(v, (int, float)) and not math.isfinite(v):
            raise ValueError("must be finite")
        return v


# ---------------------------------------------------------------------------
# Seeds and profiles
# ---------------------------------------------------------------------------

class SeedConfig(BaseModel):
    """
    Current monthly totals used to seed projections and size shocks.

    ``monthly_income`` and ``monthly_expenses`` are monthly figures (the
    projection seeds them ×12); ``savings`` and ``net_worth`` are balances.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    monthly_income: float = Field(default=0.0, ge=0, alias="monthlyIncome")
    monthly_expenses: float = Field(default=0.0, ge=0, alias="monthlyExpenses")
    savings: float = Field(default=0.0)
    net_worth: float = Field(default=0.0, alias="netWorth")

    def to_seed(self) -> ProjectionSeed:
        """Year-0 seed with monthly flows annualized."""
        return ProjectionSeed(
            income=self.monthly_income * MONTHS_PER_YEAR,
            expenses=self.monthly_expenses * MONTHS_PER_YEAR,
            savings=self.savings,
            net_worth=self.net_worth,
        )

    def savings_rate(self) -> float:
        """Current savings rate in percent, clamped to [0, 100]; 0 without income."""
        if self.monthly_income <= 0:
            return 0.0
        rate = (self.monthly_income - self.monthly_expenses) / self.monthly_income * 100.0
        return clamp(rate, SAVINGS_RATE_BOUNDS)


class ProfileConfig(BaseModel):
    """
    A JSON profile consumed by the CLI.

    Examples
    --------
    >>> ProfileConfig.model_validate({
    ...     "seed": {"monthly_income": 3000, "monthly_expenses": 2000},
    ...     "simulations": [{"name": "Base", "years": 10, "incomeGrowth": 2}],
    ...     "baseline": "Base",
    ... })
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: str = Field(default="0.1.0")
    seed: SeedConfig = Field(default_factory=SeedConfig)
    simulations: List[SimulationParametersInput] = Field(default_factory=list)
    goals: List[GoalInput] = Field(default_factory=list)
    baseline: Optional[str] = Field(default=None, description="Baseline simulation name")


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with FINTRAJ_ (e.g., FINTRAJ_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging)
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    start_year : int, optional
        Fixed first calendar year for labels; None uses today's year
    currency_symbol : str
        Symbol used when printing amounts

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="FINTRAJ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )
    start_year: Optional[int] = Field(
        default=None,
        description="First calendar year of projections (default: current year)",
    )
    currency_symbol: str = Field(default="€", description="Currency symbol for output")

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
