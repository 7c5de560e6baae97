"""
FinTraj — Personal-finance trajectory engine

Projects income, expenses, savings and net worth year by year under
explicit assumptions, with what-if scenarios, crisis shocks, savings goals
and side-by-side comparisons.

Modules
-------
- validation : raw input → engine-safe SimulationParameters
- projection : deterministic annual compounding
- scenario   : optimistic/pessimistic transforms, crisis presets, pipeline
- shocks     : job loss, medical emergency, rate rise, housing purchase
- goals      : savings goal trajectories and progress
- comparison : ranking and baseline deltas
- totals     : current line items → year-0 seed
- health     : financial health score
- utils      : shared utilities (rounding, guarded ratios, calendar)

"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigurationError,
    DivisionGuardWarning,
    FinTrajError,
    InvalidParameterError,
    ValidationError,
)
from .model import (
    GoalDefinition,
    GoalResult,
    ProjectionSeed,
    ScenarioComparison,
    SimulationParameters,
    SimulationResult,
    SimulationType,
)
from .validation import validate_goal, validate_parameters
from .projection import ProjectionEngine, project
from .scenario import PRESETS, adjust, run_preset, run_simulation
from .shocks import HousingPurchase, InterestRateRise, JobLoss, MedicalEmergency, apply_shock
from .goals import project_goal, years_remaining
from .comparison import compare
from .totals import FinancialItem, FinancialSnapshot
from . import utils

__all__ = [
    "__version__",
    # Errors
    "FinTrajError",
    "ValidationError",
    "InvalidParameterError",
    "ConfigurationError",
    "DivisionGuardWarning",
    # Model
    "SimulationType",
    "SimulationParameters",
    "ProjectionSeed",
    "SimulationResult",
    "GoalDefinition",
    "GoalResult",
    "ScenarioComparison",
    # Operations
    "validate_parameters",
    "validate_goal",
    "project",
    "ProjectionEngine",
    "adjust",
    "run_simulation",
    "run_preset",
    "PRESETS",
    "JobLoss",
    "MedicalEmergency",
    "InterestRateRise",
    "HousingPurchase",
    "apply_shock",
    "project_goal",
    "years_remaining",
    "compare",
    "FinancialItem",
    "FinancialSnapshot",
    "utils",
]
