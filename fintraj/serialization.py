"""
Serialization module for FinTraj persistence.

Purpose
-------
Plain JSON save/load for simulation parameters, projection results, goal
trajectories and CLI profiles, so runs can be shared, re-loaded and
compared later.

Design Principles
-----------------
- Validated on the way in: parameters go back through
  ``validate_parameters``; profiles through ``ProfileConfig``
- Human-readable: indented JSON, snake_case keys
- Versioned: every file carries ``schema_version``; a mismatch warns

Example
-------
>>> from pathlib import Path
>>> from fintraj.serialization import save_result, load_result
>>> save_result(result, Path("runs/base.json"))
>>> loaded = load_result(Path("runs/base.json"))
>>> loaded.net_worth == result.net_worth
True
"""

from __future__ import annotations

import json
import warnings
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import pydantic

from .config import ProfileConfig
from .exceptions import ConfigurationError
from .model import GoalResult, SimulationParameters, SimulationResult
from .totals import FinancialSnapshot
from .types import ParametersDict, SavedResultDict
from .validation import validate_parameters

__all__ = [
    "SCHEMA_VERSION",
    "params_to_dict",
    "params_from_dict",
    "result_to_dict",
    "result_from_dict",
    "save_result",
    "load_result",
    "save_results",
    "load_results",
    "save_goal_result",
    "load_profile",
    "save_profile",
    "load_snapshot",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema(data: Mapping[str, Any], path: Path, default: str = "0.0.0") -> None:
    schema_version = data.get("schema_version", default)
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{path}: schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e


def _write_json(data: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

def params_to_dict(params: SimulationParameters) -> ParametersDict:
    return params.as_dict()  # type: ignore[return-value]


def params_from_dict(data: Mapping[str, Any]) -> SimulationParameters:
    """Rebuild parameters; the same rules as user input apply."""
    return validate_parameters(data)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def result_to_dict(result: SimulationResult) -> SavedResultDict:
    """
    Convert a SimulationResult to its JSON representation.

    Parameters
    ----------
    result : SimulationResult
        Result to serialize

    Returns
    -------
    dict
        Series as lists plus the parameters and the schema version
    """
    data: Dict[str, Any] = {"schema_version": SCHEMA_VERSION}
    data.update(result.as_dict())
    data["saved_at"] = datetime.now().isoformat(timespec="seconds")
    return data  # type: ignore[return-value]


def result_from_dict(data: Mapping[str, Any]) -> SimulationResult:
    """
    Rebuild a SimulationResult from its JSON representation.

    Raises
    ------
    ConfigurationError
        If series are missing or their lengths do not match ``years + 1``.
    InvalidParameterError
        If the embedded parameters are malformed.
    """
    if "params" not in data:
        raise ConfigurationError("Saved result has no 'params' section.")
    params = params_from_dict(data["params"])
    try:
        return SimulationResult(
            years=data["years"],
            income=data["income"],
            expenses=data["expenses"],
            savings=data["savings"],
            net_worth=data["net_worth"],
            params=params,
        )
    except KeyError as e:
        raise ConfigurationError(f"Saved result is missing series {e}.") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Saved result is malformed: {e}") from e


def save_result(result: SimulationResult, path: Path) -> None:
    """
    Save a projection to a JSON file.

    Examples
    --------
    >>> save_result(result, Path("runs/base.json"))
    """
    _write_json(result_to_dict(result), path)


def load_result(path: Path) -> SimulationResult:
    """Load a projection saved by ``save_result`` (schema mismatch warns)."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object.")
    _check_schema(data, path)
    return result_from_dict(data)


def save_results(results: Sequence[SimulationResult], path: Path) -> None:
    """Save several projections (e.g. a comparison set) to one file."""
    _write_json(
        {
            "schema_version": SCHEMA_VERSION,
            "results": [result.as_dict() for result in results],
        },
        path,
    )


def load_results(path: Path) -> List[SimulationResult]:
    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise ConfigurationError(f"{path}: expected an object with a 'results' list.")
    _check_schema(data, path)
    return [result_from_dict(item) for item in data["results"]]


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def save_goal_result(result: GoalResult, path: Path, name: str = "Goal") -> None:
    _write_json(
        {"schema_version": SCHEMA_VERSION, "name": name, **result.as_dict()},
        path,
    )


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

def load_profile(path: Union[str, Path]) -> ProfileConfig:
    """
    Load and validate a CLI profile (seed, simulations, goals).

    Raises
    ------
    ConfigurationError
        If the file is not valid JSON or does not match ``ProfileConfig``.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object.")
    # hand-written profiles may omit the version
    _check_schema(data, path, default=SCHEMA_VERSION)
    try:
        return ProfileConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"{path}: invalid profile: {e}") from e


def save_profile(profile: ProfileConfig, path: Path) -> None:
    _write_json(profile.model_dump(mode="json"), path)



# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

def load_snapshot(path: Union[str, Path]) -> FinancialSnapshot:
    """Load current line items (incomes, expenses, savings, debts, investments)."""
    path = Path(path)
    data = _read_json(path)
    try:
        return FinancialSnapshot.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"{path}: invalid snapshot: {e}") from e
