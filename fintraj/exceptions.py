"""
Custom exceptions and warnings for FinTraj.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all FinTraj modules. All exceptions inherit from FinTrajError,
enabling catch-all handling when needed.

Only the parameter boundary raises: the projection engine, shock applier,
goal calculator and comparator are total over validated inputs. Ratio
computations that would divide by zero emit a DivisionGuardWarning and
resolve to None ("N/A") instead.

Exception Hierarchy
-------------------
FinTrajError (base)
├── ValidationError - Data validation failures
│   └── InvalidParameterError - Malformed simulation/goal parameter
└── ConfigurationError - Invalid configuration files or preset keys

DivisionGuardWarning (UserWarning) - guarded division by zero

Usage
-----
>>> from fintraj.exceptions import InvalidParameterError
>>>
>>> raise InvalidParameterError("years", "must be non-negative, got -1")
>>>
>>> # Catch all FinTraj exceptions
>>> try:
...     params = validate_parameters(raw)
... except FinTrajError as e:
...     print(f"FinTraj error: {e}")
"""

__all__ = [
    "FinTrajError",
    "ValidationError",
    "InvalidParameterError",
    "ConfigurationError",
    "DivisionGuardWarning",
]


class FinTrajError(Exception):
    """
    Base exception for all FinTraj errors.

    Examples
    --------
    >>> try:
    ...     run_simulation(raw, seed)
    ... except FinTrajError as e:
    ...     logger.error("Simulation failed: %s", e)
    """
    pass


class ValidationError(FinTrajError):
    """
    Data validation failures.

    Raised when input data fails validation checks, such as:
    - Non-numeric values where a number is required
    - Out-of-domain values (negative horizon, negative goal amounts)
    - Mismatched series lengths
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A single parameter is missing or malformed.

    Raised by the parameter validator (and GoalDefinition) for:
    - Missing required fields (``years``)
    - Non-numeric or infinite rate values
    - Negative or fractional horizons
    - Unknown simulation types

    Parameters
    ----------
    field : str
        Name of the offending field (snake_case).
    message : str
        Human-readable reason.

    Examples
    --------
    >>> err = InvalidParameterError("years", "must be >= 0, got -3")
    >>> err.field
    'years'
    >>> str(err)
    'Invalid parameter years: must be >= 0, got -3'
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid parameter {field}: {message}")


class ConfigurationError(FinTrajError):
    """
    Invalid configuration.

    Raised when a profile/config file cannot be interpreted, such as:
    - Unknown preset or shock keys
    - Schema mismatches in saved results
    """
    pass


class DivisionGuardWarning(UserWarning):
    """
    Non-fatal warning for a guarded division by zero.

    Emitted when a ratio (growth %, baseline delta %, savings rate,
    goal progress) has a zero denominator. The affected metric resolves
    to None, rendered as "N/A".
    """
    pass
