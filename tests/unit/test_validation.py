"""
Unit tests for validation.py module.

Tests the narrowing of raw parameter bags into SimulationParameters and
GoalDefinition, and the field names reported on failure.
"""

import math

import pytest

from fintraj.config import SimulationParametersInput
from fintraj.exceptions import FinTrajError, InvalidParameterError, ValidationError
from fintraj.model import GoalDefinition, SimulationParameters, SimulationType
from fintraj.validation import validate_goal, validate_parameters


class TestValidateParameters:
    """Test validate_parameters on well-formed input."""

    def test_camel_case_keys(self, raw_params):
        params = validate_parameters(raw_params)

        assert isinstance(params, SimulationParameters)
        assert params.name == "Base"
        assert params.years == 10
        assert params.income_growth == 2.0
        assert params.expense_reduction == 1.0
        assert params.savings_rate == 50.0
        assert params.investment_return == 5.0
        assert params.inflation_rate == 2.0
        assert params.simulation_type is SimulationType.NORMAL

    def test_snake_case_keys(self):
        params = validate_parameters({"years": 3, "income_growth": 4, "savings_rate": 20})
        assert params.income_growth == 4.0
        assert params.savings_rate == 20.0

    def test_missing_rates_default_to_zero(self):
        params = validate_parameters({"years": 10, "incomeGrowth": 2})
        assert (params.years, params.income_growth, params.savings_rate) == (10, 2.0, 0.0)
        assert params.name == "Simulation"

    def test_none_and_nan_rates_default_to_zero(self):
        params = validate_parameters(
            {"years": 1, "incomeGrowth": None, "inflationRate": float("nan")}
        )
        assert params.income_growth == 0.0
        assert params.inflation_rate == 0.0

    def test_numeric_strings_accepted(self):
        params = validate_parameters({"years": 2, "investmentReturn": "4,5"})
        assert params.investment_return == pytest.approx(4.5)

    def test_negative_rates_are_legal(self):
        """Negative expense reduction models expense growth."""
        params = validate_parameters({"years": 2, "expenseReduction": -3})
        assert params.expense_reduction == -3.0

    def test_zero_years_is_legal(self):
        assert validate_parameters({"years": 0}).years == 0

    def test_simulation_type_case_insensitive(self):
        params = validate_parameters({"years": 1, "simulationType": "Optimistic"})
        assert params.simulation_type is SimulationType.OPTIMISTIC

    def test_unknown_keys_ignored(self):
        params = validate_parameters({"years": 1, "color": "blue"})
        assert params.years == 1

    def test_input_not_mutated(self, raw_params):
        before = dict(raw_params)
        validate_parameters(raw_params)
        assert raw_params == before

    def test_accepts_parameters_and_input_models(self, base_params):
        assert validate_parameters(base_params) == base_params

        cfg = SimulationParametersInput.model_validate({"years": 4, "savingsRate": 10})
        assert validate_parameters(cfg).savings_rate == 10.0


class TestValidateParametersErrors:
    """Test failure reporting of validate_parameters."""

    @pytest.mark.parametrize(
        "raw, field",
        [
            ({}, "years"),
            ({"years": -1}, "years"),
            ({"years": 2.5}, "years"),
            ({"years": True}, "years"),
            ({"years": None}, "years"),
            ({"years": 5, "incomeGrowth": "abc"}, "income_growth"),
            ({"years": 5, "savings_rate": math.inf}, "savings_rate"),
            ({"years": 5, "investmentReturn": True}, "investment_return"),
            ({"years": 5, "simulationType": "apocalypse"}, "simulation_type"),
        ],
    )
    def test_invalid_field_reported(self, raw, field):
        with pytest.raises(InvalidParameterError) as excinfo:
            validate_parameters(raw)
        assert excinfo.value.field == field
        assert str(excinfo.value).startswith(f"Invalid parameter {field}:")

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidParameterError) as excinfo:
            validate_parameters([("years", 3)])
        assert excinfo.value.field == "<root>"

    def test_error_hierarchy(self):
        with pytest.raises(ValidationError):
            validate_parameters({"years": -1})
        with pytest.raises(FinTrajError):
            validate_parameters({"years": -1})


class TestValidateGoal:
    """Test validate_goal."""

    def test_camel_case_goal(self):
        goal = validate_goal({
            "name": "Holidays",
            "targetAmount": 5000,
            "currentAmount": 1500,
            "monthlyContribution": 200,
            "interestRate": 1,
            "inflationRate": 2,
            "years": 2,
        })
        assert isinstance(goal, GoalDefinition)
        assert goal.target_amount == 5000.0
        assert goal.monthly_contribution == 200.0
        assert goal.years == 2

    def test_definition_passthrough(self, emergency_goal):
        assert validate_goal(emergency_goal) is emergency_goal

    @pytest.mark.parametrize(
        "raw, field",
        [
            ({"years": 3}, "target_amount"),
            ({"targetAmount": -1, "years": 3}, "target_amount"),
            ({"targetAmount": 100, "monthlyContribution": -5, "years": 3}, "monthly_contribution"),
            ({"targetAmount": 100, "years": -2}, "years"),
            ({"targetAmount": 100, "years": 1.5}, "years"),
        ],
    )
    def test_invalid_goal(self, raw, field):
        with pytest.raises(InvalidParameterError) as excinfo:
            validate_goal(raw)
        assert excinfo.value.field == field


class TestGoalDefinition:
    """GoalDefinition guards its own invariants."""

    def test_negative_amount(self):
        with pytest.raises(InvalidParameterError, match="current_amount"):
            GoalDefinition(target_amount=100, current_amount=-1)

    def test_non_integer_years(self):
        with pytest.raises(InvalidParameterError, match="years"):
            GoalDefinition(target_amount=100, years=2.0)

    def test_infinite_rate(self):
        with pytest.raises(InvalidParameterError, match="interest_rate"):
            GoalDefinition(target_amount=100, interest_rate=float("inf"))
