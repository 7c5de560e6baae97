"""
Unit tests for scenario.py module.

Tests the scenario adjuster, named crisis presets and the
validate → adjust → project → shock pipeline.
"""

import pytest

from fintraj.exceptions import ConfigurationError, InvalidParameterError
from fintraj.model import SimulationType
from fintraj.projection import project
from fintraj.scenario import (
    PRESETS,
    adjust,
    get_preset,
    preset_table,
    run_preset,
    run_simulation,
)
from fintraj.shocks import HousingPurchase, InterestRateRise, JobLoss, MedicalEmergency, apply_shock


class TestAdjust:
    """Test the multiplicative scenario transforms."""

    def test_optimistic(self, base_params):
        out = adjust(base_params, SimulationType.OPTIMISTIC)
        assert out.income_growth == pytest.approx(3.0)
        assert out.investment_return == pytest.approx(7.5)
        assert out.expense_reduction == pytest.approx(1.5)
        assert out.inflation_rate == base_params.inflation_rate
        assert out.savings_rate == base_params.savings_rate

    def test_pessimistic(self, base_params):
        out = adjust(base_params, "pessimistic")
        assert out.income_growth == pytest.approx(1.0)
        assert out.investment_return == pytest.approx(2.5)
        assert out.expense_reduction == pytest.approx(0.5)
        assert out.inflation_rate == pytest.approx(3.0)

    @pytest.mark.parametrize("kind", [SimulationType.NORMAL, SimulationType.CRISIS])
    def test_identity_kinds(self, base_params, kind):
        out = adjust(base_params, kind)
        assert out == base_params
        assert out is not base_params

    def test_defaults_to_params_type(self, base_params):
        params = base_params.replace(simulation_type=SimulationType.OPTIMISTIC)
        assert adjust(params).income_growth == pytest.approx(3.0)

    def test_input_not_mutated(self, base_params):
        before = base_params.as_dict()
        adjust(base_params, SimulationType.PESSIMISTIC)
        assert base_params.as_dict() == before

    def test_unknown_kind(self, base_params):
        with pytest.raises(ValueError):
            adjust(base_params, "euphoric")


class TestPresets:
    """Test the named crisis presets."""

    def test_preset_keys(self):
        assert set(PRESETS) == {
            "job_loss",
            "medical_emergency",
            "inflation_shock",
            "interest_rate_rise",
            "housing_purchase",
        }

    def test_get_preset_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown scenario preset"):
            get_preset("alien_invasion")

    @pytest.mark.parametrize(
        "key, shock_type",
        [
            ("job_loss", JobLoss),
            ("medical_emergency", MedicalEmergency),
            ("interest_rate_rise", InterestRateRise),
            ("housing_purchase", HousingPurchase),
        ],
    )
    def test_preset_shock_types(self, key, shock_type):
        assert isinstance(get_preset(key).shock(3000.0, 2000.0), shock_type)

    def test_inflation_shock_has_no_shock(self):
        assert get_preset("inflation_shock").shock(3000.0, 2000.0) is None

    def test_shock_sized_from_monthly_totals(self):
        medical = get_preset("medical_emergency").shock(3000.0, 2000.0)
        assert medical.cost == pytest.approx(18_000.0)
        rate_rise = get_preset("interest_rate_rise").shock(3000.0, 2000.0)
        assert rate_rise.yearly_cost == pytest.approx(300.0)

    def test_preset_parameters(self, base_params):
        params = get_preset("inflation_shock").parameters(base_params)
        assert params.name == "Inflation shock"
        assert params.simulation_type is SimulationType.PESSIMISTIC
        assert params.inflation_rate == 8.0
        assert params.income_growth == base_params.income_growth

    def test_preset_table(self):
        rows = preset_table()
        assert [r["key"] for r in rows] == list(PRESETS)
        assert {"key", "name", "type", "description"} <= set(rows[0])


class TestRunSimulation:
    """Test the validate → adjust → project → shock pipeline."""

    def test_normal_matches_direct_projection(self, raw_params, seed, base_params):
        res = run_simulation(raw_params, seed, start_year=2025)
        assert res == project(base_params, seed, start_year=2025)

    def test_result_carries_adjusted_params(self, raw_params, seed):
        raw = dict(raw_params, simulationType="optimistic")
        res = run_simulation(raw, seed, start_year=2025)
        assert res.params.income_growth == pytest.approx(3.0)
        assert res.income[1] == pytest.approx(2000.0 * 1.03)

    def test_shock_applied(self, raw_params, seed, base_params):
        res = run_simulation(raw_params, seed, shock=JobLoss(), start_year=2025)
        baseline = project(base_params, seed, start_year=2025)
        assert res == apply_shock(baseline, JobLoss())

    def test_invalid_input_raises(self, seed):
        with pytest.raises(InvalidParameterError):
            run_simulation({"years": -3}, seed)


class TestRunPreset:
    """Test run_preset."""

    def test_baseline_untouched_by_shock(self, base_params, rich_seed):
        baseline, scenario = run_preset(
            "job_loss", base_params, rich_seed, monthly_income=3000, monthly_expenses=2200,
            start_year=2025,
        )
        assert baseline.params.simulation_type is SimulationType.CRISIS
        assert scenario.income[2] == pytest.approx(baseline.income[2] * 0.3)
        assert scenario.income[1] == baseline.income[1]

    def test_inflation_shock_compounds_pessimistic(self, base_params, seed):
        """The 8% preset rate is itself scaled by the pessimistic transform."""
        baseline, scenario = run_preset("inflation_shock", base_params, seed, start_year=2025)
        assert scenario.params.inflation_rate == pytest.approx(12.0)
        assert scenario.params.income_growth == pytest.approx(1.0)
        assert scenario == baseline
        assert scenario is not baseline

    def test_accepts_raw_mapping(self, raw_params, seed):
        baseline, scenario = run_preset(
            "medical_emergency", raw_params, seed, monthly_income=500, start_year=2025
        )
        assert scenario.expenses[1] == pytest.approx(baseline.expenses[1] + 3000.0)
