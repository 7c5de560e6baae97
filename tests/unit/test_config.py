"""
Unit tests for config.py module.

Tests Pydantic input schemas, profiles and environment-driven settings.
"""

import pydantic
import pytest

from fintraj.config import (
    AppSettings,
    GoalInput,
    ProfileConfig,
    SeedConfig,
    SimulationParametersInput,
)
from fintraj.model import SimulationType


class TestSimulationParametersInput:
    def test_aliases_and_defaults(self):
        cfg = SimulationParametersInput.model_validate({"years": 10, "incomeGrowth": 2})
        assert cfg.income_growth == 2.0
        assert cfg.inflation_rate == 0.0
        assert cfg.name == "Simulation"
        assert cfg.simulation_type is SimulationType.NORMAL

    def test_blank_name_defaults(self):
        cfg = SimulationParametersInput.model_validate({"years": 1, "name": "  "})
        assert cfg.name == "Simulation"

    def test_frozen(self):
        cfg = SimulationParametersInput.model_validate({"years": 1})
        with pytest.raises(pydantic.ValidationError):
            cfg.years = 2

    def test_rejects_bool_rate(self):
        with pytest.raises(pydantic.ValidationError):
            SimulationParametersInput.model_validate({"years": 1, "savingsRate": False})


class TestGoalInput:
    def test_aliases(self):
        cfg = GoalInput.model_validate({"targetAmount": 100, "monthlyContribution": 5, "years": 1})
        assert cfg.target_amount == 100.0
        assert cfg.monthly_contribution == 5.0

    def test_rejects_infinite(self):
        with pytest.raises(pydantic.ValidationError):
            GoalInput.model_validate({"targetAmount": float("inf"), "years": 1})


class TestSeedConfig:
    def test_to_seed_annualizes_flows(self):
        seed = SeedConfig(monthly_income=3000, monthly_expenses=2200, savings=8000, net_worth=9000).to_seed()
        assert seed.income == 36_000.0
        assert seed.expenses == 26_400.0
        assert seed.savings == 8000.0
        assert seed.net_worth == 9000.0

    def test_savings_rate(self):
        assert SeedConfig(monthly_income=3000, monthly_expenses=2250).savings_rate() == pytest.approx(25.0)
        assert SeedConfig(monthly_income=1000, monthly_expenses=2000).savings_rate() == 0.0
        assert SeedConfig().savings_rate() == 0.0

    def test_negative_income_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            SeedConfig(monthly_income=-1)

    def test_unknown_key_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            SeedConfig.model_validate({"salary": 3000})


class TestProfileConfig:
    def test_profile(self):
        profile = ProfileConfig.model_validate({
            "seed": {"monthlyIncome": 3000, "monthlyExpenses": 2000},
            "simulations": [
                {"name": "Base", "years": 10, "incomeGrowth": 2},
                {"name": "Bad times", "years": 10, "simulationType": "pessimistic"},
            ],
            "goals": [{"name": "Car", "targetAmount": 15_000, "years": 4}],
            "baseline": "Base",
        })
        assert profile.seed.monthly_income == 3000.0
        assert [s.name for s in profile.simulations] == ["Base", "Bad times"]
        assert profile.simulations[1].simulation_type is SimulationType.PESSIMISTIC
        assert profile.goals[0].target_amount == 15_000.0
        assert profile.schema_version == "0.1.0"

    def test_empty_profile(self):
        profile = ProfileConfig()
        assert profile.simulations == []
        assert profile.baseline is None

    def test_invalid_simulation(self):
        with pytest.raises(pydantic.ValidationError):
            ProfileConfig.model_validate({"simulations": [{"years": -1}]})


class TestAppSettings:
    """Environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for var in ("FINTRAJ_DEBUG", "FINTRAJ_LOG_LEVEL", "FINTRAJ_START_YEAR", "FINTRAJ_CURRENCY_SYMBOL"):
            monkeypatch.delenv(var, raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.start_year is None
        assert settings.currency_symbol == "€"
        assert settings.effective_log_level == "WARNING"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FINTRAJ_LOG_LEVEL", "INFO")
        monkeypatch.setenv("FINTRAJ_START_YEAR", "2030")
        monkeypatch.setenv("FINTRAJ_CURRENCY_SYMBOL", "$")
        settings = AppSettings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.start_year == 2030
        assert settings.currency_symbol == "$"

    def test_debug_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("FINTRAJ_DEBUG", "true")
        assert AppSettings(_env_file=None).effective_log_level == "DEBUG"

    def test_invalid_level(self, monkeypatch):
        monkeypatch.setenv("FINTRAJ_LOG_LEVEL", "LOUD")
        with pytest.raises(pydantic.ValidationError):
            AppSettings(_env_file=None)
