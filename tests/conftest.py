"""
Pytest configuration and fixtures for FinTraj test suite.

This module provides reusable fixtures for testing all FinTraj components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

from datetime import date

import pytest

from fintraj.model import (
    GoalDefinition,
    ProjectionSeed,
    SimulationParameters,
    SimulationResult,
    SimulationType,
)
from fintraj.projection import project
from fintraj.totals import FinancialSnapshot


# ---------------------------------------------------------------------------
# Calendar Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def start_year() -> int:
    """Standard first calendar year for tests."""
    return 2025


@pytest.fixture
def clock():
    """Injectable clock frozen on 2025-06-15."""
    return lambda: date(2025, 6, 15)


# ---------------------------------------------------------------------------
# Parameter Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def base_params() -> SimulationParameters:
    """
    Ten-year normal scenario.

    Income growth 2%, expense reduction 1%, savings rate 50%,
    investment return 5%, inflation 2%.
    """
    return SimulationParameters(
        name="Base",
        years=10,
        income_growth=2.0,
        expense_reduction=1.0,
        investment_return=5.0,
        inflation_rate=2.0,
        savings_rate=50.0,
        simulation_type=SimulationType.NORMAL,
    )


@pytest.fixture
def zero_params() -> SimulationParameters:
    """Five years with every rate at 0."""
    return SimulationParameters(name="Flat", years=5)


@pytest.fixture
def raw_params() -> dict:
    """Raw camelCase parameters as a form would submit them."""
    return {
        "name": "Base",
        "years": 10,
        "incomeGrowth": 2,
        "expenseReduction": 1,
        "savingsRate": 50,
        "investmentReturn": 5,
        "inflationRate": 2,
        "simulationType": "normal",
    }


# ---------------------------------------------------------------------------
# Seed / Result Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def seed() -> ProjectionSeed:
    """Year-0 totals: income 2000, expenses 1500, no savings or net worth."""
    return ProjectionSeed(income=2000.0, expenses=1500.0, savings=0.0, net_worth=0.0)


@pytest.fixture
def rich_seed() -> ProjectionSeed:
    """Seed with existing savings and net worth (annual flows)."""
    return ProjectionSeed(income=36_000.0, expenses=26_400.0, savings=8_000.0, net_worth=12_000.0)


@pytest.fixture
def base_result(base_params, seed, start_year) -> SimulationResult:
    """Projection of ``base_params`` from ``seed``."""
    return project(base_params, seed, start_year=start_year)


@pytest.fixture
def rich_result(base_params, rich_seed, start_year) -> SimulationResult:
    return project(base_params, rich_seed, start_year=start_year)


# ---------------------------------------------------------------------------
# Goal Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def emergency_goal() -> GoalDefinition:
    """
    Emergency fund goal.

    Target 10,000; 2,000 saved; 300/month; 1% interest; 2% inflation; 3 years.
    """
    return GoalDefinition(
        name="Emergency fund",
        target_amount=10_000,
        current_amount=2_000,
        monthly_contribution=300,
        interest_rate=1,
        inflation_rate=2,
        years=3,
    )


# ---------------------------------------------------------------------------
# Snapshot Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def snapshot_data() -> dict:
    """Raw line items: 3000 income, 2200 expenses, 8000 savings, 4000 investments, 2000 debt."""
    return {
        "incomes": [
            {"value": 2500, "category": "Salary"},
            {"value": "500", "category": "Freelance"},
        ],
        "expenses": [
            {"value": "1 200,00", "category": "Rent"},
            {"value": 1000, "category": "Living"},
        ],
        "savings": [{"value": 8000, "category": "Savings account"}],
        "investments": [{"value": 4000, "category": "ETF"}],
        "debts": [{"value": 2000, "category": "Car loan"}],
    }


@pytest.fixture
def snapshot(snapshot_data) -> FinancialSnapshot:
    return FinancialSnapshot.model_validate(snapshot_data)
