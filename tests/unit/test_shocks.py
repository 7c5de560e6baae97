"""
Unit tests for shocks.py module.

Tests each crisis shock in isolation: which indices change, by how much,
the savings floor and the no-aliasing rule.
"""

import pytest

from fintraj.model import METRICS
from fintraj.shocks import (
    HousingPurchase,
    InterestRateRise,
    JobLoss,
    MedicalEmergency,
    apply_shock,
    apply_shocks,
)


def _unchanged_except(result, baseline, indices):
    for metric in METRICS:
        for i in range(len(baseline)):
            if i not in indices:
                assert result.series(metric)[i] == baseline.series(metric)[i], (metric, i)


class TestJobLoss:
    """Job loss hits year index 2 only."""

    def test_isolation(self, base_result):
        shocked = apply_shock(base_result, JobLoss())
        _unchanged_except(shocked, base_result, {2})
        assert shocked.savings[2] >= 0

    def test_values(self, base_result):
        shocked = apply_shock(base_result, JobLoss())
        drawn = base_result.expenses[2] * 0.7
        assert shocked.income[2] == pytest.approx(base_result.income[2] * 0.3)
        assert shocked.expenses[2] == base_result.expenses[2]
        assert shocked.savings[2] == max(0.0, base_result.savings[2] - drawn)
        assert shocked.net_worth[2] == pytest.approx(base_result.net_worth[2] - drawn)

    def test_savings_floored_net_worth_not(self, base_result):
        shocked = apply_shock(base_result, JobLoss())
        # 582.8 saved against 1029.1 drawn
        assert shocked.savings[2] == 0.0
        assert shocked.net_worth[2] == pytest.approx(1193.4 - 1470.15 * 0.7)

    def test_short_horizon_is_noop(self, base_params, seed):
        from fintraj.projection import project

        short = project(base_params.replace(years=1), seed, start_year=2025)
        assert apply_shock(short, JobLoss()) == short


class TestMedicalEmergency:
    def test_one_time_cost_in_year_one(self, rich_result):
        shock = MedicalEmergency(monthly_income=3000.0)
        shocked = apply_shock(rich_result, shock)
        _unchanged_except(shocked, rich_result, {1})
        assert shocked.expenses[1] == pytest.approx(rich_result.expenses[1] + 18_000.0)
        assert shocked.savings[1] == max(0.0, rich_result.savings[1] - 18_000.0)
        assert shocked.net_worth[1] == pytest.approx(rich_result.net_worth[1] - 18_000.0)
        assert shocked.income == rich_result.income


class TestInterestRateRise:
    def test_recurring_from_year_one(self, rich_result):
        shock = InterestRateRise(monthly_expenses=2200.0)
        shocked = apply_shock(rich_result, shock)
        cost = 2200.0 * 0.15
        assert shocked.expenses[0] == rich_result.expenses[0]
        assert shocked.net_worth[0] == rich_result.net_worth[0]
        for i in range(1, len(rich_result)):
            assert shocked.expenses[i] == pytest.approx(rich_result.expenses[i] + cost)
            assert shocked.savings[i] == pytest.approx(max(0.0, rich_result.savings[i] - cost))
            assert shocked.net_worth[i] == pytest.approx(rich_result.net_worth[i] - cost)


class TestHousingPurchase:
    def test_down_payment_and_mortgage(self, rich_result):
        shock = HousingPurchase(monthly_income=3000.0)
        shocked = apply_shock(rich_result, shock)
        down = 72_000.0
        payment = 3000.0 * 0.33 * 12

        _unchanged_except(shocked, rich_result, set(range(2, len(rich_result))))
        assert shocked.savings[2] == max(0.0, rich_result.savings[2] - down)
        assert shocked.net_worth[2] == pytest.approx(rich_result.net_worth[2] - down + payment * 0.3)
        for i in range(2, len(rich_result)):
            assert shocked.expenses[i] == pytest.approx(rich_result.expenses[i] + payment)
        for i in range(3, len(rich_result)):
            assert shocked.savings[i] == rich_result.savings[i]
            assert shocked.net_worth[i] == pytest.approx(rich_result.net_worth[i] + payment * 0.3)

    def test_net_worth_may_go_negative(self, base_result):
        shocked = apply_shock(base_result, HousingPurchase(monthly_income=3000.0))
        assert shocked.net_worth[2] < 0
        assert shocked.savings[2] == 0.0


class TestDispatch:
    """Test apply_shock / apply_shocks plumbing."""

    @pytest.mark.parametrize(
        "shock",
        [
            JobLoss(),
            MedicalEmergency(monthly_income=1000.0),
            InterestRateRise(monthly_expenses=1000.0),
            HousingPurchase(monthly_income=1000.0),
        ],
    )
    def test_baseline_not_mutated(self, base_result, shock):
        before = base_result.as_dict()
        shocked = apply_shock(base_result, shock)
        assert base_result.as_dict() == before
        assert shocked is not base_result
        assert shocked.params == base_result.params
        assert len(shocked) == len(base_result)

    def test_unknown_shock(self, base_result):
        with pytest.raises(TypeError, match="Unsupported shock type"):
            apply_shock(base_result, "job_loss")

    def test_apply_shocks_in_order(self, rich_result):
        shocks = [JobLoss(), MedicalEmergency(monthly_income=3000.0)]
        combined = apply_shocks(rich_result, shocks)
        expected = apply_shock(apply_shock(rich_result, shocks[0]), shocks[1])
        assert combined == expected

    def test_apply_no_shocks_is_copy(self, rich_result):
        out = apply_shocks(rich_result, [])
        assert out == rich_result
        assert out is not rich_result
