"""
Unit tests for utils.py module.

Tests rounding, guarded ratios, calendar helpers, deflation and formatting.
"""

import math
import warnings
from datetime import date

import numpy as np
import pytest

from fintraj.exceptions import DivisionGuardWarning
from fintraj.utils import (
    clamp,
    current_year,
    deflate,
    format_currency,
    guarded_percent,
    is_finite_number,
    percent_change,
    round_half_up,
    safe_ratio,
    year_labels,
)


class TestValidation:
    """Test input validation helpers."""

    @pytest.mark.parametrize("value", [0, 1.5, -3, np.float64(2.0), np.int64(7)])
    def test_finite_numbers(self, value):
        assert is_finite_number(value)

    @pytest.mark.parametrize("value", [True, None, "3", math.inf, math.nan, [1]])
    def test_not_finite_numbers(self, value):
        assert not is_finite_number(value)


class TestRounding:
    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (3.5, 4), (2.4999, 2), (-2.5, -2), (-2.6, -3), (0.0, 0)],
    )
    def test_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestRatios:
    """Test guarded divisions."""

    def test_safe_ratio(self):
        assert safe_ratio(1.0, 4.0) == 0.25

    def test_safe_ratio_zero_denominator(self):
        with pytest.warns(DivisionGuardWarning, match="growth of 'A'"):
            assert safe_ratio(1.0, 0.0, label="growth of 'A'") is None

    def test_safe_ratio_infinite_denominator(self):
        with pytest.warns(DivisionGuardWarning):
            assert safe_ratio(1.0, math.inf) is None

    def test_percent_change(self):
        assert percent_change(100.0, 150.0) == 50
        assert percent_change(-100.0, -50.0) == -50

    def test_percent_change_from_zero(self):
        with pytest.warns(DivisionGuardWarning):
            assert percent_change(0.0, 10.0) is None

    def test_safe_ratio_infinite_numerator(self):
        with pytest.warns(DivisionGuardWarning):
            assert safe_ratio(math.inf, 2.0) is None

    def test_safe_ratio_overflowing_quotient(self):
        with pytest.warns(DivisionGuardWarning):
            assert safe_ratio(1e300, 1e-300) is None

    def test_percent_change_to_infinity(self):
        with pytest.warns(DivisionGuardWarning):
            assert percent_change(1.0, math.inf) is None

    def test_percent_change_overflowing_percentage(self):
        with pytest.warns(DivisionGuardWarning):
            assert percent_change(1.0, 1e307) is None

    def test_guarded_percent(self):
        assert guarded_percent(0.125) == 13
        with pytest.warns(DivisionGuardWarning):
            assert guarded_percent(math.nan) is None

    def test_no_warning_for_nonzero(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            percent_change(1.0, 2.0)

    def test_clamp(self):
        assert clamp(120.0, (0.0, 100.0)) == 100.0
        assert clamp(-5.0, (0.0, 100.0)) == 0.0
        assert clamp(42.0, (0.0, 100.0)) == 42.0


class TestCalendar:
    def test_current_year_from_clock(self, clock):
        assert current_year(clock) == 2025

    def test_current_year_default(self):
        assert current_year() == date.today().year

    def test_year_labels(self):
        assert year_labels(3, start_year=2030) == (2030, 2031, 2032)

    def test_year_labels_offsets(self):
        assert year_labels(3, start_year=0) == (0, 1, 2)

    def test_year_labels_clock(self, clock):
        assert year_labels(2, clock=clock) == (2025, 2026)

    def test_year_labels_empty(self):
        assert year_labels(0, start_year=2030) == ()


class TestDeflate:
    def test_first_point_unchanged(self):
        out = deflate([100.0, 102.0, 104.04], 2.0)
        assert out[0] == 100.0
        assert out[1] == pytest.approx(100.0)
        assert out[2] == pytest.approx(100.0)

    def test_zero_inflation_is_identity(self):
        assert deflate([1.0, 2.0, 3.0], 0.0) == (1.0, 2.0, 3.0)

    def test_single_point(self):
        assert deflate([5.0], 3.0) == (5.0,)


class TestFormatting:
    def test_format_currency(self):
        assert format_currency(12_345.6) == "12,346 €"
        assert format_currency(1.5, decimals=2, symbol="$") == "1.50 $"

    def test_format_missing(self):
        assert format_currency(None) == "N/A"
        assert format_currency(math.inf) == "N/A"
        assert format_currency(math.nan) == "N/A"
