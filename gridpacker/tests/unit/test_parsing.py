"""
Unit tests for boundary parsing helpers

Tests parse_grid_int / parse_size / parse_position, which turn untyped
values from gestures and input tables into grid integers.
"""
import math

import pytest

from gridpacker.utils import parse_grid_int, parse_position, parse_size


class TestParseGridInt:
    """Tests for parse_grid_int"""

    @pytest.mark.parametrize("value, expected", [
        (3, 3),
        (-2, -2),
        (4.0, 4),
        (2.7, 2),
        ("5", 5),
        (" 6 ", 6),
        ("2cols", 2),
        ("-1", -1),
        ("+3", 3),
    ])
    def test_numeric(self, value, expected):
        assert parse_grid_int(value) == expected

    @pytest.mark.parametrize("value", [None, True, False, "", "abc", "x3", "-", math.nan, math.inf])
    def test_not_numeric(self, value):
        """Values without a leading integer are not numbers"""
        assert parse_grid_int(value) is None


class TestParseSize:
    """Tests for parse_size"""

    def test_valid_size(self):
        assert parse_size("3", default=2) == 3

    def test_zero_falls_back(self):
        """Zero is treated like a missing size"""
        assert parse_size(0, default=2) == 2

    def test_negative_falls_back(self):
        assert parse_size(-4, default=1) == 1

    def test_nan_falls_back(self):
        assert parse_size(math.nan, default=2) == 2
        assert parse_size("wide", default=2) == 2

    def test_none_falls_back(self):
        assert parse_size(None, default=3) == 3


class TestParsePosition:
    """Tests for parse_position"""

    def test_none_is_unpositioned(self):
        assert parse_position(None) is None

    def test_negative_kept(self):
        """Negative positions are left for the engine to clamp"""
        assert parse_position("-2") == -2

    def test_float_from_table(self):
        """Integral floats come from pandas columns containing NaN"""
        assert parse_position(3.0) == 3
        assert parse_position(math.nan) is None
