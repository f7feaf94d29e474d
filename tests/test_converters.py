"""Tests for the null-aware converters used by domain model factories."""
import math

import numpy as np
import pandas as pd
import pytest

from domain.converters import (
    is_null,
    optional_float,
    optional_int,
    optional_str,
    parse_flag,
)
from domain.exceptions import FieldParseError


class TestIsNull:
    @pytest.mark.parametrize("value", [None, float("nan"), pd.NA, pd.NaT, np.nan])
    def test_null_values(self, value):
        assert is_null(value) is True

    @pytest.mark.parametrize("value", [0, 0.0, "", "null", False, [1, 2]])
    def test_present_values(self, value):
        assert is_null(value) is False


class TestOptionalNumbers:
    def test_float_passthrough(self):
        assert optional_float(3.5) == 3.5

    def test_float_none(self):
        assert optional_float(None) is None
        assert optional_float(float("nan")) is None

    def test_float_zero_is_not_null(self):
        assert optional_float(0) == 0.0

    def test_float_integer_truncates(self):
        assert optional_float(150.9, integer=True) == 150.0
        assert optional_float(-2.5, integer=True) == -2.0

    def test_float_from_numpy(self):
        result = optional_float(np.float64(1.25))
        assert result == 1.25
        assert not math.isnan(result)

    def test_int(self):
        assert optional_int(42) == 42
        assert optional_int(42.0) == 42
        assert optional_int(None) is None

    def test_bad_number_raises(self):
        with pytest.raises(ValueError):
            optional_float("not-a-number")


class TestOptionalStr:
    def test_string(self):
        assert optional_str("Sol") == "Sol"

    def test_null(self):
        assert optional_str(None) is None

    def test_literal_null_string_is_kept(self):
        assert optional_str("null") == "null"


class TestParseFlag:
    @pytest.mark.parametrize("value,expected", [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        (1.0, True),
        (np.bool_(True), True),
        (np.int64(0), False),
        ("true", True),
        ("false", False),
        (" TRUE ", True),
        ("False", False),
    ])
    def test_recognised_values(self, value, expected):
        assert parse_flag(value) is expected

    def test_null_is_unknown(self):
        assert parse_flag(None) is None

    @pytest.mark.parametrize("value", ["yes", "", "1", 2, "maybe"])
    def test_unrecognised_values_raise(self, value):
        with pytest.raises(FieldParseError):
            parse_flag(value)
