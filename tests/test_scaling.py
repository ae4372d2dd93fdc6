"""Unit tests for column scaling."""

import math

import pandas as pd
import pytest

from tablewash.transform.scaling import scale_column, scale_numbers


def test_scale_numbers_keeps_surrounding_text():
    assert scale_numbers("12 units", 10) == "120 units"


def test_scale_numbers_without_digits_is_unchanged():
    assert scale_numbers("unknown", 10) == "unknown"
    assert scale_numbers("", 10) == ""


def test_scale_numbers_scales_each_number_independently():
    """The dash is a separator, not a sign."""
    assert scale_numbers("1.5-3", 10) == "15-30"


def test_scale_numbers_rounds_to_integer():
    assert scale_numbers("0.26 kg", 10) == "3 kg"
    assert scale_numbers("about 1.04", 2) == "about 2"


def test_scale_column_only_touches_the_column():
    df = pd.DataFrame({"size": ["12 units", "n/a", "1.5-3"], "name": ["a 1", "b 2", "c 3"]})
    result = scale_column(df, "size", 10)

    assert list(result["size"]) == ["120 units", "n/a", "15-30"]
    assert list(result["name"]) == ["a 1", "b 2", "c 3"]
    # input left alone
    assert list(df["size"]) == ["12 units", "n/a", "1.5-3"]


def test_scale_column_handles_numeric_and_missing_cells():
    df = pd.DataFrame({"v": [1.26, None, 4]}, dtype=object)
    result = scale_column(df, "v", 10)
    assert result["v"].iloc[0] == 13
    assert result["v"].iloc[1] is None or math.isnan(result["v"].iloc[1])
    assert result["v"].iloc[2] == 40


def test_scale_column_unknown_column_raises():
    df = pd.DataFrame({"a": ["1"]})
    with pytest.raises(KeyError):
        scale_column(df, "b", 2)


def test_scale_numbers_too_large_for_float_raises():
    with pytest.raises(ValueError, match="not finite"):
        scale_numbers("1" * 400 + " units", 10)


def test_scale_numbers_infinite_multiplier_raises():
    with pytest.raises(ValueError):
        scale_numbers("12 units", float("inf"))


def test_scale_column_huge_int_cell_raises():
    df = pd.DataFrame({"v": [10 ** 400]}, dtype=object)
    with pytest.raises(ValueError, match="out of range"):
        scale_column(df, "v", 2)
