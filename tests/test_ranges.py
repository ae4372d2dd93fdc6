"""Unit tests for range-to-mean reduction."""

import pandas as pd
import pytest

from tablewash.transform.ranges import RANGE_SEPARATORS, range_column_to_mean, range_to_mean


def test_ascii_hyphen():
    assert range_to_mean("10-20") == 15.0


@pytest.mark.parametrize("dash", list(RANGE_SEPARATORS))
def test_every_separator_is_accepted(dash):
    assert range_to_mean(f"10{dash}20") == 15.0


def test_rounds_to_requested_digits():
    assert range_to_mean("1-2.337") == 1.67
    assert range_to_mean("1-2.337", digits=1) == 1.7
    assert range_to_mean("1-2.337", digits=4) == 1.6685


def test_whitespace_around_numbers_is_ignored():
    assert range_to_mean(" 4 - 8 ") == 6.0


@pytest.mark.parametrize("text", ["15", "", "a-b", "10-", "10-20-30", "-5-10"])
def test_malformed_ranges_raise(text):
    with pytest.raises(ValueError):
        range_to_mean(text)


def test_range_column_keeps_missing_cells():
    df = pd.DataFrame({"shoe": ["10-11", "na", "11–12", ""]})
    result = range_column_to_mean(df, "shoe")
    assert list(result["shoe"]) == [10.5, "na", 11.5, ""]


def test_range_column_propagates_parse_failures():
    df = pd.DataFrame({"shoe": ["10-11", "large"]})
    with pytest.raises(ValueError):
        range_column_to_mean(df, "shoe")
