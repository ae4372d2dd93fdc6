"""Unit tests for CSV loading and saving."""

import pandas as pd
import pytest

from tablewash.utils.io import DataLoader


def test_load_csv_keeps_strings_and_tokens(people_csv):
    df = DataLoader().load_csv(str(people_csv))
    assert list(df.columns) == [" Height [cm] ", "Eye Color", "Weight", "Shoe Size"]
    assert df[" Height [cm] "].iloc[0] == "170"
    assert df["Weight"].iloc[1] == ""
    assert df["Shoe Size"].iloc[2] == "na"


def test_load_csv_clean_headers_row_count(people_csv):
    df = DataLoader().load_csv(str(people_csv), clean_headers=True)
    data_lines = len(people_csv.read_text(encoding="utf-8").splitlines()) - 1
    assert list(df.columns) == ["Height", "Eye__Color", "Weight", "Shoe__Size"]
    assert len(df) == data_lines == 3
    assert list(df["Eye__Color"]) == ["blue", "brown", "brown"]


def test_load_csv_with_headers_skips_header_line(people_csv):
    headers = ["h", "eye", "w", "shoe"]
    df = DataLoader().load_csv_with_headers(str(people_csv), headers)
    assert list(df.columns) == headers
    assert len(df) == 3
    assert df["h"].iloc[0] == "170"


def test_load_csv_with_duplicate_headers_raises(people_csv):
    with pytest.raises(ValueError):
        DataLoader().load_csv_with_headers(str(people_csv), ["a", "a", "b", "c"])


def test_base_path_and_save_round_trip(tmp_path):
    loader = DataLoader(base_path=str(tmp_path))
    df = pd.DataFrame({"a": ["1", "x"], "b": ["", "na"]})
    loader.save_csv(df, "out/data.csv")

    assert (tmp_path / "out" / "data.csv").exists()
    pd.testing.assert_frame_equal(loader.load_csv("out/data.csv"), df, check_dtype=False)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataLoader(base_path=str(tmp_path)).load_csv("nope.csv")
