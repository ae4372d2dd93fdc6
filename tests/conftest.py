# tests/conftest.py
from __future__ import annotations

import logging

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from tablewash.utils.config import set_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test in an empty directory so no stray config file is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TABLEWASH_LOG_LEVEL", raising=False)
    set_config(None)
    yield
    set_config(None)
    plt.close("all")
    logger = logging.getLogger("tablewash")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture
def people_df():
    """String record sequence as DataLoader would produce it."""
    return pd.DataFrame({
        " Height [cm] ": [" 170 ", "182", " 165", "na"],
        "Eye Color": ["blue ", " brown", "brown", "green"],
        "Weight": ["70", "", "55", "80"],
    })


@pytest.fixture
def people_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text(
        " Height [cm] ,Eye Color,Weight,Shoe Size\n"
        "170,blue,70,10-11\n"
        "182,brown,,11–12\n"
        "165,brown,55,na\n",
        encoding="utf-8",
    )
    return path
