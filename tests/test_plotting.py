"""Unit tests for Plotter (Agg backend, no windows)."""

import pandas as pd
import pytest
from matplotlib.figure import Figure
from PIL import Image

from tablewash.utils.config import Config
from tablewash.utils.plotting import Plotter


@pytest.fixture
def plotter():
    return Plotter(figsize=(4, 3))


@pytest.fixture
def measurements():
    return pd.DataFrame({
        "x": ["1", "2", "3", "4", "na"],
        "y": ["3", "5", "7", "9", "11"],
        "eye": ["blue", "brown", "brown", "green", "brown"],
        "z": ["10", "", "30", "40", "50"],
    })


def test_plot_raw_data_returns_figure(plotter, measurements):
    fig = plotter.plot_raw_data(measurements, "x", "y", title="Scatter")
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_title() == "Scatter"
    assert len(ax.collections[0].get_offsets()) == 4
    assert plotter.regression_ is None


def test_plot_raw_data_regression(plotter, measurements):
    plotter.plot_raw_data(measurements, "x", "y", regression=True)
    slope, intercept = plotter.regression_
    assert slope == pytest.approx(2.0)
    assert intercept == pytest.approx(1.0)


def test_plot_raw_data_non_numeric_raises(plotter, measurements):
    with pytest.raises(ValueError):
        plotter.plot_raw_data(measurements, "x", "eye")


def test_plot_raw_data_unknown_column_raises(plotter, measurements):
    with pytest.raises(KeyError):
        plotter.plot_raw_data(measurements, "x", "nope")


@pytest.mark.parametrize("kind", ["bar", "column", "pie"])
def test_plot_grouped_data_kinds(plotter, measurements, kind):
    fig = plotter.plot_grouped_data(measurements, "eye", top_n=2, kind=kind)
    ax = fig.axes[0]
    if kind == "pie":
        assert len(ax.patches) == 2
    else:
        heights = sorted((p.get_width() if kind == "bar" else p.get_height()) for p in ax.patches)
        assert heights == [1, 3]


def test_plot_grouped_data_unknown_kind_raises(plotter, measurements):
    with pytest.raises(ValueError):
        plotter.plot_grouped_data(measurements, "eye", kind="donut")


def test_numeric_fields(plotter, measurements):
    assert plotter.numeric_fields(measurements) == ["x", "y", "z"]


def test_plot_boxplot_data(plotter, measurements):
    fig = plotter.plot_boxplot_data(measurements, title="Boxes")
    fig.canvas.draw()
    ax = fig.axes[0]
    assert ax.get_title() == "Boxes"
    assert [t.get_text() for t in ax.get_xticklabels()] == ["x", "y", "z"]


def test_plot_boxplot_without_numeric_fields_raises(plotter):
    with pytest.raises(ValueError):
        plotter.plot_boxplot_data(pd.DataFrame({"eye": ["blue", "brown"]}))


@pytest.mark.parametrize("suffix, pil_format", [
    ("png", "PNG"),
    ("jpg", "JPEG"),
    ("bmp", "BMP"),
    ("tiff", "TIFF"),
])
def test_save_figure_formats(plotter, measurements, tmp_path, suffix, pil_format):
    fig = plotter.plot_raw_data(measurements, "x", "y")
    path = plotter.save_figure(fig, tmp_path / f"chart.{suffix}")
    with Image.open(path) as image:
        assert image.format == pil_format


def test_save_figure_explicit_format(plotter, measurements, tmp_path):
    fig = plotter.plot_raw_data(measurements, "x", "y")
    path = plotter.save_figure(fig, tmp_path / "chart.out", fmt="BMP")
    with Image.open(path) as image:
        assert image.format == "BMP"


def test_save_figure_unsupported_format(plotter, measurements, tmp_path):
    fig = plotter.plot_raw_data(measurements, "x", "y")
    with pytest.raises(ValueError):
        plotter.save_figure(fig, tmp_path / "chart.svg")


def test_plot_grouped_data_zero_top_n_raises(plotter):
    df = pd.DataFrame({"e": [f"c{i}" for i in range(12)]})
    with pytest.raises(ValueError, match="top_n"):
        plotter.plot_grouped_data(df, "e", top_n=0)


def test_plot_grouped_data_uses_config_top_n_when_omitted(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("plotting:\n  top_n: 3\n", encoding="utf-8")
    plotter = Plotter(figsize=(4, 3), config=Config(str(path)))
    df = pd.DataFrame({"e": [f"c{i}" for i in range(12)]})
    fig = plotter.plot_grouped_data(df, "e")
    assert len(fig.axes[0].patches) == 3
