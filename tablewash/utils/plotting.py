"""
Plotting and visualization utilities.

This module renders record sequences as scatter, grouped-count and
box plots. Counting and filtering happen in tablewash itself; quartiles,
whiskers and outliers are left to seaborn/matplotlib.
"""

import io
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
import numpy as np
import pandas as pd
import seaborn as sns
from PIL import Image
from sklearn.linear_model import LinearRegression

from ..cleaning.missing import MissingValueImputer
from ..transform.grouping import group_counts
from .config import Config, get_config
from .logging import get_logger

logger = get_logger(__name__)

SAVE_FORMATS = {
    'jpeg': 'jpeg',
    'jpg': 'jpeg',
    'png': 'png',
    'bmp': 'bmp',
    'tiff': 'tiff',
    'tif': 'tiff',
}

CHART_KINDS = ('bar', 'column', 'pie')


class Plotter:
    """
    Plotting utilities for record sequences.

    Provides the scatter, grouped-count and box plots along with
    saving and showing of the resulting figures.
    """

    def __init__(self,
                 figsize: Optional[Tuple[float, float]] = None,
                 palette: Optional[str] = None,
                 style: Optional[str] = None,
                 config: Optional[Config] = None):
        """
        Initialize plotter.

        Parameters:
        -----------
        figsize : tuple, optional
            Default figure size (config ``plotting.figsize``)
        palette : str, optional
            Seaborn palette name (config ``plotting.palette``)
        style : str, optional
            Seaborn style (config ``plotting.style``)
        config : Config, optional
            Configuration to read defaults from
        """
        self.config = config or get_config()
        self.figsize = tuple(figsize or self.config.get('plotting.figsize', (10, 6)))
        self.palette = palette or self.config.get('plotting.palette', 'deep')
        self.style = style or self.config.get('plotting.style', 'whitegrid')
        self.top_n = self.config.get('plotting.top_n', 10)
        self.dpi = self.config.get('plotting.dpi', 100)
        self.imputer = MissingValueImputer(config=self.config)
        self.regression_: Optional[Tuple[float, float]] = None
        sns.set_theme(style=self.style, palette=self.palette)

    def _numeric(self, series: pd.Series) -> pd.Series:
        """Blank out missing cells and parse the rest as floats."""
        present = series.mask(series.map(self.imputer.is_missing).astype(bool))
        try:
            return pd.to_numeric(present, errors='raise').astype(float)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Column '{series.name}' holds non-numeric values") from exc

    def _require(self, df: pd.DataFrame, *columns: str):
        for column in columns:
            if column not in df.columns:
                raise KeyError(f"Column '{column}' not found")

    def plot_raw_data(self,
                      df: pd.DataFrame,
                      x: str,
                      y: str,
                      title: str = "Raw Data",
                      regression: bool = False,
                      color: Optional[str] = None) -> Figure:
        """
        Scatter plot of two numeric fields.

        Parameters:
        -----------
        df : pd.DataFrame
            Record sequence
        x, y : str
            Fields for the horizontal and vertical axes
        title : str
            Plot title
        regression : bool
            Overlay a least-squares regression line
        color : str, optional
            Marker color

        Returns:
        --------
        Figure
            Figure object
        """
        self._require(df, x, y)
        points = pd.DataFrame({x: self._numeric(df[x]), y: self._numeric(df[y])}).dropna()

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.scatter(points[x], points[y], color=color, alpha=0.7, label=y)

        self.regression_ = None
        if regression and len(points) >= 2:
            model = LinearRegression()
            model.fit(points[[x]].to_numpy(), points[y].to_numpy())
            slope, intercept = float(model.coef_[0]), float(model.intercept_)
            self.regression_ = (slope, intercept)

            xs = np.linspace(points[x].min(), points[x].max(), 100)
            ax.plot(xs, slope * xs + intercept, color='red', linewidth=2,
                    label=f"y = {slope:.3g}x + {intercept:.3g}")
            logger.debug("Regression of '%s' on '%s': slope=%s intercept=%s", y, x, slope, intercept)
        elif regression:
            logger.warning("Regression needs at least two points, got %d", len(points))

        ax.set_title(title, fontsize=16)
        ax.set_xlabel(x, fontsize=12)
        ax.set_ylabel(y, fontsize=12)
        ax.legend()
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
        return fig

    def plot_grouped_data(self,
                          df: pd.DataFrame,
                          field: str,
                          top_n: Optional[int] = None,
                          kind: str = 'column',
                          title: Optional[str] = None,
                          palette: Optional[str] = None) -> Figure:
        """
        Plot the most frequent values of a nominal field.

        Parameters:
        -----------
        df : pd.DataFrame
            Record sequence
        field : str
            Nominal field to count
        top_n : int, optional
            Number of categories shown (config ``plotting.top_n``)
        kind : str
            'bar' (horizontal), 'column' (vertical) or 'pie'
        title : str, optional
            Plot title
        palette : str, optional
            Seaborn palette for the categories

        Returns:
        --------
        Figure
            Figure object
        """
        if kind not in CHART_KINDS:
            raise ValueError(f"Unknown chart kind '{kind}'. Choose from {', '.join(CHART_KINDS)}")

        counts = group_counts(df, field, top_n if top_n is not None else self.top_n,
                              imputer=self.imputer)
        if not counts:
            raise ValueError(f"No values to plot in field '{field}'")
        labels = [str(label) for label, _ in counts]
        values = [count for _, count in counts]
        colors = sns.color_palette(palette or self.palette, len(labels))

        fig, ax = plt.subplots(figsize=self.figsize)
        if kind == 'pie':
            ax.pie(values, labels=labels, colors=colors, autopct='%1.1f%%', startangle=90)
            ax.axis('equal')
        elif kind == 'bar':
            # Largest category on top
            ax.barh(labels[::-1], values[::-1], color=colors[::-1])
            ax.set_xlabel('Count', fontsize=12)
            ax.set_ylabel(field, fontsize=12)
        else:
            ax.bar(labels, values, color=colors)
            ax.set_xlabel(field, fontsize=12)
            ax.set_ylabel('Count', fontsize=12)
            ax.tick_params(axis='x', rotation=45)

        ax.set_title(title or f"{field} (top {len(labels)})", fontsize=16)
        fig.tight_layout()
        return fig

    def numeric_fields(self, df: pd.DataFrame) -> List[str]:
        """Columns whose present cells all parse as numbers."""
        fields = []
        for column in df.columns:
            try:
                values = self._numeric(df[column])
            except ValueError:
                continue
            if values.notna().any():
                fields.append(column)
        return fields

    def plot_boxplot_data(self,
                          df: pd.DataFrame,
                          fields: Optional[Sequence[str]] = None,
                          title: str = "Box Plot") -> Figure:
        """
        One box plot per numeric field.

        Parameters:
        -----------
        df : pd.DataFrame
            Record sequence
        fields : sequence of str, optional
            Fields to plot; all numeric fields when omitted
        title : str
            Plot title

        Returns:
        --------
        Figure
            Figure object
        """
        if fields is None:
            fields = self.numeric_fields(df)
        else:
            self._require(df, *fields)
        if not fields:
            raise ValueError("No numeric fields to plot")

        long = pd.concat(
            [pd.DataFrame({'field': field, 'value': self._numeric(df[field])}) for field in fields],
            ignore_index=True,
        ).dropna()

        fig, ax = plt.subplots(figsize=self.figsize)
        sns.boxplot(data=long, x='field', y='value', hue='field', palette=self.palette,
                    legend=False, ax=ax)
        ax.set_title(title, fontsize=16)
        ax.set_xlabel('')
        ax.set_ylabel('Value', fontsize=12)
        fig.tight_layout()
        return fig

    def save_figure(self,
                    fig: Figure,
                    path: Union[str, os.PathLike],
                    fmt: Optional[str] = None) -> Path:
        """
        Save a figure as JPEG, PNG, BMP or TIFF.

        Parameters:
        -----------
        fig : Figure
            Figure to save
        path : str or PathLike
            Output file
        fmt : str, optional
            Image format; taken from the path suffix when omitted

        Returns:
        --------
        Path
            Path written
        """
        path = Path(path)
        key = (fmt or path.suffix.lstrip('.')).lower()
        if key not in SAVE_FORMATS:
            raise ValueError(
                f"Unsupported image format '{key}'. Choose from JPEG, PNG, BMP, TIFF"
            )
        image_format = SAVE_FORMATS[key]
        path.parent.mkdir(parents=True, exist_ok=True)

        if image_format == 'bmp':
            # matplotlib has no BMP writer
            buffer = io.BytesIO()
            fig.savefig(buffer, format='png', dpi=self.dpi)
            buffer.seek(0)
            with Image.open(buffer) as image:
                image.convert('RGB').save(path, format='BMP')
        else:
            fig.savefig(path, format=image_format, dpi=self.dpi)

        logger.info("Saved figure to %s", path)
        return path

    def show(self, fig: Optional[Figure] = None):
        """Display figures in a blocking window."""
        if fig is not None:
            plt.figure(fig.number)
        plt.show()

    def close(self, fig: Figure):
        plt.close(fig)
