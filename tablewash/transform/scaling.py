"""
Column scaling.

Numbers embedded in free text (``"12 units"``, ``"1.5-3"``) are scaled
in place while the surrounding text is kept exactly as it was.
"""

import math
import re
from numbers import Number

import pandas as pd

from ..utils.logging import get_logger

logger = get_logger(__name__)

NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")


def _scaled(number, multiplier: float) -> int:
    """Round ``number * multiplier`` to an int, rejecting overflow."""
    try:
        product = float(number) * multiplier
    except OverflowError as exc:
        raise ValueError(f"Cannot scale {number!r}: value out of range") from exc
    if not math.isfinite(product):
        raise ValueError(f"Cannot scale {number!r} by {multiplier!r}: result is not finite")
    return int(round(product))


def scale_numbers(text: str, multiplier: float) -> str:
    """
    Multiply every number in ``text`` and round each result to an integer.

    >>> scale_numbers("1.5-3", 10)
    '15-30'
    """
    return NUMBER_PATTERN.sub(lambda match: str(_scaled(match.group(), multiplier)), text)


def _scale_cell(value, multiplier: float):
    if isinstance(value, str):
        return scale_numbers(value, multiplier)
    if isinstance(value, Number) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            return value
        return _scaled(value, multiplier)
    return value


def scale_column(df: pd.DataFrame, column: str, multiplier: float) -> pd.DataFrame:
    """
    Scale the numbers held in one column.

    Parameters:
    -----------
    df : pd.DataFrame
        Input record sequence
    column : str
        Column to scale
    multiplier : float
        Factor applied to every number

    Returns:
    --------
    pd.DataFrame
        Copy of ``df`` with the column rewritten
    """
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found")
    result = df.copy()
    result[column] = result[column].map(lambda v: _scale_cell(v, multiplier))
    logger.debug("Scaled column '%s' by %s over %d rows", column, multiplier, len(result))
    return result
