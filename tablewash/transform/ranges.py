"""
Range-to-mean reduction.

Values such as ``"10-20"`` or ``"10–20"`` (en dash) are reduced to the
mean of their two ends.
"""

import re
from typing import Optional

import pandas as pd

from ..cleaning.missing import MissingValueImputer
from ..utils.config import get_config
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Hyphen-minus plus U+2010 (hyphen) through U+2015 (horizontal bar)
RANGE_SEPARATORS = "-\u2010\u2011\u2012\u2013\u2014\u2015"
_SEPARATOR = re.compile(f"[{re.escape(RANGE_SEPARATORS)}]")


def range_to_mean(text: str, digits: int = 2) -> float:
    """
    Return the mean of a two-number range, rounded to ``digits`` places.

    The string is split on its first separator character. Anything other
    than a number on both sides raises ValueError.

    >>> range_to_mean("10-20")
    15.0
    """
    parts = _SEPARATOR.split(str(text), maxsplit=1)
    if len(parts) != 2:
        raise ValueError(f"Expected a range like '10-20', got {text!r}")

    try:
        low, high = (float(part.strip()) for part in parts)
    except ValueError as exc:
        raise ValueError(f"Malformed range {text!r}") from exc

    return round((low + high) / 2, digits)


def range_column_to_mean(df: pd.DataFrame,
                         column: str,
                         digits: Optional[int] = None,
                         imputer: Optional[MissingValueImputer] = None) -> pd.DataFrame:
    """
    Replace every range in ``column`` with its mean.

    Missing cells are left untouched.

    Parameters:
    -----------
    df : pd.DataFrame
        Input record sequence
    column : str
        Column holding range strings
    digits : int, optional
        Fractional digits (config ``transform.range_digits``)
    imputer : MissingValueImputer, optional
        Decides which cells count as missing

    Returns:
    --------
    pd.DataFrame
        Copy of ``df`` with the column reduced
    """
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found")
    if digits is None:
        digits = get_config().get('transform.range_digits', 2)
    imputer = imputer or MissingValueImputer()

    result = df.copy()
    result[column] = result[column].map(
        lambda v: v if imputer.is_missing(v) else range_to_mean(v, digits)
    )
    logger.debug("Reduced ranges in '%s' to means (%d digits)", column, digits)
    return result
