"""
Missing-value detection and interpolation values.

A cell is missing when it is None, NaN, or one of the configured
tokens (``""``, ``"na"``, ``"n/a"`` by default). Token matching is
case-sensitive unless configured otherwise.
"""

import math
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..utils.config import Config, get_config
from ..utils.logging import get_logger

logger = get_logger(__name__)

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]

MEASURES = {
    'average': np.mean,
    'mean': np.mean,
    'sum': np.sum,
    'maximum': np.max,
    'max': np.max,
    'minimum': np.min,
    'min': np.min,
}


def is_missing(value: Any,
               tokens: Sequence[str] = ("", "na", "n/a"),
               case_sensitive: bool = True) -> bool:
    """Return True if ``value`` belongs to the missing-value category."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        if case_sensitive:
            return value in tokens
        return value.lower() in {t.lower() for t in tokens}
    return False


class MissingValueImputer:
    """
    Computes fill values for a field and substitutes them into
    missing cells.
    """

    def __init__(self,
                 tokens: Optional[Sequence[str]] = None,
                 case_sensitive: Optional[bool] = None,
                 config: Optional[Config] = None):
        """
        Initialize imputer.

        Parameters:
        -----------
        tokens : sequence of str, optional
            Strings treated as missing (config ``missing.tokens``)
        case_sensitive : bool, optional
            Exact token matching (config ``missing.case_sensitive``)
        config : Config, optional
            Configuration to read defaults from
        """
        config = config or get_config()
        if tokens is None:
            tokens = config.get('missing.tokens', ["", "na", "n/a"])
        if case_sensitive is None:
            case_sensitive = config.get('missing.case_sensitive', True)
        self.tokens = tuple(tokens)
        self.case_sensitive = bool(case_sensitive)

    def is_missing(self, value: Any) -> bool:
        return is_missing(value, self.tokens, self.case_sensitive)

    def _iter_values(self, records: Records, field: str) -> Iterator[Any]:
        if isinstance(records, pd.DataFrame):
            if field not in records.columns:
                raise KeyError(f"Column '{field}' not found")
            yield from records[field]
            return
        for record in records:
            yield record[field]

    def compute_fill_value(self,
                           records: Records,
                           field: str,
                           measure: str = 'average') -> int:
        """
        Compute the floored aggregate of the present values of a field.

        Parameters:
        -----------
        records : pd.DataFrame or iterable of mappings
            Record sequence, consumed once
        field : str
            Field to aggregate
        measure : str
            One of average, sum, maximum, minimum

        Returns:
        --------
        int
            Floor of the aggregate
        """
        key = measure.lower()
        if key not in MEASURES:
            raise ValueError(
                f"Unknown measure '{measure}'. Choose from average, sum, maximum, minimum"
            )

        values = []
        skipped = 0
        for value in self._iter_values(records, field):
            if self.is_missing(value):
                skipped += 1
                continue
            try:
                number = float(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Non-numeric value {value!r} in field '{field}'") from exc
            if not math.isfinite(number):
                raise ValueError(f"Non-finite value {value!r} in field '{field}'")
            values.append(number)

        if not values:
            raise ValueError(f"No non-missing values in field '{field}'")

        aggregate = float(MEASURES[key](values))
        if not math.isfinite(aggregate):
            raise ValueError(f"{key} of field '{field}' overflows")
        result = math.floor(aggregate)
        logger.debug("%s of %d values in '%s' (%d missing) -> %d",
                     key, len(values), field, skipped, result)
        return int(result)

    def fill_missing(self, df: pd.DataFrame, field: str, value: Any) -> pd.DataFrame:
        """
        Replace missing cells of ``field`` with ``str(value)``.

        Returns:
        --------
        pd.DataFrame
            Copy of ``df`` with the field filled
        """
        if field not in df.columns:
            raise KeyError(f"Column '{field}' not found")
        result = df.copy()
        mask = result[field].map(self.is_missing).astype(bool)
        result.loc[mask, field] = str(value)
        logger.debug("Filled %d missing cells in '%s' with %s", int(mask.sum()), field, value)
        return result

    def interpolate(self, df: pd.DataFrame, field: str, measure: str = 'average') -> pd.DataFrame:
        """Compute the fill value for ``field`` and apply it in one step."""
        return self.fill_missing(df, field, self.compute_fill_value(df, field, measure))
