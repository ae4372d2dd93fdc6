"""Grouped-count aggregation for nominal fields."""

from typing import Any, List, Optional, Sequence, Tuple, Union

import pandas as pd

from ..cleaning.missing import MissingValueImputer


def group_counts(data: Union[pd.DataFrame, Sequence[Any]],
                 field: Optional[str] = None,
                 top_n: Optional[int] = None,
                 imputer: Optional[MissingValueImputer] = None) -> List[Tuple[Any, int]]:
    """
    Count the values of a nominal field, most frequent first.

    Ties keep the order in which the values first appear.

    Parameters:
    -----------
    data : pd.DataFrame or sequence
        Record sequence (with ``field``) or the values themselves
    field : str, optional
        Column to count, required when ``data`` is a DataFrame
    top_n : int, optional
        Keep only the first ``top_n`` categories
    imputer : MissingValueImputer, optional
        Decides which values are dropped as missing

    Returns:
    --------
    list of (value, count)
    """
    if top_n is not None and top_n < 1:
        raise ValueError("top_n must be at least 1")

    if isinstance(data, pd.DataFrame):
        if field is None:
            raise ValueError("field is required when data is a DataFrame")
        if field not in data.columns:
            raise KeyError(f"Column '{field}' not found")
        values = data[field]
    else:
        values = pd.Series(list(data), dtype=object)

    imputer = imputer or MissingValueImputer()
    values = values[~values.map(imputer.is_missing).astype(bool)]

    counts = values.groupby(values, sort=False).size()
    counts = counts.sort_values(ascending=False, kind='stable')
    if top_n is not None:
        counts = counts.head(top_n)
    return [(value, int(count)) for value, count in counts.items()]
