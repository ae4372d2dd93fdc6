"""
Header and whitespace cleaning.

This module provides the first pass usually applied to a freshly
imported record sequence: trimming cell whitespace and turning
free-text headers such as ``" Height [cm] "`` into plain identifiers.
"""

import re
from collections import Counter
from typing import Dict

import pandas as pd

from ..utils.logging import get_logger

logger = get_logger(__name__)

_UNIT_ANNOTATION = re.compile(r"\s*\[[^\]]*\]")
_WHITESPACE_RUN = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w]")


def clean_header(name: str) -> str:
    """
    Normalize a single column name.

    Surrounding whitespace is trimmed, bracketed unit annotations are
    removed, inner whitespace runs become ``__`` and any other non-word
    character is dropped.

    >>> clean_header(" Height [cm] ")
    'Height'
    >>> clean_header("Eye Color")
    'Eye__Color'

    Raises ValueError when nothing is left, e.g. for ``"[cm]"``.
    """
    cleaned = _UNIT_ANNOTATION.sub("", str(name).strip()).strip()
    cleaned = _WHITESPACE_RUN.sub("__", cleaned)
    cleaned = _NON_WORD.sub("", cleaned)
    if not cleaned:
        raise ValueError(f"Header {name!r} is empty after cleaning")
    return cleaned


def _strip_cell(value):
    return value.strip() if isinstance(value, str) else value


class DataCleaner:
    """
    Cleaning utilities for string record sequences.

    Provides whitespace trimming and header normalization for
    frames loaded with ``DataLoader``.
    """

    def header_mapping(self, df: pd.DataFrame) -> Dict[str, str]:
        """
        Map every column of ``df`` to its cleaned name.

        Raises ValueError when two columns clean to the same name.
        """
        mapping = {column: clean_header(column) for column in df.columns}
        collisions = [name for name, n in Counter(mapping.values()).items() if n > 1]
        if collisions:
            logger.warning("Header normalization collapses columns onto %s", collisions)
            raise ValueError(f"Cleaned headers are not unique: {collisions}")
        return mapping

    def normalize_headers(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Rename all columns with ``clean_header``.

        Parameters:
        -----------
        df : pd.DataFrame
            Input record sequence

        Returns:
        --------
        pd.DataFrame
            Same rows in the same order under cleaned column names
        """
        mapping = self.header_mapping(df)
        renamed = {old: new for old, new in mapping.items() if old != new}
        logger.debug("Renaming %d of %d columns", len(renamed), len(mapping))
        return df.rename(columns=mapping)

    def trim_whitespace(self, df: pd.DataFrame, inplace: bool = False) -> pd.DataFrame:
        """
        Trim leading and trailing whitespace from every string cell.

        Parameters:
        -----------
        df : pd.DataFrame
            Input record sequence
        inplace : bool
            Mutate ``df`` instead of working on a copy

        Returns:
        --------
        pd.DataFrame
            Trimmed frame (``df`` itself when inplace)
        """
        result = df if inplace else df.copy()
        for column in result.columns:
            result[column] = result[column].map(_strip_cell)
        return result

    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Trim whitespace, then normalize headers."""
        return self.normalize_headers(self.trim_whitespace(df))
