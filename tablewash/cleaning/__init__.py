"""
Cleaning module.

This module provides:
- Whitespace trimming
- Header normalization
- Missing-value detection and interpolation values
"""

from .cleaner import DataCleaner, clean_header
from .missing import MissingValueImputer, is_missing

__all__ = [
    "DataCleaner",
    "clean_header",
    "MissingValueImputer",
    "is_missing"
]
