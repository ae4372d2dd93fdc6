"""
Transformation module.

This module provides:
- Scaling of numbers embedded in text columns
- Range-to-mean reduction
- Grouped counts for nominal fields
"""

from .scaling import scale_column, scale_numbers
from .ranges import range_to_mean, range_column_to_mean
from .grouping import group_counts

__all__ = [
    "scale_column",
    "scale_numbers",
    "range_to_mean",
    "range_column_to_mean",
    "group_counts"
]
