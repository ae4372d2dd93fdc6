"""
tablewash

Small helpers for cleaning, transforming and plotting tabular data
imported from CSV files.

Modules:
    cleaning: Whitespace trimming, header normalization, missing values
    transform: Column scaling, range-to-mean reduction, grouped counts
    utils: CSV I/O, configuration, logging and plotting
"""

__version__ = "0.1.0"

# Import main classes for convenience
from .cleaning import DataCleaner, MissingValueImputer, clean_header
from .transform import group_counts, range_to_mean, scale_column
from .utils import Config, DataLoader, Plotter

__all__ = [
    "DataCleaner",
    "MissingValueImputer",
    "clean_header",
    "group_counts",
    "range_to_mean",
    "scale_column",
    "Config",
    "DataLoader",
    "Plotter"
]
