"""
Utility functions.

This module provides:
- CSV I/O
- Configuration management
- Logging helpers
- Plotting and visualization
"""

from .config import Config, get_config, set_config
from .io import DataLoader
from .logging import configure_logging, get_logger
from .plotting import Plotter

__all__ = [
    "Config",
    "get_config",
    "set_config",
    "DataLoader",
    "configure_logging",
    "get_logger",
    "Plotter"
]
