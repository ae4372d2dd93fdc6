"""
Configuration management module.

This module provides configuration loading and management
utilities for the tablewash cleaning and plotting helpers.
"""

import copy
import os
from typing import Any, Callable, Dict, List, Optional

import yaml


DEFAULTS: Dict[str, Any] = {
    "io": {
        "encoding": "utf-8",
        "delimiter": ",",
    },
    "missing": {
        "tokens": ["", "na", "n/a"],
        "case_sensitive": True,
    },
    "transform": {
        "range_digits": 2,
    },
    "plotting": {
        "figsize": [10, 6],
        "palette": "deep",
        "style": "whitegrid",
        "top_n": 10,
        "dpi": 100,
    },
    "logging": {
        "level": "INFO",
    },
}


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("not a whole number")
        return int(value)
    return int(str(value).strip())


def _as_positive_int(value: Any) -> int:
    number = _as_int(value)
    if number < 1:
        raise ValueError("must be at least 1")
    return number


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ('true', 'yes', 'on', '1'):
        return True
    if text in ('false', 'no', 'off', '0'):
        return False
    raise ValueError("not a boolean")


def _as_figsize(value: Any) -> List[float]:
    if isinstance(value, str):
        value = value.replace('x', ',').split(',')
    width, height = (float(v) for v in value)
    if width <= 0 or height <= 0:
        raise ValueError("figure size must be positive")
    return [width, height]


def _as_tokens(value: Any) -> List[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise TypeError("expected a list of strings")
    return ["" if v is None else str(v) for v in value]


TYPED_KEYS: Dict[str, Callable[[Any], Any]] = {
    "transform.range_digits": _as_int,
    "plotting.top_n": _as_positive_int,
    "plotting.dpi": _as_positive_int,
    "plotting.figsize": _as_figsize,
    "missing.case_sensitive": _as_bool,
    "missing.tokens": _as_tokens,
}


class Config:
    """
    Configuration manager for tablewash.

    Loads configuration from a YAML file with environment variable
    support and merges it over the built-in DEFAULTS.
    """

    SEARCH_PATHS = (
        "tablewash.yaml",
        "tablewash.yml",
        "config.yaml",
        "config.yml",
    )

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Parameters:
        -----------
        config_path : str, optional
            Path to configuration file. When omitted the standard
            locations are searched and DEFAULTS are used if none exists.
        """
        if config_path is not None and not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        self.config_path = config_path or self._find_config_file()
        self.config = self._load_config()

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations."""
        for path in self.SEARCH_PATHS:
            if os.path.exists(path):
                return path
        return None

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and merge over defaults."""
        config = copy.deepcopy(DEFAULTS)
        if self.config_path is None:
            return config

        with open(self.config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

        merged = self._merge(config, self._expand_env(loaded))
        return self._coerce_types(merged)

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge override into base."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = self._merge(base[key], value)
            else:
                base[key] = value
        return base

    def _expand_env(self, node: Any) -> Any:
        """Replace ``${NAME}`` strings with the environment value, when set."""
        if isinstance(node, dict):
            return {k: self._expand_env(v) for k, v in node.items()}
        if isinstance(node, list):
            return [self._expand_env(item) for item in node]
        if isinstance(node, str) and node.startswith("${") and node.endswith("}"):
            return os.getenv(node[2:-1], node)
        return node

    def _coerce_types(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Convert typed keys (often strings after env expansion) or raise ValueError."""
        for key, kind in TYPED_KEYS.items():
            section, name = key.split('.')
            block = config.get(section)
            if not isinstance(block, dict) or name not in block:
                continue
            try:
                block[name] = kind(block[name])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid value for '{key}': {block[name]!r}") from exc
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as ``plotting.top_n``.

        Returns ``default`` when any part of the path is absent.
        """
        value = self.config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value


_default_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide Config, loading it on first use."""
    global _default_config
    if _default_config is None:
        _default_config = Config()
    return _default_config


def set_config(config: Optional[Config]) -> None:
    """Replace the process-wide Config (None resets to lazy loading)."""
    global _default_config
    _default_config = config
