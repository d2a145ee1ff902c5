"""Configuration management for medianame.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MEDIANAME_*)
3. Config file (~/.medianame/config.toml)
4. Default values (lowest priority)
"""

from medianame.config.env import EnvReader
from medianame.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from medianame.config.models import LoggingConfig, MedianameConfig, PatternsConfig

__all__ = [
    # Models
    "LoggingConfig",
    "MedianameConfig",
    "PatternsConfig",
    # Loader
    "ConfigError",
    "EnvReader",
    "clear_config_cache",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
]
