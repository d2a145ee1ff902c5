"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (MEDIANAME_*)
3. Config file (~/.medianame/config.toml)
4. Default values

Environment variables:
- MEDIANAME_CONFIG_PATH: Path to config file (overrides default location)
- MEDIANAME_DATA_DIR: Path to data directory (overrides ~/.medianame/)
- MEDIANAME_LOG_LEVEL: Log level (debug, info, warning, error)
- MEDIANAME_LOG_FILE: Log file path
- MEDIANAME_LOG_FORMAT: Log format (text, json)
- MEDIANAME_LOG_STDERR: Also log to stderr when a log file is set
- MEDIANAME_LOG_MAX_BYTES, MEDIANAME_LOG_BACKUP_COUNT: Log rotation
- MEDIANAME_PATTERNS_FILE: YAML pattern table replacing the built-in one
- MEDIANAME_PATTERNS_DISABLED: Comma-separated pattern names to drop
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from medianame.config.env import EnvReader
from medianame.config.models import LoggingConfig, MedianameConfig, PatternsConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".medianame"
CONFIG_FILE_NAME = "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


class ConfigError(Exception):
    """Configuration file could not be read or holds invalid values."""


def get_data_dir() -> Path:
    """Get the medianame data directory.

    Can be overridden by MEDIANAME_DATA_DIR environment variable.
    Supports tilde expansion (e.g., ~/custom/medianame).

    Returns:
        Path to the data directory (~/.medianame/ by default).
    """
    env_path = os.environ.get("MEDIANAME_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_DIR


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by MEDIANAME_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("MEDIANAME_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return get_data_dir() / CONFIG_FILE_NAME


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise ConfigError when the file cannot be read
                or parsed. If False, log a warning and return {}.

    Returns:
        Parsed dictionary. Empty dict if the file doesn't exist.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Could not load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation, so a modified file is
    reloaded on the next call. Thread-safe.

    Args:
        path: Path to config file. If None, uses default location.
        strict: Passed to load_toml_file.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table in the config file")
    return section


def _resolve(path_value: str | Path | None, base_dir: Path) -> Path | None:
    """Resolve a config-file path relative to the config file's directory."""
    if path_value is None:
        return None
    path = Path(path_value).expanduser()
    return path if path.is_absolute() else base_dir / path


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    patterns_file: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MedianameConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MEDIANAME_CONFIG_PATH).
        patterns_file: CLI override for the pattern table file.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        MedianameConfig with merged configuration.

    Raises:
        ConfigError: If a value in the file or environment is invalid, or
            when strict=True and the file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path()
    file_config = load_config_file(path, strict=strict)

    file_logging = _section(file_config, "logging")
    file_patterns = _section(file_config, "patterns")

    try:
        include_stderr = reader.flag("LOG_STDERR")
        if include_stderr is None:
            include_stderr = bool(file_logging.get("include_stderr", False))
        max_bytes = reader.integer("LOG_MAX_BYTES")
        if max_bytes is None:
            max_bytes = file_logging.get("max_bytes", 10_485_760)
        backup_count = reader.integer("LOG_BACKUP_COUNT")
        if backup_count is None:
            backup_count = file_logging.get("backup_count", 5)

        logging_config = LoggingConfig(
            level=reader.string("LOG_LEVEL") or file_logging.get("level", "warning"),
            file=reader.path("LOG_FILE")
            or _resolve(file_logging.get("file"), path.parent),
            format=reader.string("LOG_FORMAT") or file_logging.get("format", "text"),
            include_stderr=include_stderr,
            max_bytes=int(max_bytes),
            backup_count=int(backup_count),
        )
        patterns_config = PatternsConfig(
            file=patterns_file
            or reader.path("PATTERNS_FILE")
            or _resolve(file_patterns.get("file"), path.parent),
            order=file_patterns.get("order", ()),
            disabled=reader.names("PATTERNS_DISABLED")
            or file_patterns.get("disabled", ()),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return MedianameConfig(logging=logging_config, patterns=patterns_config)
