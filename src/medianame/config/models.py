"""Configuration models for medianame."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass
class PatternsConfig:
    """Which pattern table the parser uses.

    ``file`` replaces the built-in table with a YAML table. ``order`` moves
    the named patterns to the front of the cascade and ``disabled`` drops
    patterns; both apply after ``file`` is loaded.
    """

    file: Path | None = None
    order: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.order, str) or isinstance(self.disabled, str):
            raise ValueError("order and disabled must be lists of pattern names")
        self.order = tuple(self.order)
        self.disabled = tuple(self.disabled)
        overlap = set(self.order) & set(self.disabled)
        if overlap:
            raise ValueError(
                f"patterns listed in both order and disabled: {sorted(overlap)}"
            )


@dataclass
class MedianameConfig:
    """Top-level configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    patterns: PatternsConfig = field(default_factory=PatternsConfig)
