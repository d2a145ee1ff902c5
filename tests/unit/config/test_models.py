"""Tests for configuration dataclasses."""

from __future__ import annotations

import pytest

from medianame.config.models import LoggingConfig, MedianameConfig, PatternsConfig


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    def test_defaults(self) -> None:
        """Should default to warning level text output on stderr."""
        config = LoggingConfig()
        assert config.level == "warning"
        assert config.format == "text"
        assert config.file is None
        assert config.include_stderr is False

    def test_level_case_insensitive(self) -> None:
        """Should accept level regardless of case."""
        assert LoggingConfig(level="DEBUG").level == "DEBUG"

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"level": "verbose"}, "level must be one of"),
            ({"format": "xml"}, "format must be one of"),
            ({"max_bytes": 0}, "max_bytes must be positive"),
            ({"backup_count": -1}, "backup_count must be non-negative"),
        ],
    )
    def test_invalid_values(self, kwargs: dict, message: str) -> None:
        """Should reject invalid values in __post_init__."""
        with pytest.raises(ValueError, match=message):
            LoggingConfig(**kwargs)


class TestPatternsConfig:
    """Tests for PatternsConfig validation."""

    def test_lists_become_tuples(self) -> None:
        """Should store order and disabled as tuples."""
        config = PatternsConfig(order=["year", "season"], disabled=["region"])
        assert config.order == ("year", "season")
        assert config.disabled == ("region",)

    def test_string_rejected(self) -> None:
        """Should reject a bare string instead of a list of names."""
        with pytest.raises(ValueError, match="lists of pattern names"):
            PatternsConfig(order="year")  # type: ignore[arg-type]

    def test_overlap_rejected(self) -> None:
        """Should reject a name that is both reordered and disabled."""
        with pytest.raises(ValueError, match="both order and disabled"):
            PatternsConfig(order=("year",), disabled=("year",))


class TestMedianameConfig:
    """Tests for the top-level config."""

    def test_defaults(self) -> None:
        """Should build default sub-configs."""
        config = MedianameConfig()
        assert config.logging == LoggingConfig()
        assert config.patterns == PatternsConfig()
