"""Pattern table file loading and validation.

This module provides functions to load YAML pattern table files and
validate them using Pydantic models, and to build the active table from
configuration.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from medianame.config.models import PatternsConfig
from medianame.patterns import (
    DEFAULT_PATTERN_TABLE,
    FieldPattern,
    PatternTable,
    PatternTableError,
)

# Current supported schema version
SCHEMA_VERSION = 1


class PatternEntryModel(BaseModel):
    """Pydantic model for one pattern table entry."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    pattern: str = Field(min_length=1)
    ignore_case: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are blank or padded with whitespace."""
        if v != v.strip() or not v.strip():
            raise ValueError(f"Invalid pattern name {v!r}")
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Validate regex syntax and the presence of a capture group."""
        try:
            compiled = re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}") from e
        if compiled.groups < 1:
            raise ValueError("Pattern must define a capture group")
        return v


class PatternTableModel(BaseModel):
    """Pydantic model for a pattern table file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int
    patterns: list[PatternEntryModel] = Field(min_length=1)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: int) -> int:
        if v != SCHEMA_VERSION:
            raise ValueError(
                f"Only schema_version {SCHEMA_VERSION} is supported, got {v}"
            )
        return v

    @model_validator(mode="after")
    def validate_unique_names(self) -> PatternTableModel:
        """Validate that pattern names are unique."""
        seen: set[str] = set()
        for entry in self.patterns:
            if entry.name in seen:
                raise ValueError(f"Duplicate pattern name '{entry.name}'")
            seen.add(entry.name)
        return self


def _format_validation_error(error: Exception) -> str:
    """Format a Pydantic validation error into a user-friendly message."""
    from pydantic import ValidationError

    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", str(error))
            if loc:
                return f"Pattern table validation failed: {loc}: {msg}"
            return f"Pattern table validation failed: {msg}"

    return f"Pattern table validation failed: {error}"


def load_pattern_table_from_dict(data: dict[str, Any]) -> PatternTable:
    """Load and validate a pattern table from a dictionary.

    Args:
        data: Dictionary containing the pattern table.

    Returns:
        Compiled PatternTable, in the order the entries were listed.

    Raises:
        PatternTableError: If the data is invalid.
    """
    try:
        model = PatternTableModel.model_validate(data)
    except Exception as e:
        raise PatternTableError(_format_validation_error(e)) from e

    return PatternTable(
        FieldPattern.compile(entry.name, entry.pattern, ignore_case=entry.ignore_case)
        for entry in model.patterns
    )


def load_pattern_table(path: Path) -> PatternTable:
    """Load and validate a pattern table from a YAML file.

    Args:
        path: Path to the YAML pattern table.

    Returns:
        Compiled PatternTable.

    Raises:
        PatternTableError: If the file is invalid.
        FileNotFoundError: If the file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Pattern table file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PatternTableError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise PatternTableError("Pattern table file is empty")

    if not isinstance(data, dict):
        raise PatternTableError("Pattern table file must be a YAML mapping")

    return load_pattern_table_from_dict(data)


def dump_pattern_table(table: PatternTable) -> str:
    """Serialize a table to YAML in the format load_pattern_table reads."""
    data = {
        "schema_version": SCHEMA_VERSION,
        "patterns": [
            {
                "name": entry.name,
                "pattern": entry.pattern,
                "ignore_case": entry.ignore_case,
            }
            for entry in table
        ],
    }
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def build_pattern_table(config: PatternsConfig) -> PatternTable:
    """Build the active pattern table from configuration.

    Starts from ``config.file`` (or the built-in table), drops disabled
    patterns, then moves ``config.order`` names to the front.

    Raises:
        PatternTableError: If the file is invalid or a name is unknown.
        FileNotFoundError: If ``config.file`` does not exist.
    """
    table = load_pattern_table(config.file) if config.file else DEFAULT_PATTERN_TABLE

    unknown = [name for name in config.disabled if name not in table]
    if unknown:
        raise PatternTableError(
            f"Unknown pattern names: {', '.join(unknown)}", field=unknown[0]
        )
    if config.disabled:
        table = table.without(*config.disabled)
    if config.order:
        table = table.reordered(config.order)
    return table
