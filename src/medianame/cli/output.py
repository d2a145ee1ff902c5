"""Unified CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any, NoReturn

import click

if TYPE_CHECKING:
    from medianame.models import MediaInfo
    from medianame.patterns import PatternTable

    from .exit_codes import ExitCode

# Display order for human output; title first, numbers next to their labels.
_HUMAN_FIELDS = (
    "title",
    "year",
    "season",
    "episode",
    "group",
    "resolution",
    "source",
    "codec",
    "audio",
    "extension",
    "checksum",
    "scene",
    "subs",
    "region",
)


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.

    Note:
        This function never returns; it always calls sys.exit().
    """
    from .exit_codes import ExitCode

    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code_name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


def format_media_info_human(source: str, info: MediaInfo) -> str:
    """Format one parse result as an indented block."""
    data = info.as_dict()
    lines = [source]
    for name in _HUMAN_FIELDS:
        if name not in data:
            continue
        value = data[name]
        # repr keeps an empty title visible
        shown = repr(value) if name == "title" else value
        lines.append(f"  {name + ':':<12}{shown}")
    for name, value in data.get("extras", {}).items():
        lines.append(f"  {name + ':':<12}{value}")
    return "\n".join(lines)


def format_media_info_json(results: list[tuple[str, MediaInfo]]) -> str:
    """Format parse results as a JSON list of ``{input, info}`` objects."""
    payload: list[dict[str, Any]] = [
        {"input": source, "info": info.as_dict()} for source, info in results
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def format_pattern_table_human(table: PatternTable) -> str:
    """Format a pattern table as one numbered line per pattern."""
    lines = []
    for position, entry in enumerate(table, start=1):
        flags = " (ignore case)" if entry.ignore_case else ""
        lines.append(f"{position:>2}. {entry.name}{flags}: {entry.pattern}")
    return "\n".join(lines)


def format_pattern_table_json(table: PatternTable) -> str:
    return json.dumps(
        [
            {
                "name": entry.name,
                "pattern": entry.pattern,
                "ignore_case": entry.ignore_case,
            }
            for entry in table
        ],
        indent=2,
    )
