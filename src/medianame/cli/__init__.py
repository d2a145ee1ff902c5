"""CLI module for medianame."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from medianame.cli.exit_codes import ExitCode
from medianame.cli.output import error_exit
from medianame.config import ConfigError, get_config
from medianame.logging import configure_logging
from medianame.parser import FilenameParser
from medianame.patterns import PatternTableError
from medianame.table_loader import build_pattern_table

logger = logging.getLogger(__name__)


def _logging_overrides(
    log_level: str | None, log_file: Path | None, log_json: bool
) -> dict[str, Any]:
    """Collect the --log-* options that were actually given."""
    overrides: dict[str, Any] = {}
    if log_level is not None:
        overrides["level"] = log_level
    if log_file is not None:
        overrides["file"] = log_file
    if log_json:
        overrides["format"] = "json"
    return overrides


@click.group()
@click.version_option(package_name="medianame")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.medianame/config.toml).",
)
@click.option(
    "--patterns",
    "patterns_file",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML pattern table replacing the built-in one.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    patterns_file: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """medianame - Extract metadata from media filenames."""
    ctx.ensure_object(dict)

    try:
        config = get_config(config_path, patterns_file=patterns_file, strict=True)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    # --log-level is a click.Choice, so the replaced config always validates
    configure_logging(
        replace(config.logging, **_logging_overrides(log_level, log_file, log_json))
    )

    # Preserve a parser passed in by tests
    if "parser" not in ctx.obj:
        try:
            table = build_pattern_table(config.patterns)
        except FileNotFoundError as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)
        except PatternTableError as e:
            error_exit(e.message, ExitCode.PATTERN_TABLE_ERROR)
        logger.debug("Using pattern table: %s", ", ".join(table.names))
        ctx.obj["parser"] = FilenameParser(table)


# Defer import to avoid circular dependency
def _register_commands():
    from medianame.cli.parse import parse_command
    from medianame.cli.patterns import patterns_command

    main.add_command(parse_command)
    main.add_command(patterns_command)


_register_commands()
