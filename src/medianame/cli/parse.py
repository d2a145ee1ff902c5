"""CLI parse command for medianame."""

import logging
import sys

import click

from medianame.cli.exit_codes import ExitCode
from medianame.cli.output import (
    error_exit,
    format_media_info_human,
    format_media_info_json,
)
from medianame.models import MediaInfo
from medianame.parser import FilenameParser

logger = logging.getLogger(__name__)


@click.command("parse")
@click.argument("inputs", nargs=-1)
@click.option(
    "--path",
    "as_path",
    is_flag=True,
    help="Treat inputs as paths, one fragment per path component.",
)
@click.option(
    "--stdin",
    "from_stdin",
    is_flag=True,
    help="Read inputs from stdin, one per line.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def parse_command(
    ctx: click.Context,
    inputs: tuple[str, ...],
    as_path: bool,
    from_stdin: bool,
    output_format: str,
) -> None:
    """Parse media filenames and print the extracted metadata.

    INPUTS are filenames (or paths with --path). Nothing is read from disk.
    """
    json_output = output_format == "json"
    sources = list(inputs)
    if from_stdin:
        sources.extend(line.rstrip("\r\n") for line in sys.stdin if line.strip())

    if not sources:
        error_exit("No inputs given", ExitCode.INPUT_ERROR, json_output)

    parser: FilenameParser = ctx.obj["parser"]
    results: list[tuple[str, MediaInfo]] = []
    for source in sources:
        info = parser.parse_path(source) if as_path else parser.parse_filename(source)
        results.append((source, info))
    logger.info("Parsed %d input(s)", len(results))

    if json_output:
        click.echo(format_media_info_json(results))
    else:
        click.echo(
            "\n\n".join(format_media_info_human(src, info) for src, info in results)
        )
