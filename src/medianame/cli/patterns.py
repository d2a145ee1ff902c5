"""CLI patterns command for medianame."""

import click

from medianame.cli.output import format_pattern_table_human, format_pattern_table_json
from medianame.parser import FilenameParser
from medianame.table_loader import dump_pattern_table


@click.command("patterns")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json", "yaml"]),
    default="human",
    help="Output format (default: human). yaml can be loaded with --patterns.",
)
@click.pass_context
def patterns_command(ctx: click.Context, output_format: str) -> None:
    """Show the active pattern table in cascade order."""
    parser: FilenameParser = ctx.obj["parser"]
    if output_format == "json":
        click.echo(format_pattern_table_json(parser.table))
    elif output_format == "yaml":
        click.echo(dump_pattern_table(parser.table), nl=False)
    else:
        click.echo(format_pattern_table_human(parser.table))
