"""Main Typer application — registers the fanout commands.

Entry point: ``fanout`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from fanout.cli.commands.verify_cmd import verify_cmd
from fanout.cli.commands.write_cmd import write_cmd
from fanout.config import config
from fanout.logs import configure_logging

app = typer.Typer(
    name="fanout",
    help="Fanout: route values to the terminal, files, chained logs, and logging channels.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (defaults to FANOUT_LOG_LEVEL)."
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level or config.log_level)


app.command(name="write", help="Route values to one or more destinations.")(write_cmd)
app.command(name="verify", help="Verify the checksum chain of a log file.")(verify_cmd)


@app.command(name="destinations", help="Show destinations and their capabilities.")
def destinations_cmd() -> None:
    """Print the destination capability table."""
    from rich.console import Console
    from rich.table import Table

    from fanout.models.destinations import CAPABILITIES

    def mark(flag: bool) -> str:
        return "[green]yes[/green]" if flag else "[dim]no[/dim]"

    table = Table(title="Destinations")
    table.add_column("Name", style="cyan")
    table.add_column("Code", justify="center")
    table.add_column("Needs Path", justify="center")
    table.add_column("Trim", justify="center")
    table.add_column("Suppress Empty", justify="center")
    table.add_column("Annotate", justify="center")
    table.add_column("Separator", justify="center")

    for destination, capability in CAPABILITIES.items():
        table.add_row(
            destination.value,
            destination.value[0],
            mark(capability.needs_path),
            mark(capability.trim),
            mark(capability.suppress_empty),
            mark(capability.annotate),
            mark(capability.separator),
        )

    Console().print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
