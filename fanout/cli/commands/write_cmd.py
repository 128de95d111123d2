"""``fanout write VALUE...`` — route values to one or more destinations.

Values given on the command line are strings; ``Output`` echoes them back
to stdout one per line after every other destination has been serviced.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from fanout.models.request import InvocationRequest, PathBindings
from fanout.routing.dispatcher import OutputDispatcher

console = Console()
err_console = Console(stderr=True)


def write_cmd(
    values: list[str] = typer.Argument(..., help="Values to route."),
    to: list[str] = typer.Option(
        ["Output"],
        "--to",
        "-t",
        help="Destination name, prefix, or letter codes (repeatable), e.g. -t hol.",
    ),
    color: list[str] = typer.Option(
        ["default"],
        "--color",
        "-c",
        help="Host color per value (repeatable; cycles).",
    ),
    severity: Optional[str] = typer.Option(
        None, "--severity", "-s", help="Attention code: I, W, C, E or F."
    ),
    join: Optional[str] = typer.Option(
        None, "--join", "-j", help="Join multi-line values with this string."
    ),
    separator: Optional[str] = typer.Option(
        None, "--separator", help="Line written after each value."
    ),
    no_newline: bool = typer.Option(
        False, "--no-newline", "-n", help="Print host segments without line breaks."
    ),
    append_path: Optional[str] = typer.Option(None, "--append-path", help="Append target."),
    log_path: Optional[str] = typer.Option(None, "--log-path", help="Chained log target."),
    replace_path: Optional[str] = typer.Option(None, "--replace-path", help="Replace target."),
    xml_path: Optional[str] = typer.Option(None, "--xml-path", help="XML object file target."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write the XML file."),
    show_diagnostics: bool = typer.Option(
        False, "--diagnostics", "-D", help="Print diagnostics to stderr."
    ),
) -> None:
    """Route VALUES to the requested destinations."""
    request = InvocationRequest(
        values=list(values),
        destinations=list(to),
        colors=list(color),
        severity=severity,
        join=join,
        separator=separator,
        no_newline=no_newline,
        paths=PathBindings(
            append_path=append_path,
            log_path=log_path,
            replace_path=replace_path,
            xml_path=xml_path,
        ),
        dry_run=dry_run,
    )

    result = OutputDispatcher(console=console).dispatch(request)

    for value in result.output:
        typer.echo(value)

    if show_diagnostics:
        for note in result.diagnostics:
            err_console.print(f"[dim]diagnostic:[/dim] {note}", markup=True, highlight=False)

    for destination, error in result.failed.items():
        err_console.print(f"[bold red]{destination.value} failed:[/bold red] {error}")
    if result.failed:
        raise typer.Exit(code=1)
