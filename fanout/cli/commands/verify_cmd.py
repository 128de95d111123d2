"""``fanout verify LOGFILE`` — check the checksum chain of a log file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from fanout.config import config
from fanout.core.chained_log import LogIntegrityError, verify_log_file

console = Console()


def verify_cmd(
    log_file: Path = typer.Argument(..., help="The chained log file to verify."),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help="Identity the log was started under."
    ),
    name: Optional[str] = typer.Option(
        None, "--name", help="Original file name, if the log was renamed."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat restarts of the chain as failures."
    ),
) -> None:
    """Verify that every line of LOG_FILE links to its predecessor."""
    if not log_file.exists():
        console.print(f"[bold red]Log not found:[/bold red] {log_file}")
        raise typer.Exit(code=1)

    try:
        report = verify_log_file(
            log_file,
            user or config.acting_user(),
            name=name,
            allow_restarts=not strict,
            encoding=config.encoding,
        )
    except LogIntegrityError as exc:
        console.print(f"[bold red]Chain BROKEN:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(
        f"[green]Chain for {log_file} is valid.[/green] "
        f"{report.line_count} line(s), {report.continuations} continuation(s), "
        f"{report.restarts} restart(s)."
    )
