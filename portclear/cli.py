"""
portclear — free a port by killing whatever process is bound to it.

Examples
  # Kill whatever owns port 3000
  portclear 3000

  # Just show who holds 8000 and 8080
  portclear 8000 8080 --list

  # UDP, take child processes down too, fail if nothing is there
  portclear 5353 --method udp --tree --strict

  # Machine-readable output
  portclear 3000 --json
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Union

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import resolve
from .errors import InvalidInput, PortClearError
from .models import Options, PortSpec, Result

app = typer.Typer(
    add_completion=False, help="Find the process bound to a port and kill it."
)
console = Console()
err_console = Console(stderr=True)

Outcome = Union[Result, PortClearError]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


async def resolve_all(ports: List[int], options: Options) -> List[Outcome]:
    outcomes = await asyncio.gather(
        *(resolve(port, options) for port in ports), return_exceptions=True
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException) and not isinstance(outcome, PortClearError):
            raise outcome
    return outcomes


# --------------------------- Rendering ---------------------------


def status_of(outcome: Outcome) -> str:
    if isinstance(outcome, PortClearError):
        return "[red]error[/red]"
    if outcome.killed:
        return "[green]killed[/green]"
    if outcome.already_free:
        return "[dim]free[/dim]"
    return "[cyan]in use[/cyan]"


def render_table(ports: List[int], outcomes: List[Outcome]) -> Table:
    table = Table()
    table.add_column("Port", justify="right")
    table.add_column("Status")
    table.add_column("PID", justify="right")
    table.add_column("Process")
    table.add_column("Detail", overflow="fold")
    for port, outcome in zip(ports, outcomes):
        if isinstance(outcome, PortClearError):
            table.add_row(str(port), status_of(outcome), "", "", str(outcome))
            continue
        pids = ", ".join(str(pid) for pid in outcome.pids or [])
        table.add_row(
            str(port), status_of(outcome), pids, outcome.name or "", outcome.message or ""
        )
    return table


def as_json(ports: List[int], outcomes: List[Outcome]) -> list:
    rows = []
    for port, outcome in zip(ports, outcomes):
        if isinstance(outcome, PortClearError):
            rows.append({"port": port, "error": str(outcome)})
        else:
            rows.append(outcome.to_dict())
    return rows


# --------------------------- CLI ---------------------------


@app.command()
def main(
    ports: List[str] = typer.Argument(..., help="Port number(s) to clear."),
    method: str = typer.Option(
        "tcp", "--method", "-m", envvar="PORTCLEAR_METHOD", help="tcp or udp"
    ),
    list: bool = typer.Option(
        False, "--list", "-l", help="Show the owning process without killing it"
    ),
    tree: bool = typer.Option(
        False, "--tree", "-t", envvar="PORTCLEAR_TREE", help="Also kill child processes"
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        envvar="PORTCLEAR_STRICT",
        help="Treat a port with nothing bound to it as an error",
    ),
    json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every command that is run"
    ),
):
    """
    Kill (or with --list, show) the process bound to each PORT.

    Exits 1 if any port could not be resolved, 2 on invalid input.
    """
    configure_logging(verbose)

    try:
        options = Options.coerce(
            {"method": method, "list": list, "tree": tree, "strict": strict}
        )
        numbers = [PortSpec.parse(raw, options.method).port for raw in ports]
    except InvalidInput as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    outcomes = asyncio.run(resolve_all(numbers, options))

    if json:
        console.print_json(data=as_json(numbers, outcomes))
    else:
        console.print(render_table(numbers, outcomes))

    failures = [o for o in outcomes if isinstance(o, PortClearError)]
    if not json:
        for failure in failures:
            err_console.print(f"[red]{failure}[/red]")
    if failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    raise SystemExit(app())
