"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..config import AppConfig
from ..domain.exceptions import DueDateError
from ..domain.models import TurnaroundTime

app = typer.Typer(
    name="duedate",
    help="Calculate due dates in working hours, skipping weekends and holidays",
    add_completion=False
)

console = Console()

# Used when no duration option is given
DEMO_TURNAROUND = TurnaroundTime(days=1, hours=4, minutes=30)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


def _parse_timestamp(value: str, tz: str) -> DateTime:
    """
    Parse a timestamp argument like '2025-12-30 14:12:00' in the given zone.

    Raises:
        ValueError: If the value is not a date or date-time
    """
    parsed = pendulum.parse(value, tz=tz)
    if not isinstance(parsed, DateTime):
        raise ValueError(f"Expected a date or date-time, got '{value}'")
    return parsed


def _format_timestamp(dt: DateTime) -> str:
    return f"{dt.format('dddd')}, {dt.to_datetime_string()}"


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Calculate due dates in working time.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True))],
        )


@app.command()
def calculate(
    submit: Annotated[str, typer.Argument(help="Submit timestamp, e.g. '2025-12-30 14:12:00'")],
    days: Annotated[Optional[int], typer.Option("--days", "-d", help="Working days", min=0)] = None,
    hours: Annotated[Optional[int], typer.Option("--hours", "-H", help="Working hours", min=0)] = None,
    minutes: Annotated[Optional[int], typer.Option("--minutes", "-m", help="Working minutes", min=0)] = None,
    seconds: Annotated[Optional[int], typer.Option("--seconds", "-s", help="Working seconds", min=0)] = None,
    roll_forward: Annotated[
        bool,
        typer.Option(
            "--roll-forward",
            help="Move submits outside working hours to the next working period first.",
        )
    ] = False,
    config_file: ConfigOption = None,
):
    """
    Calculate the due date for a submit timestamp and turnaround.

    Examples:

        # 1 working day, 4 hours and 30 minutes (the default turnaround)
        duedate calculate "2025-12-30 14:12:00"

        # Explicit turnaround
        duedate calculate "2025-12-30 14:12:00" --days 2 --hours 3

        # Start counting at the next working period for out-of-hours submits
        duedate calculate "2025-12-27 10:00" --hours 2 --roll-forward
    """
    try:
        config = AppConfig.load(config_file)
        submit_date = _parse_timestamp(submit, config.timezone)

        if days is None and hours is None and minutes is None and seconds is None:
            turnaround = DEMO_TURNAROUND
        else:
            turnaround = TurnaroundTime(
                days=days or 0,
                hours=hours or 0,
                minutes=minutes or 0,
                seconds=seconds or 0,
            )

        calculator = config.build_calculator(roll_forward_submit=True if roll_forward else None)
        due_date = calculator.calculate_due_date(submit_date, turnaround)

    except (FileNotFoundError, ValueError, DueDateError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold]Submitted:[/bold]  {_format_timestamp(submit_date)}\n"
        f"[bold]Turnaround:[/bold] {turnaround}\n"
        f"[bold]Working hours:[/bold] {config.working_hours.start_hour}:00 - "
        f"{config.working_hours.end_hour}:00\n\n"
        f"[bold green]Due date:[/bold green]   {_format_timestamp(due_date)}",
        title="Due Date"
    ))


@app.command()
def next_start(
    date: Annotated[str, typer.Argument(help="Date or timestamp, e.g. '2025-12-31'")],
    config_file: ConfigOption = None,
):
    """
    Show the start of the next working period after a date.
    """
    try:
        config = AppConfig.load(config_file)
        current = _parse_timestamp(date, config.timezone)
        next_date = config.build_calculator().next_working_day_start(current)
    except (FileNotFoundError, ValueError, DueDateError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Next working period starts:[/green] {_format_timestamp(next_date)}")


@app.command()
def holidays(
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Year to show weekdays for")] = None,
    config_file: ConfigOption = None,
):
    """
    List the configured holidays.
    """
    try:
        config = AppConfig.load(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.holidays:
        console.print("[yellow]No holidays configured.[/yellow]")
        return

    year = year or pendulum.now(config.timezone).year

    table = Table(
        title=f"Configured holidays ({year})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Holiday", style="bold yellow")
    table.add_column("Date")
    table.add_column("Weekday", style="dim")

    for holiday in sorted(config.holidays):
        month, day = (int(part) for part in holiday.split("/"))
        try:
            holiday_date = pendulum.date(year, month, day)
        except ValueError:
            # 02/29 outside leap years
            table.add_row(holiday, "-", "-")
            continue
        table.add_row(holiday, holiday_date.to_date_string(), holiday_date.format("dddd"))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]duedate[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
