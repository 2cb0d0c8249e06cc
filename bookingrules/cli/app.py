"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.schedule_store import ScheduleFileStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingError, BusinessRuleError
from ..domain.models import Appointment, TimeOfDay, parse_date
from ..domain.slot_calculator import SlotCalculator
from ..domain.time_math import calculate_appointment_end_time, format_time_slot_range
from ..services.booking_service import BookingService

app = typer.Typer(
    name="bookingrules",
    help="Validate appointment bookings and list open time slots",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
ServiceOption = Annotated[
    Optional[str],
    typer.Option("--service", "-s", help="Configured service name; sets the duration"),
]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", "-d", help="Booking duration in minutes (overrides --service)"),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig, interval: Optional[int] = None) -> BookingService:
    return BookingService(
        schedule_source=ScheduleFileStore(config.schedule_file),
        slot_calculator=SlotCalculator(
            interval_minutes=interval or config.defaults.interval_minutes
        ),
    )


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Scheduling-conflict engine for appointment bookings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def slots(
    date: Annotated[str, typer.Argument(help="Date to inspect (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    service: ServiceOption = None,
    duration: DurationOption = None,
    interval: Annotated[Optional[int], typer.Option("--interval", "-i", help="Step between slot starts in minutes")] = None,
):
    """
    List the open slots of a date in the order they are offered.

    Examples:

        bookingrules slots 2026-01-19
        bookingrules slots 2026-01-19 --service haircut
        bookingrules slots 2026-01-19 --duration 60 --interval 15
    """
    try:
        config = _load_config(config_file)
        slot_date = parse_date(date)
        duration_minutes = config.resolve_duration(service, duration)

        if interval is not None and interval <= 0:
            raise ValueError("Interval must be greater than zero.")

        booking_service = _build_service(config, interval)
        found = asyncio.run(
            booking_service.find_slots(
                date=slot_date,
                service_duration_minutes=duration_minutes,
            )
        )

        console.print()
        if not found:
            console.print(
                f"[yellow]⚠ No open slots on {slot_date.to_date_string()}.[/yellow]\n"
                "Try another date or a shorter duration."
            )
        else:
            console.print(
                f"[bold green]✓ {len(found)} open slot(s) on {slot_date.to_date_string()} "
                f"({duration_minutes} min):[/bold green]\n"
            )
            for slot in found:
                console.print(f"  {slot.format_display()}")

        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except (ValueError, BookingError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def check(
    date: Annotated[str, typer.Argument(help="Booking date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    config_file: ConfigOption = None,
    service: ServiceOption = None,
    duration: DurationOption = None,
):
    """
    Check whether a booking at DATE and TIME would be accepted.

    Exits with status 1 and prints the error code when a rule is violated.
    """
    try:
        config = _load_config(config_file)
        candidate = Appointment(
            date=parse_date(date),
            start_time=TimeOfDay.parse(time),
            duration_minutes=config.resolve_duration(service, duration),
        )

        booking_service = _build_service(config)
        asyncio.run(booking_service.validate_booking(candidate, today=config.today()))

    except BusinessRuleError as e:
        console.print(f"[bold red]✗ {e.code.value}:[/bold red] {escape(e.message)}")
        raise typer.Exit(1)

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except (ValueError, BookingError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    ends_at = calculate_appointment_end_time(candidate.start_time, candidate.duration_minutes)
    console.print(
        f"[bold green]✓ Bookable:[/bold green] {candidate.date.to_date_string()} "
        f"{format_time_slot_range(candidate.start_time, ends_at)}"
    )


@app.command()
def end_time(
    start: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    duration: Annotated[int, typer.Argument(help="Duration in minutes")],
):
    """
    Show when an appointment ends. Times past midnight wrap around.
    """
    try:
        result = calculate_appointment_end_time(start, duration)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(str(result))


@app.command()
def list_services(config_file: ConfigOption = None):
    """
    List all configured services.
    """
    try:
        config = _load_config(config_file)

        if not config.services:
            console.print("[yellow]No services defined in the config file.[/yellow]")
            return

        table = Table(
            title="Configured services",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("Duration", style="dim")

        for configured in config.services:
            table.add_row(
                configured.name,
                f"{configured.duration_minutes} min"
            )

        console.print()
        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingrules[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
