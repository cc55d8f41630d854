"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.catalog_store import CatalogStore
from ..config import AppConfig, get_default_config_path
from ..domain.availability import AvailabilityEngine
from ..domain.exceptions import BarberbookError
from ..domain.models import ANY_PROFESSIONAL, WEEKDAY_NAMES, Location, weekday_index

app = typer.Typer(
    name="barberbook",
    help="Find bookable appointment times at barbershop locations",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
CatalogOption = Annotated[
    Optional[Path],
    typer.Option("--catalog", help="Catalog file (JSON or YAML). Overrides the config."),
]
ProfessionalOption = Annotated[
    str,
    typer.Option("--professional", "-p", help="Professional id, or 'any' for no preference"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    barberbook - booking slots for barbershop locations.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_file: Optional[Path], catalog_file: Optional[Path]) -> tuple[AppConfig, CatalogStore]:
    """
    Load configuration and catalog.

    A missing default config file falls back to built-in defaults; an
    explicitly given one must exist.
    """
    config_path = config_file or get_default_config_path()
    if config_file is None and not config_path.exists():
        config = AppConfig()
    else:
        config = AppConfig.load_from_yaml(config_path)

    catalog_path = catalog_file or config.catalog_path
    store = CatalogStore.from_file(catalog_path) if catalog_path else CatalogStore.bundled()
    return config, store


def _parse_date(value: Optional[str], config: AppConfig) -> pendulum.Date:
    if not value:
        return config.today()
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=config.timezone).date()
    except Exception as e:
        console.print(f"[red]Erro ao interpretar a data '{value}': {e}[/red]")
        raise typer.Exit(1)


def _selection_label(location: Location, selection: str) -> str:
    if selection == ANY_PROFESSIONAL:
        return "Sem preferência"
    professional = location.find_professional(selection)
    return professional.name if professional else f"{selection} (desconhecido)"


def _format_day(day: pendulum.Date) -> str:
    return f"{WEEKDAY_NAMES[weekday_index(day)]}, {day.format('DD/MM/YYYY')}"


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Erro:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def locations(
    config_file: ConfigOption = None,
    catalog: CatalogOption = None,
):
    """
    List all barbershop locations.
    """
    try:
        _, store = _load(config_file, catalog)
    except (FileNotFoundError, ValueError, BarberbookError) as e:
        _fail(e)

    table = Table(title="Unidades", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold yellow")
    table.add_column("Nome")
    table.add_column("Endereço", style="dim")
    table.add_column("Nota", justify="right")
    table.add_column("Horário", style="dim")

    for location in store.locations():
        table.add_row(
            location.id,
            location.name,
            location.address,
            f"{location.rating:.1f}",
            location.opening_hours,
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def services(
    location_id: Annotated[str, typer.Argument(help="Location id")],
    config_file: ConfigOption = None,
    catalog: CatalogOption = None,
):
    """
    List the services offered at a location.
    """
    try:
        _, store = _load(config_file, catalog)
        location = store.get_location(location_id)
    except (FileNotFoundError, ValueError, BarberbookError) as e:
        _fail(e)

    table = Table(title=f"Serviços - {location.name}", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold yellow")
    table.add_column("Serviço")
    table.add_column("Preço", justify="right")
    table.add_column("Duração", justify="right")
    table.add_column("Descrição", style="dim")

    for service in location.services:
        table.add_row(
            service.id,
            service.name,
            f"R$ {service.price:.2f}",
            f"{service.duration_min} min",
            service.description,
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def professionals(
    location_id: Annotated[str, typer.Argument(help="Location id")],
    config_file: ConfigOption = None,
    catalog: CatalogOption = None,
):
    """
    List the professionals of a location with their weekly schedules.
    """
    try:
        _, store = _load(config_file, catalog)
        location = store.get_location(location_id)
    except (FileNotFoundError, ValueError, BarberbookError) as e:
        _fail(e)

    table = Table(title=f"Profissionais - {location.name}", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold yellow")
    table.add_column("Nome")
    table.add_column("Função", style="dim")
    table.add_column("Agenda")

    for pro in location.professionals:
        open_days = [day.describe() for day in sorted(pro.schedule, key=lambda d: d.day_of_week) if day.is_open]
        agenda = "\n".join(open_days) if open_days else "[yellow]Sem agenda definida[/yellow]"
        table.add_row(pro.id, pro.name, pro.role, agenda)

    console.print()
    console.print(table)
    console.print()


@app.command()
def slots(
    location_id: Annotated[str, typer.Argument(help="Location id")],
    service_id: Annotated[str, typer.Argument(help="Service id")],
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    professional: ProfessionalOption = ANY_PROFESSIONAL,
    config_file: ConfigOption = None,
    catalog: CatalogOption = None,
):
    """
    Show the bookable start times for a service on a date.

    Examples:

        barberbook slots 1 s1 --date 2024-11-25

        barberbook slots 1 s3 -d 2024-11-25 -p p1
    """
    try:
        config, store = _load(config_file, catalog)
        location = store.get_location(location_id)
        service = store.find_service(location_id, service_id)
    except (FileNotFoundError, ValueError, BarberbookError) as e:
        _fail(e)

    day = _parse_date(date, config)
    engine = AvailabilityEngine(slot_interval_minutes=config.booking.slot_interval_minutes)

    console.print()
    console.print(Panel.fit(
        f"[bold]Serviço:[/bold] {service.name} ({service.duration_min} min, R$ {service.price:.2f})\n"
        f"[bold]Profissional:[/bold] {_selection_label(location, professional)}\n"
        f"[bold]Data:[/bold] {_format_day(day)}",
        title=location.name,
    ))

    if not engine.is_date_open(day, location.professionals, professional):
        console.print("[yellow]⚠ Fechado neste dia para o profissional escolhido.[/yellow]\n")
        return

    times = engine.compute_available_slots(day, service, location.professionals, professional)
    if not times:
        console.print("[yellow]⚠ Nenhum horário disponível para este serviço neste dia.[/yellow]\n")
        return

    console.print(f"[bold green]✓ {len(times)} horário(s) disponível(is):[/bold green]\n")
    console.print("  " + "  ".join(times))
    console.print()


@app.command("next-date")
def next_date(
    location_id: Annotated[str, typer.Argument(help="Location id")],
    from_date: Annotated[Optional[str], typer.Option("--from", help="First date to check (YYYY-MM-DD). Defaults to today.")] = None,
    professional: ProfessionalOption = ANY_PROFESSIONAL,
    horizon: Annotated[Optional[int], typer.Option("--horizon", help="Number of days to scan.")] = None,
    config_file: ConfigOption = None,
    catalog: CatalogOption = None,
):
    """
    Find the next open date for a professional selection.
    """
    try:
        config, store = _load(config_file, catalog)
        location = store.get_location(location_id)
    except (FileNotFoundError, ValueError, BarberbookError) as e:
        _fail(e)

    start = _parse_date(from_date, config)
    horizon_days = horizon if horizon is not None else config.booking.horizon_days
    engine = AvailabilityEngine(slot_interval_minutes=config.booking.slot_interval_minutes)

    table = Table(
        title=f"{_selection_label(location, professional)} - {location.name}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Data")
    table.add_column("Status")
    for day, is_open in engine.open_dates(start, horizon_days, location.professionals, professional):
        table.add_row(_format_day(day), "[green]aberto[/green]" if is_open else "[dim]fechado[/dim]")

    console.print()
    console.print(table)

    found = engine.next_available_date(start, horizon_days, location.professionals, professional)
    if found is None:
        console.print(f"\n[yellow]⚠ Nenhuma data disponível nos próximos {horizon_days} dias.[/yellow]\n")
        raise typer.Exit(1)

    console.print(f"\n[bold green]✓ Próxima data disponível:[/bold green] {_format_day(found)}\n")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberbook[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
