"""
Home Energy Calculator CLI.

Command-line interface for annual energy, emissions and cost estimates
of single-family homes.
"""

from __future__ import annotations

import json
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analysis.pipeline import EnergyEstimate, evaluate
from .baseline.fallbacks import default_efficiency
from .core.config import settings
from .core.energy_breakdown import EnergyCarrier
from .core.equipment import CoolingKind, DHWKind, HeatingKind
from .core.models import InputRecord
from .ecm.catalog import RecommendationCategory, get_measure, get_measures_by_category, list_measure_ids
from .reporting.summary import estimate_to_dict, format_fuel_breakdown
from .utils.logging_config import setup_logging
from .utils.validation import (
    ParsedInput,
    ValidationError,
    load_input_record,
    parse_input_record,
    validate_sort_key,
    validate_top,
)

app = typer.Typer(
    name="homeenergy",
    help="Home Energy Calculator - annual loads, fuel, CO2 and retrofit ideas for a house",
    add_completion=False,
)
console = Console()


@app.callback()
def main_callback(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level"),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level)


def _read_input(input_file: str) -> ParsedInput:
    if input_file == "-":
        return parse_input_record(sys.stdin.read())
    return load_input_record(input_file)


def _fail(error: ValidationError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    for suggestion in error.suggestions:
        console.print(f"  [dim]→ {suggestion}[/dim]")
    raise typer.Exit(1)


def _render(estimate: EnergyEstimate) -> None:
    eff = estimate.effective
    c = estimate.conductance
    loads = estimate.loads

    console.print(Panel.fit(
        "[bold blue]Home Energy Calculator[/bold blue]\n"
        f"{eff.floor_area_ft2:,.0f} ft² · {eff.stories:g} stories · built {eff.year_built:.0f} · "
        f"HDD65 {eff.hdd65:,.0f} / CDD65 {eff.cdd65:,.0f}",
        border_style="blue",
    ))

    # Conductance
    table = Table(title="Heat Loss Coefficient (Btu/hr·°F)")
    table.add_column("Path", style="cyan")
    table.add_column("UA", justify="right")
    for name, value in (
        ("Walls", c.wall),
        ("Roof", c.roof),
        ("Floor", c.floor),
        ("Doors", c.doors),
        ("Windows", c.windows),
        ("Infiltration", c.infiltration),
    ):
        table.add_row(name, f"{value:,.1f}")
    table.add_row("[bold]Total[/bold]", f"[bold]{c.total:,.1f}[/bold]")
    console.print(table)
    console.print(f"  [dim]Air leakage is {c.infiltration_share:.0%} of total UA[/dim]")

    # Loads
    table = Table(title="Annual Loads (MMBtu/yr)")
    table.add_column("Load", style="cyan")
    table.add_column("Base", justify="right")
    table.add_column("With solar", justify="right")
    table.add_row("Heating", f"{loads.base_heating / 1e6:,.1f}", f"{loads.heating / 1e6:,.1f}")
    table.add_row("Cooling", f"{loads.base_cooling / 1e6:,.1f}", f"{loads.cooling / 1e6:,.1f}")
    table.add_row("Window solar gain", "", f"{loads.solar_gain / 1e6:,.1f}")
    table.add_row("Hot water delivered", "", f"{estimate.dhw_delivered_btu / 1e6:,.1f}")
    console.print(table)

    # Fuel and cost by end use
    table = Table(title="Fuel and Cost by End Use")
    table.add_column("End use", style="cyan")
    table.add_column("Fuel")
    table.add_column("Cost", justify="right")
    for end_use, fuel in estimate.fuel_by_end_use.items():
        table.add_row(
            end_use.value.upper() if end_use.value == "dhw" else end_use.value.capitalize(),
            format_fuel_breakdown(fuel) or "-",
            f"${estimate.cost_by_end_use[end_use]:,.0f}",
        )
    table.add_row("[bold]Total[/bold]", format_fuel_breakdown(estimate.total_fuel) or "-",
                  f"[bold]${estimate.total_cost:,.0f}[/bold]")
    console.print(table)

    # Emissions
    table = Table(title="Emissions (kg CO2e/yr)")
    table.add_column("Carrier", style="cyan")
    table.add_column("kg", justify="right")
    for carrier in EnergyCarrier:
        value = estimate.emissions.by_carrier[carrier.label]
        if value > 0:
            table.add_row(carrier.label, f"{value:,.0f}")
    table.add_row("[bold]Total[/bold]", f"[bold]{estimate.total_kg_co2:,.0f}[/bold]")
    console.print(table)

    # Recommendations
    if not estimate.recommendations:
        console.print("\n[green]No retrofit clears the savings threshold.[/green]")
        return

    table = Table(title="Recommendations")
    table.add_column("#", justify="right")
    table.add_column("Measure", style="cyan")
    table.add_column("Saves")
    table.add_column("$/yr", justify="right")
    table.add_column("kg CO2e/yr", justify="right")
    for i, rec in enumerate(estimate.recommendations, 1):
        table.add_row(
            str(i),
            f"{rec.title}\n[dim]{rec.explanation}[/dim]",
            format_fuel_breakdown(rec.savings.fuel) or "-",
            f"${rec.savings.dollars:,.0f}",
            f"{rec.savings.kg_co2:,.0f}",
        )
    console.print(table)


@app.command()
def estimate(
    input_file: str = typer.Argument(..., help="Input JSON file ('-' for stdin)"),
    sort: str = typer.Option(settings.default_sort, "--sort", "-s", help="Rank recommendations by 'cost' or 'co2'"),
    top: int = typer.Option(settings.max_recommendations, "--top", "-n", help="Number of recommendations"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON document instead of tables"),
):
    """
    Estimate annual energy use, emissions and cost for a home.

    Missing inputs are filled from construction-era and equipment defaults.
    """
    try:
        sort_key = validate_sort_key(sort)
        top = validate_top(top)
        parsed = _read_input(input_file)
    except ValidationError as e:
        _fail(e)

    result = evaluate(parsed.record, sort_key, limit=top)

    if as_json:
        doc = estimate_to_dict(result)
        doc["ignored_fields"] = parsed.ignored_fields
        typer.echo(json.dumps(doc, indent=2))
        return

    if parsed.ignored_fields:
        console.print(f"[yellow]Ignored unknown fields:[/yellow] {', '.join(parsed.ignored_fields)}")
    _render(result)


@app.command()
def kinds():
    """List equipment kinds with their default efficiency."""
    for title, kinds_enum, rating in (
        ("Heating", HeatingKind, "AFUE / COP / eff"),
        ("Cooling", CoolingKind, "SEER"),
        ("Water heating", DHWKind, "UEF / COP"),
    ):
        table = Table(title=title)
        table.add_column("Kind", style="cyan")
        table.add_column(f"Default {rating}", justify="right")
        for kind in kinds_enum:
            value = default_efficiency(kind)
            table.add_row(kind.value, "-" if value is None else f"{value:g}")
        console.print(table)


@app.command()
def measures(
    measure_id: Optional[str] = typer.Argument(None, help="Show one measure and its parameters"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only list this category"),
    ids_only: bool = typer.Option(False, "--ids", help="Print measure IDs one per line, in tie-break order"),
):
    """List the retrofit measures the recommender can propose."""
    if ids_only:
        typer.echo("\n".join(list_measure_ids()))
        return

    if measure_id is not None:
        measure = get_measure(measure_id)
        if measure is None:
            _fail(ValidationError(
                f"Unknown measure '{measure_id}'",
                field="measure",
                suggestions=["Run `homeenergy measures --ids` for the full list"],
            ))
        console.print(f"[bold cyan]{measure.id}[/bold cyan] ({measure.category.value})")
        console.print(measure.title, markup=False)
        console.print(f"[dim]{measure.explanation}[/dim]")
        for name, value in measure.parameters.items():
            console.print(f"  {name} = {value:g}")
        return

    try:
        categories = [RecommendationCategory(category)] if category else list(RecommendationCategory)
    except ValueError:
        _fail(ValidationError(
            f"Invalid category '{category}'",
            field="category",
            suggestions=[f"Valid categories are: {', '.join(c.value for c in RecommendationCategory)}"],
        ))

    for cat in categories:
        table = Table(title=cat.value.replace("_", " ").capitalize())
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Measure")
        for measure in get_measures_by_category(cat):
            table.add_row(measure.id, measure.explanation)
        console.print(table)


@app.command()
def defaults():
    """Print the default input record as JSON."""
    typer.echo(json.dumps(InputRecord().model_dump(mode="json", by_alias=True), indent=2))


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"Home Energy Calculator v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
