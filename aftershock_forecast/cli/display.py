"""
Terminal and CSV output for aftershock forecasts.

Uses Rich to render the forecast table, one row per window and one column
group per magnitude band (smallest band first).
"""

import csv
import io
from datetime import datetime, timezone
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from aftershock_forecast.core import Band, CalculationResults, format_magnitude
from aftershock_forecast.utils.formatting import format_result

# Column order: smallest events first
BAND_ORDER = (Band.M3, Band.M2, Band.M1)


def format_duration(duration: float) -> str:
    """Render a window length, e.g. '1 day' or '7 days'."""
    text = format_magnitude(duration)
    return f"{text} day" if duration == 1 else f"{text} days"


def build_results_table(results: CalculationResults) -> Table:
    """Create the forecast table."""
    title = f"Aftershock Forecast - {results.quake_id}" if results.quake_id else "Aftershock Forecast"
    table = Table(title=title, box=box.SIMPLE_HEAVY, expand=False)
    table.add_column("Duration", style="bold")

    for band in BAND_ORDER:
        label = results.range_labels[band]
        table.add_column(f"{label}\nAverage", justify="right")
        table.add_column(f"{label}\nRange", justify="right", style="dim")
        table.add_column(f"{label}\nProbability", justify="right", style="cyan")

    for forecast in results.forecasts:
        row = [format_duration(forecast.duration)]
        for band in BAND_ORDER:
            cells = format_result(forecast.band(band))
            row.extend([cells["average"], cells["range"], cells["probability"]])
        table.add_row(*row)

    return table


def build_parameters_panel(results: CalculationResults, model_name: str) -> Panel:
    """Create the model summary panel."""
    params = results.parameters
    grid = Table.grid(padding=(0, 2))
    grid.add_column()
    grid.add_column(justify="right")

    grid.add_row("Model:", model_name)
    grid.add_row("a / b:", f"{params.a:g} / {params.b:g}")
    grid.add_row("c / p:", f"{params.c:g} / {params.p:g}")
    grid.add_row("Start:", f"{results.range_start_days:.3f} days after main shock")

    return Panel(grid, title="Seismic Model", border_style="blue", expand=False)


def render_results(
    results: CalculationResults,
    console: Optional[Console] = None,
    model_name: str = "Custom",
) -> None:
    """Print the model summary, any parameter warnings and the forecast table."""
    console = console or Console()

    console.print(build_parameters_panel(results, model_name))
    for warning in results.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")
    console.print(build_results_table(results))


# =============================================================================
# CSV EXPORT
# =============================================================================


def csv_rows(results: CalculationResults) -> List[List[str]]:
    """Header row followed by one row per forecast window."""
    header = ["Duration"]
    for band in BAND_ORDER:
        label = results.range_labels[band]
        header.extend([f"{label} Avg", f"{label} Range", f"{label} Prob"])

    rows = [header]
    for forecast in results.forecasts:
        row = [f"{format_magnitude(forecast.duration)} days"]
        for band in BAND_ORDER:
            cells = format_result(forecast.band(band))
            row.extend([cells["average"], cells["range"], cells["probability"]])
        rows.append(row)

    return rows


def results_to_csv(
    results: CalculationResults,
    model_code: str = "custom",
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Render forecasts as CSV text with a commented header block.

    Args:
        results: Forecasts to export
        model_code: Preset code (or 'custom') recorded in the header
        generated_at: Timestamp for the header (default: now, UTC)

    Returns:
        CSV document as a string
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    buffer = io.StringIO()
    buffer.write(f"# AfterShock Forecast for {results.quake_id}\n")
    buffer.write(f"# Generated: {generated_at.isoformat()}\n")
    buffer.write(f"# Model: {model_code.upper()}\n")
    buffer.write("\n")

    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(csv_rows(results))

    return buffer.getvalue()
