"""Command-line interface for the aftershock forecaster."""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from aftershock_forecast import __version__
from aftershock_forecast.config import (
    DEFAULT_DURATIONS,
    DEFAULT_PRESET_CODE,
    PRESETS,
    get_preset,
    list_presets,
)
from aftershock_forecast.core import (
    ForecastRequest,
    InvalidInputError,
    MagnitudeThresholds,
    QuakeNotFoundError,
)
from aftershock_forecast.cli.display import render_results, results_to_csv
from aftershock_forecast.data import (
    DEMO_QUAKE,
    StaticQuakeSource,
    initial_magnitude_thresholds,
    parse_time,
)
from aftershock_forecast.engine import ForecastAssembler, validate_parameters
from aftershock_forecast.utils import setup_logging

PRESET_HELP = "Model preset (" + ", ".join(list_presets()) + ")"


def _fail(ctx: click.Context, messages) -> None:
    for message in messages:
        click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def _overrides(
    a: Optional[float],
    b: Optional[float],
    c: Optional[float],
    p: Optional[float],
) -> Dict[str, float]:
    """Parameter values given on the command line."""
    return {k: v for k, v in {"a": a, "b": b, "c": c, "p": p}.items() if v is not None}


def _parse_time_option(ctx: click.Context, name: str, value: str) -> datetime:
    try:
        return parse_time(value)
    except ValueError:
        _fail(ctx, [f"Invalid {name} '{value}'; expected ISO-8601, e.g. 2016-11-13T11:02:56Z"])


parameter_options = [
    click.option("--preset", "-P", default=DEFAULT_PRESET_CODE, show_default=True, help=PRESET_HELP),
    click.option("-a", type=float, default=None, help="Override productivity a"),
    click.option("-b", type=float, default=None, help="Override Gutenberg-Richter b-value"),
    click.option("-c", type=float, default=None, help="Override Omori c-value (days)"),
    click.option("-p", type=float, default=None, help="Override Omori p-value"),
]


def with_parameter_options(func):
    for option in reversed(parameter_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Aftershock Forecaster - Omori-Utsu / Gutenberg-Richter aftershock forecasts."""
    setup_logging(level="DEBUG" if debug else None)


@main.command()
@click.option("--quake-id", "-q", default=None, help="Event id to look up (bundled events only)")
@click.option("--demo", is_flag=True, help="Use the 2016 M7.8 Kaikoura earthquake, starting 1 hour after")
@click.option("--magnitude", "-m", type=float, default=None, help="Main shock magnitude")
@click.option("--quake-time", default=None, help="Main shock origin time (ISO-8601)")
@click.option("--start-time", default=None, help="Forecast start time (ISO-8601, default: now)")
@click.option("--duration", "-d", "durations", type=float, multiple=True,
              help="Forecast window in days (repeatable)")
@click.option("--m1", type=float, default=None, help="Highest magnitude threshold")
@click.option("--m2", type=float, default=None, help="Middle magnitude threshold")
@click.option("--m3", type=float, default=None, help="Lowest magnitude threshold")
@with_parameter_options
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, writable=True), default=None,
              help="Also export the forecast to this CSV file")
@click.pass_context
def forecast(
    ctx: click.Context,
    quake_id: Optional[str],
    demo: bool,
    magnitude: Optional[float],
    quake_time: Optional[str],
    start_time: Optional[str],
    durations: Tuple[float, ...],
    m1: Optional[float],
    m2: Optional[float],
    m3: Optional[float],
    preset: str,
    a: Optional[float],
    b: Optional[float],
    c: Optional[float],
    p: Optional[float],
    csv_path: Optional[str],
):
    """Forecast aftershock counts, ranges and probabilities."""
    origin: Optional[datetime] = None
    start: Optional[datetime] = None

    if demo or quake_id:
        source = StaticQuakeSource()
        try:
            quake = source.get_quake(quake_id or DEMO_QUAKE.quake_id)
        except QuakeNotFoundError as e:
            _fail(ctx, [str(e)])
        quake_id = quake.quake_id
        magnitude = quake.magnitude if magnitude is None else magnitude
        origin = quake.quake_time
        if demo:
            start = origin + timedelta(hours=1)

    if quake_time:
        origin = _parse_time_option(ctx, "quake time", quake_time)
    if start_time:
        start = _parse_time_option(ctx, "start time", start_time)

    if magnitude is None or origin is None:
        raise click.UsageError("Give --magnitude and --quake-time, or use --quake-id / --demo")

    start = start or datetime.now(timezone.utc)

    try:
        if None in (m1, m2, m3):
            suggested = initial_magnitude_thresholds(magnitude)
            m1 = suggested.m1 if m1 is None else m1
            m2 = suggested.m2 if m2 is None else m2
            m3 = suggested.m3 if m3 is None else m3
        thresholds = MagnitudeThresholds(m1=m1, m2=m2, m3=m3)
        request = ForecastRequest(
            magnitude=magnitude,
            quake_time=origin,
            start_time=start,
            durations=durations or DEFAULT_DURATIONS,
            thresholds=thresholds,
            quake_id=quake_id or "",
            preset_code=preset,
            overrides=_overrides(a, b, c, p),
        )
        results = ForecastAssembler(PRESETS).calculate(request)
    except InvalidInputError as e:
        _fail(ctx, [msg for _, msg in e.errors] or [str(e)])
    except KeyError as e:
        _fail(ctx, [e.args[0]])

    render_results(results, Console(), model_name=results.model_name)

    if csv_path:
        with open(csv_path, "w", newline="", encoding="utf-8") as fh:
            fh.write(results_to_csv(results, model_code=results.preset_code))
        click.echo(f"Saved CSV to {csv_path}", err=True)


@main.command()
def presets():
    """List available model presets."""
    table = Table(title="Model Presets")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    for name in ("a", "b", "c", "p"):
        table.add_column(name, justify="right")
    table.add_column("Description", style="dim")

    for code in list_presets():
        preset = get_preset(code)
        params = preset.parameters
        table.add_row(
            code, preset.name,
            f"{params.a:g}", f"{params.b:g}", f"{params.c:g}", f"{params.p:g}",
            preset.description,
        )

    Console().print(table)


@main.command()
@with_parameter_options
@click.pass_context
def validate(ctx: click.Context, preset: str, a, b, c, p):
    """Check model parameters against literature bounds."""
    try:
        model = ForecastAssembler(PRESETS).resolve_model(preset, overrides=_overrides(a, b, c, p))
    except InvalidInputError as e:
        _fail(ctx, [str(e)])
    except KeyError as e:
        _fail(ctx, [e.args[0]])

    params = model.parameters
    warnings = validate_parameters(params)
    click.echo(f"{model.name}: a={params.a:g} b={params.b:g} c={params.c:g} p={params.p:g}")
    if not warnings:
        click.echo("All parameters within literature bounds.")
        return
    for warning in warnings:
        click.echo(f"Warning: {warning}")


if __name__ == "__main__":
    main()
