"""
Command-line interface for Fitness Tracker.

Provides commands for recording days, browsing entries, rendering the chart,
and importing or exporting the collection.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError as PydanticValidationError

from fitness_tracker.domain.entry import Entry, Metric, RenderRequest
from fitness_tracker.infrastructure.drawing.pillow_surface import PillowSurface
from fitness_tracker.infrastructure.storage.entry_store import EntryStore
from fitness_tracker.infrastructure.storage.kv_store import JsonFileKeyValueStore
from fitness_tracker.services.dashboard import DashboardService
from fitness_tracker.services.range_filter import filter_entries
from fitness_tracker.services.summary import format_value, latest_rows
from fitness_tracker.services.transfer import TransferService
from fitness_tracker.utils.dates import normalize_date, today_iso
from fitness_tracker.utils.exceptions import (
    FitnessTrackerError,
    ImportFailedError,
    ValidationError,
)
from fitness_tracker.utils.logging_config import setup_logging
from fitness_tracker.utils.parameters import ChartConfig, ParameterLoader

app = typer.Typer(help="Fitness Tracker - Daily health metrics and charts")

logger = logging.getLogger(__name__)

IMPORT_FAILED_MESSAGE = "Import failed. Make sure you selected a valid export JSON file."


def init_config(config_path: str = "config/config.yaml") -> ParameterLoader:
    """
    Initialize configuration and logging.

    Args:
        config_path: Path to configuration file.

    Returns:
        Parameter loader instance.
    """
    param_loader = ParameterLoader(config_path)
    setup_logging(param_loader.get_logging_config(), "fitness_tracker")
    return param_loader


def build_store(param_loader: ParameterLoader) -> EntryStore:
    """Create the entry store described by the configuration."""
    storage_config = param_loader.get_storage_config()
    return EntryStore(JsonFileKeyValueStore(storage_config.dir), storage_config)


def parse_metrics(names: list[str]) -> list[Metric]:
    """
    Convert metric names to metrics.

    Raises:
        ValidationError: If a name is not a known metric.
    """
    metrics: list[Metric] = []
    for name in names:
        try:
            metrics.append(Metric(name.strip().lower()))
        except ValueError as e:
            known = ", ".join(m.value for m in Metric)
            raise ValidationError(f"Unknown metric {name!r} (expected one of: {known})") from e
    return metrics


def apply_chart_overrides(
    chart_config: ChartConfig, width: int | None, dpr: float | None
) -> ChartConfig:
    """
    Return a validated copy of the chart configuration with CLI overrides.

    Raises:
        ValidationError: If an override breaks a configuration constraint.
    """
    overrides: dict[str, int | float] = {}
    if width is not None:
        overrides["width"] = width
    if dpr is not None:
        overrides["device_pixel_ratio"] = dpr

    try:
        return ChartConfig.model_validate({**chart_config.model_dump(), **overrides})
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ValidationError(f"Invalid chart option: {fields} must be positive") from e


def fail(action: str, error: Exception) -> typer.Exit:
    """Log and report a failed command, returning the exit to raise."""
    logger.error(f"{action} failed: {error}")
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


def echo_rows(rows: list[tuple[str, str]]) -> None:
    for label, value in rows:
        typer.echo(f"{label + ':':<14}{value}")


@app.command()
def add(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
    date: str | None = typer.Option(None, help="Day to record (YYYY-MM-DD), defaults to today"),
    weight: str = typer.Option("", help="Weight in kg, e.g. 82,4 or 82.4"),
    calories: str = typer.Option("", help="Calories eaten"),
    steps: str = typer.Option("", help="Step count"),
    cardio: str = typer.Option("", help="Cardio minutes"),
    workout: str = typer.Option("", help="Workout notes"),
    comments: str = typer.Option("", help="Comments"),
) -> None:
    """
    Record a day, replacing any existing entry for that date.

    Numbers accept comma or period decimals; unparseable numbers are stored
    as missing.
    """
    try:
        param_loader = init_config(config_path)
        tracker_config = param_loader.get_tracker_config()

        day = normalize_date(date) if date else today_iso(tracker_config.timezone)

        entry = Entry(
            date=day,
            calories=calories,
            weight=weight,
            steps=steps,
            cardio=cardio,
            workout=workout,
            comments=comments,
        )

        store = build_store(param_loader)
        replaced = store.find(day) is not None
        entries = store.upsert(entry)

        action = "Replaced" if replaced else "Added"
        typer.echo(f"{action} entry for {day} ({len(entries)} entries total)")

    except FitnessTrackerError as e:
        raise fail("Add", e) from e


@app.command()
def show(
    date: str = typer.Argument(..., help="Day to show (YYYY-MM-DD)"),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """Show the entry recorded for a day."""
    try:
        param_loader = init_config(config_path)
        day = normalize_date(date)

        entry = build_store(param_loader).find(day)
        if entry is None:
            typer.echo(f"No entry for {day}")
            raise typer.Exit(code=1)

        echo_rows(latest_rows([entry]))

    except FitnessTrackerError as e:
        raise fail("Show", e) from e


@app.command()
def delete(
    date: str = typer.Argument(..., help="Day to delete (YYYY-MM-DD)"),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete the entry for a day."""
    try:
        param_loader = init_config(config_path)
        day = normalize_date(date)

        if not yes and not typer.confirm(f"Delete entry for {day}?"):
            typer.echo("Cancelled")
            return

        entries = build_store(param_loader).delete(day)
        typer.echo(f"Deleted entry for {day} ({len(entries)} entries left)")

    except FitnessTrackerError as e:
        raise fail("Delete", e) from e


@app.command(name="list")
def list_entries(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
    window: str | None = typer.Option(None, help="'all' or number of trailing days"),
) -> None:
    """List entries inside a date window."""
    try:
        param_loader = init_config(config_path)
        tracker_config = param_loader.get_tracker_config()

        entries = build_store(param_loader).load()
        visible = filter_entries(
            entries, window or tracker_config.default_window, timezone_str=tracker_config.timezone
        )

        if not visible:
            typer.echo("No entries yet." if not entries else "No entries in this range.")
            return

        header = ["date"] + [m.value for m in Metric] + ["workout"]
        typer.echo("\t".join(header))
        for entry in visible:
            row = [entry.date] + [format_value(entry.value_of(m)) for m in Metric]
            row.append(entry.workout)
            typer.echo("\t".join(row))

    except FitnessTrackerError as e:
        raise fail("List", e) from e


@app.command()
def latest(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """Show the most recent entry."""
    try:
        param_loader = init_config(config_path)
        rows = latest_rows(build_store(param_loader).load())

        if not rows:
            typer.echo("No entries yet.")
            return

        echo_rows(rows)

    except FitnessTrackerError as e:
        raise fail("Latest", e) from e


@app.command()
def chart(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
    output: str = typer.Option("chart.png", help="PNG file to write"),
    window: str | None = typer.Option(None, help="'all' or number of trailing days"),
    metric: list[str] | None = typer.Option(
        None, "--metric", "-m", help="Metric to plot (repeatable): weight, calories, steps, cardio"
    ),
    width: int | None = typer.Option(None, help="Chart width in logical pixels"),
    dpr: float | None = typer.Option(None, help="Device pixel ratio"),
) -> None:
    """
    Render the multi-metric chart to a PNG file.

    Each metric is scaled to its own range; the legend shows each range.
    """
    try:
        param_loader = init_config(config_path)
        tracker_config = param_loader.get_tracker_config()
        chart_config = param_loader.get_chart_config()

        chart_config = apply_chart_overrides(chart_config, width, dpr)

        request = RenderRequest(
            window=window or tracker_config.default_window,
            metrics=parse_metrics(metric or tracker_config.default_metrics),
        )

        surface = PillowSurface.for_width(
            chart_config.width,
            chart_config.height_ratio,
            chart_config.device_pixel_ratio,
            chart_config.font_size,
        )

        service = DashboardService(
            build_store(param_loader), chart_config, tracker_config.timezone
        )
        view = service.render(request, surface)
        path = surface.save(output)

        if not view.has_any_data:
            typer.echo("No entries yet.")
        typer.echo(f"Plotted {len(view.visible)} entries: {', '.join(view.chart.legend)}")
        typer.echo(f"Chart written to {path}")

    except FitnessTrackerError as e:
        raise fail("Chart", e) from e


@app.command()
def export(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
    output: str | None = typer.Option(None, help="Destination file"),
    fmt: str = typer.Option("json", "--format", help="Export format: json or csv"),
) -> None:
    """Export all entries to a file."""
    try:
        param_loader = init_config(config_path)
        service = TransferService(build_store(param_loader), param_loader.get_export_config())

        if fmt == "json":
            path = service.export_json(output)
        elif fmt == "csv":
            path = service.export_csv(output or Path(service.config.filename).with_suffix(".csv"))
        else:
            raise ValidationError(f"Unsupported export format: {fmt}")

        typer.echo(f"Exported to {path}")

    except FitnessTrackerError as e:
        raise fail("Export", e) from e


@app.command(name="import")
def import_entries(
    input_file: str = typer.Argument(..., help="Export JSON file to import"),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """Replace all entries with the contents of an export file."""
    try:
        param_loader = init_config(config_path)
        service = TransferService(build_store(param_loader), param_loader.get_export_config())

        try:
            entries = service.import_file(input_file)
        except ImportFailedError as e:
            logger.error(f"Import failed: {e}")
            typer.echo(IMPORT_FAILED_MESSAGE, err=True)
            raise typer.Exit(code=1) from e

        typer.echo(f"Import complete. {len(entries)} entries loaded.")

    except FitnessTrackerError as e:
        raise fail("Import", e) from e


@app.command()
def clear(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete all entries."""
    try:
        param_loader = init_config(config_path)

        if not yes and not typer.confirm("This will delete all your data. Continue?"):
            typer.echo("Cancelled")
            return

        build_store(param_loader).clear()
        typer.echo("All entries deleted")

    except FitnessTrackerError as e:
        raise fail("Clear", e) from e


if __name__ == "__main__":
    app()
