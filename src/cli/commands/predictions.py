"""Prediction CLI commands: classify a local file, show history."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from inference.diagnosis import CANCER, PredictionError, diagnose
from predictions.store import PredictionRecord

console = Console()


@click.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--save", is_flag=True, help="Persist the result to the prediction store")
def predict(image: Path, save: bool):
    """Classify a local image file."""
    c = get_components()
    try:
        diagnosis = diagnose(
            c["engine"], image.read_bytes(), threshold=c["config"].limits.confidence_threshold
        )
    except PredictionError as e:
        console.print(f"[red]{e.message}[/]")
        c["store"].close()
        sys.exit(1)

    color = "red" if diagnosis.result == CANCER else "green"
    console.print(f"[bold {color}]{diagnosis.result}[/] ({diagnosis.confidence:.1f}%)")
    console.print(diagnosis.suggestion)

    if save:
        record = PredictionRecord(result=diagnosis.result, suggestion=diagnosis.suggestion)
        c["store"].put(record.id, record)
        console.print(f"[dim]Saved as {record.id}[/]")
    c["store"].close()


@click.command()
def history():
    """List stored predictions."""
    c = get_components(load_model=False)
    records = c["store"].get_all()
    c["store"].close()

    if not records:
        console.print("[yellow]No predictions found.[/]")
        return

    table = Table(show_header=True, title="Prediction history")
    table.add_column("Created", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Result")
    table.add_column("Suggestion")

    for r in records:
        result = r.result or "?"
        if result == CANCER:
            result = f"[red]{result}[/]"
        else:
            result = f"[green]{result}[/]"
        table.add_row(r.created_at or "?", r.id, result, r.suggestion or "")

    console.print(table)
