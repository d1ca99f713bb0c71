#!/usr/bin/env python3
"""
Analyze raw filter values and how they normalize.

Reads raw values for one dimension, counts them, and shows each distinct value
next to its canonical label. Use it to find values the vocabulary does not
cover yet.

Input formats:
    - plain text, one raw value per line
    - JSON list of strings
    - JSON list of records (use --field to pick the column)

Usage:
    python scripts/analyze_filter_values.py seniority.txt --dimension seniority
    python scripts/analyze_filter_values.py jobs.json --dimension location --field location_metro
    python scripts/analyze_filter_values.py jobs.json --dimension workArrangement --field work_arrangement --top 10
"""

import json
from collections import Counter
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from careerboard.contexts.faceting import (
    FilterDimension,
    format_value,
    get_canonical_labels,
    is_valid_location,
)
from careerboard.contexts.faceting.logger import log_value_summary, setup_faceting_logger

load_dotenv()

app = typer.Typer(help="Analyze raw filter values against the vocabulary.")


def read_values(values_file: Path, field: Optional[str]) -> List[str]:
    """
    Read raw values from a text or JSON file.

    Raises:
        ValueError: If a JSON file holds records but no field was given
    """
    text = values_file.read_text(encoding="utf-8")

    if values_file.suffix.lower() != ".json":
        return [line.strip() for line in text.splitlines() if line.strip()]

    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("JSON input must be a list")

    values = []
    for entry in data:
        if isinstance(entry, dict):
            if not field:
                raise ValueError("JSON records need --field to select a column")
            entry = entry.get(field)
        if entry is not None and str(entry).strip():
            values.append(str(entry).strip())
    return values


@app.command()
def main(
    values_file: Path = typer.Argument(..., help="Text or JSON file of raw values"),
    dimension: str = typer.Option(..., "--dimension", "-d", help="Filter dimension (e.g., seniority, companyStage)"),
    field: Optional[str] = typer.Option(None, "--field", "-f", help="Record field holding the value (JSON records)"),
    top: int = typer.Option(30, "--top", help="Number of distinct values to list"),
    log: bool = typer.Option(False, "--log", help="Write a debug log under CAREERBOARD_LOGS_PATH"),
):
    """Count raw values and show their normalized labels."""
    resolved = FilterDimension.from_name(dimension)
    if resolved is None:
        known = ", ".join(d.value for d in FilterDimension)
        typer.echo(f"ERROR: Unknown dimension '{dimension}' (known: {known})", err=True)
        raise typer.Exit(1)

    if not values_file.exists():
        typer.echo(f"ERROR: File not found: {values_file}", err=True)
        raise typer.Exit(1)

    if log:
        log_file = setup_faceting_logger(f"analyze_{resolved.value}", dimension=resolved.value)
        typer.echo(f"Logging to {log_file}")

    try:
        values = read_values(values_file, field)
    except ValueError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    counts = Counter(values)
    canonical = get_canonical_labels(resolved)
    canonical_set = set(canonical)

    typer.echo(f"Loaded {len(values)} values from {values_file.name}")

    typer.echo("\n" + "=" * 80)
    typer.echo(f"{resolved.value.upper()} (top {top})")
    typer.echo("=" * 80)

    label_counts: Counter = Counter()
    unmapped: Counter = Counter()
    invalid: Counter = Counter()

    for value, count in counts.most_common():
        label = format_value(value, resolved)
        if label is None:
            invalid[value] += count
        else:
            label_counts[label] += count
            if label not in canonical_set:
                unmapped[value] += count

    for value, count in counts.most_common(top):
        label = format_value(value, resolved)
        marker = "" if label in canonical_set else "  (not canonical)"
        typer.echo(f'  "{value}" -> {label or "-"}  [{count}]{marker}')

    typer.echo(f"\nTotal distinct values: {len(counts)}")

    typer.echo("\n=== Canonical Coverage ===")
    for label in canonical:
        typer.echo(f"  {label}: {label_counts.get(label, 0)}")
    missing = [label for label in canonical if label not in label_counts]
    typer.echo(f"  {len(canonical) - len(missing)}/{len(canonical)} labels in use")

    if unmapped:
        typer.echo(f"\n=== Outside Canonical Set ({len(unmapped)}) ===")
        for value, count in unmapped.most_common(top):
            typer.echo(f'  "{value}" -> {format_value(value, resolved)}  [{count}]')

    if resolved is FilterDimension.LOCATION:
        rejected = [value for value in counts if not is_valid_location(value)]
        typer.echo(f"\n=== Invalid Locations ({len(rejected)}) ===")
        for value in rejected:
            typer.echo(f'  "{value}" [{counts[value]}]')
    elif invalid:
        typer.echo(f"\n=== Formatted To None ({len(invalid)}) ===")
        for value, count in invalid.most_common(top):
            typer.echo(f'  "{value}" [{count}]')

    log_value_summary(resolved.value, len(values), len(counts), sum(unmapped.values()))

    typer.secho("\n✓ Analysis complete", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
