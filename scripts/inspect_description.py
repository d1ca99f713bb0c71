#!/usr/bin/env python3
"""
Parse a job description file and display the recovered structure.

Usage:
    python scripts/inspect_description.py tests/fixtures/product_manager_posting.html
    python scripts/inspect_description.py tests/fixtures/product_manager_posting.txt --sections
    python scripts/inspect_description.py posting.html --raw --log
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from careerboard.contexts.intake import (
    extract_clean_text_preview,
    extract_job_sections,
    has_structured_content,
    parse_job_description,
)
from careerboard.contexts.intake.logger import setup_intake_logger
from careerboard.contexts.intake.section_extractor import section_of
from careerboard.utils.text_processing import truncate_display

load_dotenv()

app = typer.Typer(help="Inspect job description parsing.")

BLOCK_PREVIEW_WIDTH = 70


def _describe_block(block) -> str:
    if block.is_list:
        style = block.metadata.list_style.value if block.metadata.list_style else "bullet"
        first = truncate_display(block.items[0], BLOCK_PREVIEW_WIDTH) if block.items else ""
        return f"list ({style}, {len(block.items)} items): {first}"

    label = block.kind.value
    if block.is_header:
        details = []
        if block.metadata.level:
            details.append(f"h{block.metadata.level}")
        if block.metadata.is_strong:
            details.append("strong")
        section = section_of(block)
        if section:
            details.append(f"-> {section}")
        if details:
            label = f"{label} ({', '.join(details)})"

    return f"{label}: {truncate_display(block.text, BLOCK_PREVIEW_WIDTH)}"


@app.command()
def main(
    description_file: Path = typer.Argument(..., help="HTML or plain-text job description"),
    sections: bool = typer.Option(False, "--sections", help="Show extracted job sections"),
    raw: bool = typer.Option(False, "--raw", help="Also show blocks before paragraph re-classification"),
    preview_length: int = typer.Option(200, "--preview-length", help="Card preview length"),
    log: bool = typer.Option(False, "--log", help="Write a debug log under CAREERBOARD_LOGS_PATH"),
):
    """Parse a description and display blocks, clean text and sections."""
    if not description_file.exists():
        typer.echo(f"ERROR: File not found: {description_file}", err=True)
        raise typer.Exit(1)

    if log:
        log_file = setup_intake_logger("inspect", source=description_file.name)
        typer.echo(f"Logging to {log_file}")

    text = description_file.read_text(encoding="utf-8")
    content = parse_job_description(text)

    typer.echo(f"Loading {description_file.name}")
    typer.echo(f"  characters: {len(text)}")
    typer.echo(f"  structured markup: {has_structured_content(text)}")
    typer.echo(f"  has headers: {content.has_structure}")

    if raw:
        typer.echo(f"\n=== Raw Blocks ({len(content.raw_blocks)}) ===")
        for i, block in enumerate(content.raw_blocks, 1):
            typer.echo(f"  {i:>3}. {_describe_block(block)}")

    typer.echo(f"\n=== Blocks ({len(content.blocks)}) ===")
    typer.echo(
        f"  {len(content.headers)} headers, {len(content.paragraphs)} paragraphs, {len(content.lists)} lists"
    )
    for i, block in enumerate(content.blocks, 1):
        typer.echo(f"  {i:>3}. {_describe_block(block)}")

    typer.echo("\n=== Clean Text ===")
    typer.echo(content.clean_text or "(empty)")

    typer.echo("\n=== Preview ===")
    typer.echo(extract_clean_text_preview(text, preview_length) or "(empty)")

    if sections:
        job_sections = extract_job_sections(content)
        typer.echo("\n=== Sections ===")
        typer.echo(f"  about: {len(job_sections.about)} chars")
        for name in ("responsibilities", "requirements", "benefits"):
            items = getattr(job_sections, name)
            typer.echo(f"  {name} ({len(items)}):")
            for item in items:
                typer.echo(f"    • {truncate_display(item, BLOCK_PREVIEW_WIDTH)}")
        typer.echo(f"  other: {len(job_sections.other)} chars")

        if not content.has_structure:
            typer.echo("\n=== Warnings ===")
            typer.echo("  ! No headers detected, everything was routed to 'other'")

    typer.secho("\n✓ Parsing successful", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
