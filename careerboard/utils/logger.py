"""
Generic loguru setup shared by every context.

Library code only emits records through the context wrappers in
contexts/{context}/logger.py. Sinks are configured here, and only by entry
points (the scripts), never on import.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from dotenv import load_dotenv
from loguru import logger

import careerboard

load_dotenv()

LOGS_PATH = Path(os.getenv("CAREERBOARD_LOGS_PATH", "outs/logs"))

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}"

# Levels the console shows in a non-default color
LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
}


def session_log_dir(run_name: str, base_dir: Optional[Path] = None) -> Path:
    """
    Build a timestamped directory path for one logging session.

    Args:
        run_name: Short name of the run (e.g., "analyze_seniority")
        base_dir: Parent directory. Defaults to CAREERBOARD_LOGS_PATH

    Returns:
        Path like outs/logs/analyze_seniority_20250101_120000 (not created)
    """
    base = base_dir if base_dir is not None else LOGS_PATH
    return base / f"{run_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"


def setup_logger(
    context_name: str,
    run_name: str,
    details: Optional[dict] = None,
    base_dir: Optional[Path] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output for one script run to a session log file.

    Existing sinks are replaced: the file gets every record, the console
    gets console_level and above. A provenance header is written first.

    Args:
        context_name: Context identifier, also the log file stem ("intake", "facets")
        run_name: Session name, see session_log_dir()
        details: Extra key-value pairs for the provenance header
        base_dir: Parent of the session directory. Defaults to CAREERBOARD_LOGS_PATH
        console_level: Minimum level echoed to stderr

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger("facets", "analyze_location", {"Dimension": "location"})
    """
    log_dir = session_log_dir(run_name, base_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    for line in provenance_lines(context_name, details):
        logger.info(line)

    return log_file


def provenance_lines(context_name: str, details: Optional[dict] = None) -> Iterator[str]:
    """Yield the header lines that open every session log."""
    yield "=" * 80
    yield f"careerboard {careerboard.__version__} ({context_name})"
    yield f"Command: {' '.join(sys.argv)}"
    yield f"Working directory: {Path.cwd()}"
    vocabulary_override = os.getenv("CAREERBOARD_VOCABULARY_PATH")
    if vocabulary_override:
        yield f"Vocabulary: {vocabulary_override}"
    for key, value in (details or {}).items():
        yield f"{key}: {value}"
    yield "=" * 80
