"""
Faceting context logger.

Provides logging interface for the faceting context with automatic [facets] prefix.
All faceting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from careerboard.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[facets]"


def setup_faceting_logger(run_name: str, dimension: str = "all", base_dir: Optional[Path] = None) -> Path:
    """
    Setup logger for the faceting context.

    Args:
        run_name: Session name for the log directory
        dimension: Filter dimension being processed, for provenance
        base_dir: Parent of the session directory. Defaults to CAREERBOARD_LOGS_PATH

    Returns:
        Path to log file
    """
    return _setup_logger("facets", run_name, details={"Dimension": dimension}, base_dir=base_dir)


# Wrapper functions with automatic [facets] prefix


def _log_info(message: str) -> None:
    """Log info message with [facets] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [facets] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [facets] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_value_summary(dimension: str, total: int, distinct: int, unmapped: int) -> None:
    """Log counts for one analyzed dimension."""
    _log_info(f"{dimension}: {total} values, {distinct} distinct, {unmapped} outside canonical set")
