"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from careerboard.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(run_name: str, source: str = "description", base_dir: Optional[Path] = None) -> Path:
    """
    Setup logger for the intake context.

    Args:
        run_name: Session name for the log directory
        source: What is being parsed, recorded in the provenance header
        base_dir: Parent of the session directory. Defaults to CAREERBOARD_LOGS_PATH

    Returns:
        Path to log file
    """
    return _setup_logger("intake", run_name, details={"Source": source}, base_dir=base_dir)


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
