"""
Shared utilities for CAREERBOARD.

Common functionality used across contexts:
- Text processing
- Logger setup
"""

from careerboard.utils.text_processing import (
    set_max_consecutive_blank_lines,
    title_case_tokens,
    truncate_display,
)

__all__ = ["set_max_consecutive_blank_lines", "title_case_tokens", "truncate_display"]
