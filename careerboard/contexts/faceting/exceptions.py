"""Custom exceptions for the faceting context with vocabulary file references."""

from pathlib import Path
from typing import Optional


class VocabularyConfigError(ValueError):
    """
    Raised when the filter vocabulary file is missing or malformed.

    Attributes:
        message: Error description
        path: Vocabulary file that failed to load
        key: Dotted path of the offending entry (e.g., 'dimensions.seniority.labels')
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        key: Optional[str] = None,
    ):
        self.message = message
        self.path = path
        self.key = key

        parts = [message]

        if key:
            parts.append(f"Key: {key}")

        if path:
            parts.append(f"Vocabulary file: {path}")

        super().__init__("\n".join(parts))
