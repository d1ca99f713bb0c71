"""
Text processing utilities for formatting and display.
"""

import re
import unicodedata

TOKEN_SEPARATORS = r"[\s_\-]+"


def truncate_display(text: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis
        ellipsis: Marker appended when text is cut

    Returns:
        Original text if within max_len, otherwise truncated with the marker

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    if len(text) <= max_len:
        return text
    return text[: max(max_len - len(ellipsis), 0)] + ellipsis


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        # Any blank line at all
        pattern = r"\n[^\S\n]*\n(?:[^\S\n]*\n)*"
    else:
        # Runs longer than the allowed maximum
        pattern = r"\n[^\S\n]*\n(?:[^\S\n]*\n){%d,}" % max_consecutive

    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)


def split_tokens(text: str) -> list[str]:
    """Split on runs of underscores, hyphens and whitespace, dropping empties."""
    return [token for token in re.split(TOKEN_SEPARATORS, text.strip()) if token]


def fold_compatibility(text: str) -> str:
    """NFKC-normalize text: ligatures, full-width and other compatibility forms become plain characters."""
    return unicodedata.normalize("NFKC", text)


def capitalize_token(token: str) -> str:
    """
    Uppercase the first character of a token and lowercase the rest.

    A first character whose uppercase form is longer than one character
    ("ß" -> "SS") is kept as is, so capitalizing twice changes nothing.
    """
    token = fold_compatibility(token)
    head = token[:1].upper()
    if len(head) != 1:
        head = token[:1]
    return fold_compatibility(head + token[1:].lower())


def title_case_tokens(text: str) -> str:
    """
    Title-case each separator-delimited token and rejoin with single spaces.

    Only the first character of each token is uppercased; the rest is
    lowercased, so "API_gateway" becomes "Api Gateway". The result is a fixed
    point: title-casing it again returns it unchanged.

    Example:
        >>> title_case_tokens("series_d_plus")
        'Series D Plus'
        >>> title_case_tokens("  remote -- first ")
        'Remote First'
    """
    return " ".join(capitalize_token(token) for token in split_tokens(fold_compatibility(text)))
