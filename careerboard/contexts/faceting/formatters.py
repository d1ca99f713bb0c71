"""
Filter Value Formatters

Forward mapping turns raw database values into canonical display labels
(format_value); reverse mapping turns a selected label back into every raw
value that should match it in a query (reverse_format).

Resolution order for format_value:
    1. blank -> None
    2. location validity filter (placeholders and job titles -> None)
    3. dimension alias table
    4. shared special-case table (acronyms, jargon), unless the dimension opts out
    5. dimension keyword rules, first match wins
    6. dimension default (work arrangement: On-site)
    7. title-case each token

Every step returns a value that resolves to itself on a second pass, so
format_value(format_value(x)) == format_value(x).
"""

import re
from typing import Iterable, List, Mapping, Optional, Union

from careerboard.contexts.faceting.dimensions import FilterDimension
from careerboard.contexts.faceting.logger import _log_debug
from careerboard.contexts.faceting.vocabulary import Vocabulary, load_vocabulary, lookup_key
from careerboard.utils.text_processing import (
    capitalize_token,
    fold_compatibility,
    split_tokens,
    title_case_tokens,
)

DimensionName = Union[str, FilterDimension]


def format_value(raw: Optional[str], dimension: DimensionName) -> Optional[str]:
    """
    Format a raw filter value as its canonical display label.

    Args:
        raw: Raw value as stored (e.g., 'series_d_plus', 'fully_remote')
        dimension: Filter dimension, any spelling FilterDimension.from_name accepts

    Returns:
        Display label, or None for blank values and invalid locations
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None

    vocabulary = load_vocabulary()
    resolved = FilterDimension.from_name(dimension)
    if resolved is None:
        _log_debug(f"Unknown dimension '{dimension}', using generic formatter")
        return format_label(text) or None

    if resolved is FilterDimension.LOCATION and not is_valid_location(text):
        return None

    entry = vocabulary.for_dimension(resolved)
    key = lookup_key(text)

    if key in entry.aliases:
        return entry.aliases[key]

    if entry.use_shared and key in vocabulary.shared:
        return vocabulary.shared[key]

    for rule in entry.contains:
        if rule.pattern.search(key):
            return rule.label

    if entry.default is not None:
        return entry.default

    return title_case_tokens(text) or None


def reverse_format(display_value: Optional[str], dimension: DimensionName) -> List[str]:
    """
    Find the raw values that format to a display label.

    Candidates are the dimension's aliases, the shared special cases, and the
    label's own snake_case and lowercase forms. A candidate is kept only if it
    formats back to display_value (case-insensitive). When nothing survives the
    snake_case form is returned alone, so a non-blank label never maps to an
    empty list.

    Args:
        display_value: Label shown in the UI (e.g., 'Series D Plus')
        dimension: Filter dimension, any spelling FilterDimension.from_name accepts

    Returns:
        Raw values in discovery order, without duplicates

    Example:
        >>> reverse_format("Remote", "workArrangement")
        ['remote', 'remote_us', 'remote_only', 'remote_first', ...]
    """
    if display_value is None or not display_value.strip():
        return []

    label = display_value.strip()
    target = label.casefold()
    candidates = _reverse_candidates(label, FilterDimension.from_name(dimension), load_vocabulary())

    matches = []
    for candidate in dict.fromkeys(candidates):
        formatted = format_value(candidate, dimension)
        if formatted is not None and formatted.casefold() == target:
            matches.append(candidate)

    if not matches:
        _log_debug(f"No raw value round-trips to '{label}', synthesizing '{to_snake_case(label)}'")
        return [to_snake_case(label)]

    return matches


def _reverse_candidates(label: str, dimension: Optional[FilterDimension], vocabulary: Vocabulary) -> List[str]:
    candidates = []

    if dimension is not None:
        entry = vocabulary.for_dimension(dimension)
        candidates.extend(raw for raw, _ in entry.raw_aliases)
        if not entry.use_shared:
            candidates.extend(_label_forms(label))
            return candidates

    candidates.extend(raw for raw, _ in vocabulary.shared_raw)
    candidates.extend(_label_forms(label))
    return candidates


def _label_forms(label: str) -> List[str]:
    return [to_snake_case(label), label.lower()]


def to_snake_case(label: str) -> str:
    """'Series D Plus' -> 'series_d_plus', 'Pre-IPO' -> 'pre_ipo'."""
    return re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")


def is_valid_location(raw: Optional[str]) -> bool:
    """
    Check whether a raw location value names a place.

    Rejects blank and single-character values, pure numbers, placeholder
    values ('n/a', 'TBD', 'Multiple Locations', ...) and job titles that were
    scraped into the location column.
    """
    if raw is None:
        return False

    key = lookup_key(str(raw))
    if len(key) < 2:
        return False
    if key.replace(" ", "").isdigit():
        return False

    vocabulary = load_vocabulary()
    if key in vocabulary.invalid_locations:
        return False
    return not any(marker in key for marker in vocabulary.location_title_markers)


def filter_valid_locations(values: Iterable[Optional[str]]) -> List[str]:
    """Keep the location values that pass is_valid_location, in order."""
    return [value for value in values if is_valid_location(value)]


def get_canonical_labels(dimension: DimensionName) -> List[str]:
    """
    Get the ordered canonical label set for a dimension.

    Raises:
        KeyError: If the dimension name is unknown
    """
    resolved = FilterDimension.from_name(dimension)
    if resolved is None:
        raise KeyError(f"Unknown filter dimension: {dimension}")
    return list(load_vocabulary().for_dimension(resolved).labels)


def format_label(text: Optional[str], extra: Optional[Mapping[str, str]] = None) -> str:
    """
    Format an arbitrary snake_case, camelCase or spaced value for display.

    The extra table is consulted first, then the shared special cases, then each
    token is title-cased. Lookups use the same key normalization as format_value.

    Args:
        text: Value to format
        extra: Additional raw -> label overrides

    Returns:
        Display label, or empty string for blank input
    """
    if text is None or not str(text).strip():
        return ""

    text = _split_camel_case(fold_compatibility(str(text)).strip())
    key = lookup_key(text)

    if extra:
        overrides = {lookup_key(raw): label for raw, label in extra.items()}
        if key in overrides:
            return overrides[key]

    shared = load_vocabulary().shared
    if key in shared:
        return shared[key]

    return " ".join(shared.get(token.lower(), capitalize_token(token)) for token in split_tokens(text))


def _split_camel_case(text: str) -> str:
    # "userGrowth" -> "user Growth"; leaves "B2B" and "SaaS"-style runs alone
    return re.sub(r"(?<=[a-z])(?=[A-Z][a-z])", " ", text)
