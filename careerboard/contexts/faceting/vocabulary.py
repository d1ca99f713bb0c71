"""
Filter Vocabulary Registry

Loads vocabulary.yaml (canonical labels, raw aliases and keyword rules for every
filter dimension) and caches the compiled result per file path.

Lookups never touch the raw strings directly: every raw value and every alias is
reduced to a lookup key first (see lookup_key), so database forms like
"fully_remote" and display forms like "Fully Remote" share one entry.

Every canonical label is registered as an alias of itself. That is what makes
format_value() idempotent: a label that comes back in through the UI resolves to
the same label.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf

from careerboard.contexts.faceting.dimensions import FilterDimension
from careerboard.contexts.faceting.exceptions import VocabularyConfigError
from careerboard.contexts.faceting.logger import _log_debug, _log_warning
from careerboard.utils.text_processing import TOKEN_SEPARATORS, fold_compatibility

load_dotenv()
VOCABULARY_PATH = Path(os.getenv("CAREERBOARD_VOCABULARY_PATH", Path(__file__).parent / "vocabulary.yaml"))


def lookup_key(text: str) -> str:
    """
    Reduce a raw or display value to its vocabulary lookup key.

    Applies NFKC, lowercases, trims, and collapses runs of whitespace,
    underscores and hyphens to a single space: "Series_D-Plus " -> "series d plus".
    """
    return re.sub(TOKEN_SEPARATORS, " ", fold_compatibility(text).strip().lower()).strip()


@dataclass(frozen=True)
class ContainsRule:
    """Keyword rule: if pattern matches the lookup key, the value maps to label."""

    pattern: "re.Pattern[str]"
    label: str


@dataclass(frozen=True)
class DimensionVocabulary:
    """
    Compiled vocabulary for one filter dimension.

    Attributes:
        dimension: Dimension this vocabulary belongs to
        labels: Canonical label set in display order
        aliases: Lookup key -> label (includes every label as its own alias)
        raw_aliases: Alias keys exactly as written in the vocabulary file,
            i.e. as stored in the database. Used for reverse mapping.
        contains: Ordered keyword rules, first match wins
        default: Label for unmatched values, or None to fall back to title case
        use_shared: Whether the shared special-case table is consulted
    """

    dimension: FilterDimension
    labels: Tuple[str, ...]
    aliases: Mapping[str, str]
    raw_aliases: Tuple[Tuple[str, str], ...]
    contains: Tuple[ContainsRule, ...]
    default: Optional[str]
    use_shared: bool


@dataclass(frozen=True)
class Vocabulary:
    """Compiled vocabulary file."""

    path: Path
    dimensions: Mapping[FilterDimension, DimensionVocabulary]
    shared: Mapping[str, str]
    shared_raw: Tuple[Tuple[str, str], ...]
    invalid_locations: FrozenSet[str]
    location_title_markers: Tuple[str, ...]
    tool_categories: Mapping[str, str]
    skill_keywords: Mapping[str, Mapping[str, str]]

    def for_dimension(self, dimension: FilterDimension) -> DimensionVocabulary:
        return self.dimensions[dimension]


_cache: Dict[Path, Vocabulary] = {}


def load_vocabulary(path: Union[str, Path, None] = None) -> Vocabulary:
    """
    Load and compile a vocabulary file, caching it by path.

    Args:
        path: Vocabulary YAML file. Defaults to CAREERBOARD_VOCABULARY_PATH from
            environment, or the vocabulary.yaml shipped with this package

    Returns:
        Compiled Vocabulary

    Raises:
        VocabularyConfigError: If the file is missing, is not valid YAML, or
            lacks a required section
    """
    path = Path(path) if path is not None else VOCABULARY_PATH

    if path in _cache:
        return _cache[path]

    data = _read_config(path)
    vocabulary = _compile(data, path)
    _cache[path] = vocabulary

    _log_debug(f"Loaded vocabulary from {path} ({len(vocabulary.dimensions)} dimensions)")
    return vocabulary


def clear_vocabulary_cache() -> None:
    """Drop every cached vocabulary so the next load re-reads the file."""
    _cache.clear()


def _read_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise VocabularyConfigError("Vocabulary file not found", path=path)

    try:
        config = OmegaConf.load(path)
    except yaml.YAMLError as e:
        raise VocabularyConfigError(f"Vocabulary file is not valid YAML: {e}", path=path) from e

    data = OmegaConf.to_container(config, resolve=True)
    if not isinstance(data, dict):
        raise VocabularyConfigError("Vocabulary file must contain a mapping", path=path)

    return data


def _compile(data: Dict[str, Any], path: Path) -> Vocabulary:
    shared_section = (data.get("shared") or {}).get("special_cases") or {}
    shared_raw = tuple((str(raw), str(label)) for raw, label in shared_section.items())

    shared: Dict[str, str] = {}
    for raw, label in shared_raw:
        shared.setdefault(lookup_key(raw), label)
    for _, label in shared_raw:
        shared.setdefault(lookup_key(label), label)

    dimension_sections = data.get("dimensions") or {}
    dimensions = {}
    for dimension in FilterDimension:
        section = dimension_sections.get(dimension.value)
        if section is None:
            raise VocabularyConfigError(
                f"Missing vocabulary for dimension '{dimension.value}'",
                path=path,
                key=f"dimensions.{dimension.value}",
            )
        dimensions[dimension] = _compile_dimension(dimension, section, shared, path)

    location_filter = data.get("location_filter") or {}
    tags = data.get("tags") or {}

    return Vocabulary(
        path=path,
        dimensions=dimensions,
        shared=shared,
        shared_raw=shared_raw,
        invalid_locations=frozenset(lookup_key(str(v)) for v in location_filter.get("invalid_values") or []),
        location_title_markers=tuple(str(m).lower() for m in location_filter.get("title_markers") or []),
        tool_categories={str(k).lower(): str(v) for k, v in (tags.get("tool_categories") or {}).items()},
        skill_keywords={
            str(category): {str(k).lower(): str(v) for k, v in (keywords or {}).items()}
            for category, keywords in (tags.get("skills") or {}).items()
        },
    )


def _compile_dimension(
    dimension: FilterDimension,
    section: Dict[str, Any],
    shared: Mapping[str, str],
    path: Path,
) -> DimensionVocabulary:
    key_prefix = f"dimensions.{dimension.value}"

    labels = _collect_labels(section)
    if not labels:
        raise VocabularyConfigError("Dimension has no canonical labels", path=path, key=f"{key_prefix}.labels")

    raw_aliases = tuple((str(raw), str(label)) for raw, label in (section.get("aliases") or {}).items())

    aliases: Dict[str, str] = {}
    for raw, label in raw_aliases:
        key = lookup_key(raw)
        if key in aliases and aliases[key] != label:
            _log_warning(
                f"{dimension.value}: alias '{raw}' maps to '{label}' but "
                f"'{key}' already maps to '{aliases[key]}', keeping the first"
            )
            continue
        aliases[key] = label

    contains = _compile_rules(section.get("contains") or [], path, f"{key_prefix}.contains")
    if section.get("match_labels"):
        # Longest first so "San Jose" never shadows a longer label containing it
        contains += tuple(
            ContainsRule(re.compile(rf"\b{re.escape(lookup_key(label))}\b"), label)
            for label in sorted(labels, key=len, reverse=True)
        )

    default = section.get("default")
    if default is not None and default not in labels:
        raise VocabularyConfigError(
            f"Default '{default}' is not a canonical label",
            path=path,
            key=f"{key_prefix}.default",
        )

    # Fixed points: every value the formatter can produce maps back to itself
    outputs = list(labels) + [label for _, label in raw_aliases] + [rule.label for rule in contains]
    for label in outputs:
        existing = aliases.setdefault(lookup_key(label), label)
        if existing != label:
            _log_warning(f"{dimension.value}: label '{label}' is shadowed by alias to '{existing}'")

    use_shared = bool(section.get("use_shared", True))
    if use_shared:
        _check_shared_conflicts(dimension, aliases, shared)

    return DimensionVocabulary(
        dimension=dimension,
        labels=tuple(labels),
        aliases=aliases,
        raw_aliases=raw_aliases,
        contains=contains,
        default=default,
        use_shared=use_shared,
    )


def _collect_labels(section: Dict[str, Any]) -> List[str]:
    labels = [str(label) for label in section.get("labels") or []]
    for group in (section.get("label_groups") or {}).values():
        labels.extend(str(label) for label in group or [])

    # Preserve first occurrence order
    labels = list(dict.fromkeys(labels))
    if section.get("sort_labels"):
        labels.sort()
    return labels


def _compile_rules(rules: List[Dict[str, Any]], path: Path, key: str) -> Tuple[ContainsRule, ...]:
    compiled = []
    for i, rule in enumerate(rules):
        if "pattern" not in rule or "label" not in rule:
            raise VocabularyConfigError("Rule needs both 'pattern' and 'label'", path=path, key=f"{key}[{i}]")
        try:
            compiled.append(ContainsRule(re.compile(str(rule["pattern"])), str(rule["label"])))
        except re.error as e:
            raise VocabularyConfigError(f"Invalid rule pattern: {e}", path=path, key=f"{key}[{i}]") from e
    return tuple(compiled)


def _check_shared_conflicts(dimension: FilterDimension, aliases: Mapping[str, str], shared: Mapping[str, str]) -> None:
    # A shared entry that is reachable in this dimension must not produce a label
    # that this dimension's aliases would rewrite on the next pass
    for key, label in shared.items():
        if key in aliases:
            continue
        resolved = aliases.get(lookup_key(label))
        if resolved is not None and resolved != label:
            _log_warning(
                f"{dimension.value}: shared value '{key}' formats to '{label}', "
                f"which this dimension maps to '{resolved}'"
            )
