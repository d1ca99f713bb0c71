"""
Tag Extraction

Builds display tags from the structured fields of a job record. Field values
arrive in whatever shape the enrichment step stored them: Python lists,
comma-separated strings, or JSON-encoded strings.

Each field maps to one tag category. Known skills are labeled from the skill
tables in vocabulary.yaml; anything else goes through format_label().
"""

import json
import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from careerboard.contexts.faceting.formatters import format_label
from careerboard.contexts.faceting.logger import _log_debug
from careerboard.contexts.faceting.vocabulary import load_vocabulary

MIN_SCAN_KEYWORD_LENGTH = 2

# Field strings starting with these are JSON-encoded
JSON_OPENERS = ("[", "{")


class TagCategory(str, Enum):
    CORE_PM = "core-pm"
    TECHNICAL = "technical"
    DOMAIN = "domain"
    LEADERSHIP = "leadership"
    METHODOLOGY = "methodology"
    RESPONSIBILITIES = "responsibilities"

    @property
    def display_name(self) -> str:
        return CATEGORY_TITLES[self]


CATEGORY_TITLES = {
    TagCategory.CORE_PM: "Core PM Skills",
    TagCategory.TECHNICAL: "Technical Skills",
    TagCategory.DOMAIN: "Domain Expertise",
    TagCategory.LEADERSHIP: "Leadership",
    TagCategory.METHODOLOGY: "Methodology",
    TagCategory.RESPONSIBILITIES: "Responsibilities",
}


@dataclass(frozen=True)
class Tag:
    label: str
    category: TagCategory


@dataclass
class TagSource:
    """
    The job record fields tag extraction reads.

    List-ish fields accept a list, a comma-separated string or a JSON array
    string. tools_platforms is a category -> tools mapping or its JSON string.
    """

    core_pm_skills: Any = None
    technical_skills: Any = None
    tools_platforms: Any = None
    kpi_ownership: Any = None
    product_methodology: Any = None
    primary_responsibilities: Any = None
    management_scope: Any = None
    reporting_structure: Any = None
    domain_expertise: Any = None
    product_domain: Any = None
    description: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TagSource":
        """Build from a raw row, ignoring every column tags are not built from."""
        return cls(**{f.name: record.get(f.name) for f in fields(cls)})


# Field -> (category, skill table name in vocabulary.yaml)
FIELD_CATEGORIES = (
    ("core_pm_skills", TagCategory.CORE_PM, "core_pm"),
    ("technical_skills", TagCategory.TECHNICAL, "technical"),
    ("kpi_ownership", TagCategory.RESPONSIBILITIES, None),
    ("primary_responsibilities", TagCategory.RESPONSIBILITIES, None),
    ("product_methodology", TagCategory.METHODOLOGY, None),
    ("management_scope", TagCategory.LEADERSHIP, None),
    ("reporting_structure", TagCategory.LEADERSHIP, None),
    ("domain_expertise", TagCategory.DOMAIN, "domain"),
    ("product_domain", TagCategory.DOMAIN, "domain"),
)

# Description keyword scan: skill table -> category
SCANNED_SKILLS = (
    ("core_pm", TagCategory.CORE_PM),
    ("technical", TagCategory.TECHNICAL),
)


def extract_tags(source: TagSource, scan_description: bool = True) -> List[Tag]:
    """
    Extract display tags from a job's structured fields.

    Args:
        source: Job fields to read
        scan_description: Also look for known core PM and technical skills in
            the description text

    Returns:
        Tags deduplicated on (category, label), in first-seen order
    """
    vocabulary = load_vocabulary()
    tags: List[Tag] = []

    for field_name, category, skill_table in FIELD_CATEGORIES:
        skills = vocabulary.skill_keywords.get(skill_table, {}) if skill_table else {}
        for value in parse_list_field(getattr(source, field_name), field_name):
            label = skills.get(value.lower()) or format_label(value)
            if label:
                tags.append(Tag(label, category))

        # Tools sit with technical skills
        if field_name == "technical_skills":
            tags.extend(_tool_tags(source.tools_platforms, vocabulary.tool_categories))

    if scan_description and source.description:
        for skill_table, category in SCANNED_SKILLS:
            skills = vocabulary.skill_keywords.get(skill_table, {})
            tags.extend(Tag(label, category) for label in scan_keywords(source.description, skills))

    return list(dict.fromkeys(tags))


def parse_list_field(value: Any, field_name: str = "field") -> List[str]:
    """
    Normalize a list-ish field to a list of trimmed, non-empty strings.

    A string starting with '[' or '{' is decoded as JSON (an object contributes its
    keys). If decoding fails the whole raw string becomes the only item.
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith(JSON_OPENERS):
            decoded = _decode_json(text, field_name)
            if decoded is None:
                items = [text]
            elif isinstance(decoded, Mapping):
                items = list(decoded.keys())
            else:
                items = decoded if isinstance(decoded, list) else [decoded]
        else:
            items = text.split(",")
    elif isinstance(value, Mapping):
        items = list(value.keys())
    elif isinstance(value, Iterable):
        items = list(value)
    else:
        items = [value]

    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def _decode_json(text: str, field_name: str) -> Any:
    """Decode a JSON string, or return None if it is malformed."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        _log_debug(f"Could not decode {field_name} as JSON ({e.msg}), using raw value")
        return None


def _tool_tags(value: Any, tool_categories: Mapping[str, str]) -> List[Tag]:
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        value = text
        if text.startswith(JSON_OPENERS):
            value = _decode_json(text, "tools_platforms")
            if value is None:
                return [Tag(format_label(text), TagCategory.TECHNICAL)]

    if not isinstance(value, Mapping):
        return [Tag(format_label(tool), TagCategory.TECHNICAL) for tool in parse_list_field(value, "tools_platforms")]

    tags = []
    for category_name, tools in value.items():
        category_name = str(category_name).strip()
        if category_name:
            label = tool_categories.get(category_name.lower()) or format_label(category_name)
            tags.append(Tag(label, TagCategory.TECHNICAL))

        if isinstance(tools, (list, tuple)):
            tags.extend(
                Tag(format_label(str(tool)), TagCategory.TECHNICAL)
                for tool in tools
                if tool is not None and str(tool).strip()
            )
    return tags


def scan_keywords(text: str, keywords: Mapping[str, str]) -> List[str]:
    """
    Find known keywords in free text, word-bounded and case-insensitive.

    Keywords shorter than two characters are skipped.

    Returns:
        Labels of matched keywords, in keyword table order
    """
    lowered = text.lower()
    found = []
    for keyword, label in keywords.items():
        if len(keyword) < MIN_SCAN_KEYWORD_LENGTH:
            continue
        if re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])", lowered):
            found.append(label)
    return found


def filter_tags_by_category(tags: Iterable[Tag], category: TagCategory) -> List[Tag]:
    return [tag for tag in tags if tag.category == category]


def tag_to_url_param(tag: Tag) -> str:
    """
    Encode a tag as a URL query value: 'core-pm:product-strategy'.

    Lossy: punctuation is dropped from the label slug.
    """
    slug = re.sub(r"\s+", "-", tag.label.lower())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return f"{tag.category.value}:{slug}"


def tag_from_url_param(param: str) -> Optional[Tag]:
    """
    Decode a URL query value produced by tag_to_url_param.

    The label is rebuilt from the slug by title-casing each word, so it only
    matches the original label for plain alphanumeric labels.

    Returns:
        Tag, or None if the category is unknown or either part is missing
    """
    category_value, _, slug = (param or "").partition(":")
    if not category_value or not slug:
        return None

    categories: Dict[str, TagCategory] = {c.value: c for c in TagCategory}
    if category_value not in categories:
        return None

    label = re.sub(r"\b\w", lambda m: m.group().upper(), slug.replace("-", " "))
    return Tag(label, categories[category_value])
