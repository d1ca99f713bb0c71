"""
Pattern matching for job-description block and section classification.

This module holds the regexes and thresholds the block parser uses to decide
whether a line is a header, a bullet or a numbered item, and the keyword sets
that map header text onto job sections.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# LINE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LinePatterns:
    """
    Regex patterns applied to single trimmed lines.
    """

    # Bullet glyph followed by whitespace: "• item", "- item", "▸ item"
    BULLET_LINE: str = r"^[•\-\*\+▪◦▸▹●○]\s+(.+)$"

    # "1. item" / "2) item"
    NUMBERED_LINE: str = r"^\d+[.)]\s+(.+)$"

    # Anything that looks like an opening, closing, comment or doctype tag
    MARKUP_TAG: str = r"<[a-zA-Z!/][^>]*>"

    # Blank-line boundary between chunks
    CHUNK_BREAK: str = r"\n[^\S\n]*\n"


@dataclass(frozen=True)
class BlockThresholds:
    """
    Numeric limits for the block heuristics.
    """

    HEADER_MIN_LENGTH: int = 3
    HEADER_MAX_LENGTH: int = 100

    # All-caps lines shorter than this are too likely to be acronyms
    CAPS_HEADER_MIN_LENGTH: int = 4

    # Fraction of lines that must carry a marker for a chunk to become a list
    LIST_LINE_RATIO: float = 0.6

    # Bold-only paragraphs at or above this length stay paragraphs
    STRONG_HEADER_MAX_LENGTH: int = 100

    # A header line may split off the rest of its chunk only once
    MAX_SEGMENT_DEPTH: int = 1


# =============================================================================
# HEADER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SectionHeadingPatterns:
    """
    Known section-name phrasings that mark a line as a header.

    Each pattern must match the whole line (an optional trailing colon is
    allowed), so sentences that merely start with "We offer ..." stay
    paragraphs. English only; collected from real listings.
    """

    HEADINGS: tuple = (
        r"about(?: (?:the|our|this))?(?: [\w&.'-]+){0,2}",
        r"(?:key |core |primary |your )?responsibilities",
        r"(?:minimum |basic |required |preferred |key )?(?:requirements|qualifications)",
        r"(?:perks (?:and|&) )?benefits(?: (?:and|&) perks)?",
        r"compensation(?: (?:and|&) benefits)?",
        r"(?:our|the) (?:team|mission|culture|company|values|story)",
        r"what (?:you'?ll|you will) (?:do|bring|need|learn)",
        r"what (?:we offer|you bring|we'?re looking for|we look for)",
        r"we offer",
        r"who (?:we are|you are)",
        r"(?:job |role |position )(?:overview|summary|description)",
        r"overview|summary",
        r"(?:the |your )?(?:role|opportunity)",
        r"in this role",
        r"nice to haves?",
        r"(?:preferred |required )?skills(?: (?:and|&) experience)?",
        r"why (?:join|work with) us",
        r"how to apply",
    )


# =============================================================================
# SECTION KEYWORDS
# =============================================================================


@dataclass(frozen=True)
class SectionKeywords:
    """
    Case-insensitive substrings that assign a header to a job section.

    Sections are tested in declaration order; the first hit wins, so
    "About the Role" lands in about even though "role" is a
    responsibilities keyword.
    """

    ABOUT: tuple = ("about", "company", "overview", "who we are", "our mission")

    RESPONSIBILITIES: tuple = (
        "responsibilities",
        "what you'll do",
        "what you will do",
        "duties",
        "role",
        "you will",
        "your role",
        "day to day",
        "key responsibilities",
        "in this role",
    )

    REQUIREMENTS: tuple = (
        "requirements",
        "qualifications",
        "what you bring",
        "skills",
        "experience",
        "what we're looking for",
        "ideal candidate",
        "you have",
        "minimum requirements",
        "must have",
    )

    BENEFITS: tuple = (
        "benefits",
        "what we offer",
        "compensation",
        "perks",
        "why join",
        "package",
        "rewards",
    )


# Ordered section name -> keywords
SECTION_KEYWORDS = {
    "about": list(SectionKeywords.ABOUT),
    "responsibilities": list(SectionKeywords.RESPONSIBILITIES),
    "requirements": list(SectionKeywords.REQUIREMENTS),
    "benefits": list(SectionKeywords.BENEFITS),
}

_BULLET_RE = re.compile(LinePatterns.BULLET_LINE)
_NUMBERED_RE = re.compile(LinePatterns.NUMBERED_LINE)
_MARKUP_RE = re.compile(LinePatterns.MARKUP_TAG)
_HEADING_RES = tuple(
    re.compile(rf"^(?:{pattern})\s*:?$", re.IGNORECASE)
    for pattern in SectionHeadingPatterns.HEADINGS
)

# Curly apostrophes are common in pasted listings ("What You’ll Do")
_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'"})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def contains_markup(text: str) -> bool:
    """Return True if text contains at least one HTML tag."""
    return bool(text) and _MARKUP_RE.search(text) is not None


def match_bullet(line: str) -> Optional[str]:
    """
    Return the item text of a bullet-prefixed line, or None.

    Args:
        line: Single trimmed line

    Returns:
        Text after the bullet glyph, or None if the line has no bullet
    """
    match = _BULLET_RE.match(line)
    return match.group(1).strip() if match else None


def match_numbered(line: str) -> Optional[str]:
    """Return the item text of a "1." / "1)" line, or None."""
    match = _NUMBERED_RE.match(line)
    return match.group(1).strip() if match else None


def is_header(line: str) -> bool:
    """
    Decide whether a single line reads as a section header.

    A line qualifies when it is 3-100 characters long, is not a list item,
    and either ends with a colon or an ellipsis, is written in all caps
    (4+ characters), or matches one of the known section phrasings.

    Args:
        line: Candidate line

    Returns:
        True if the line should become a header block
    """
    text = line.strip()

    if not (BlockThresholds.HEADER_MIN_LENGTH <= len(text) <= BlockThresholds.HEADER_MAX_LENGTH):
        return False

    if match_bullet(text) is not None or match_numbered(text) is not None:
        return False

    if text.endswith(":") or text.endswith("...") or text.endswith("…"):
        return True

    if (
        len(text) >= BlockThresholds.CAPS_HEADER_MIN_LENGTH
        and text == text.upper()
        and any(char.isalpha() for char in text)
    ):
        return True

    normalized = text.translate(_APOSTROPHES)
    return any(pattern.match(normalized) for pattern in _HEADING_RES)


def normalize_header_text(text: str) -> str:
    """Lowercase, straighten apostrophes and collapse whitespace for keyword matching."""
    return re.sub(r"\s+", " ", text.translate(_APOSTROPHES).lower()).strip()


def match_job_section(header_text: str) -> Optional[str]:
    """
    Map header text onto a job section by keyword substring.

    Args:
        header_text: Text of a header block

    Returns:
        One of "about", "responsibilities", "requirements", "benefits",
        or None if no keyword matches
    """
    normalized = normalize_header_text(header_text)
    for section, keywords in SECTION_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            return section
    return None
