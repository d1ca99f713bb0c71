"""
Markup stripping and text normalization for the Intake context.

Stage 1 of description parsing: turns raw HTML (or HTML-ish plain text) into
markup-free text while keeping paragraph boundaries as blank lines. The same
stripping backs the card preview, which flattens everything to one line.

Design principle: normalize BEFORE segmenting. Block classification only ever
sees plain text with predictable whitespace.
"""

import re
import unicodedata
import warnings

from bs4 import BeautifulSoup, Comment, MarkupResemblesLocatorWarning

from careerboard.contexts.intake.block_patterns import contains_markup
from careerboard.utils.text_processing import set_max_consecutive_blank_lines

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

PREVIEW_ELLIPSIS = "…"

# Entities translated to literal characters in plain text. Markup is decoded
# by the HTML parser instead. &amp; goes last so that "&amp;lt;" decodes to
# "&lt;" rather than "<".
ENTITY_REPLACEMENTS = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&apos;", "'"),
    ("&lsquo;", "‘"),
    ("&rsquo;", "’"),
    ("&ldquo;", "“"),
    ("&rdquo;", "”"),
    ("&amp;", "&"),
)

# Unicode replacements: problematic char → replacement
UNICODE_REPLACEMENTS = {
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
}

# =============================================================================
# MARKUP TAG TABLES
# =============================================================================

# Removed with everything inside them: code, document metadata and embedded media
DROPPED_TAGS = (
    "script",
    "style",
    "noscript",
    "template",
    "head",
    "meta",
    "link",
    "img",
    "picture",
    "video",
    "audio",
    "iframe",
    "object",
    "embed",
    "svg",
    "canvas",
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
LIST_TAGS = ("ul", "ol")

# Elements that end the current paragraph
BLOCK_TAGS = frozenset(
    {
        "html",
        "body",
        "main",
        "p",
        "div",
        "section",
        "article",
        "header",
        "footer",
        "aside",
        "nav",
        "blockquote",
        "pre",
        "address",
        "figure",
        "figcaption",
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "td",
        "th",
        "dl",
        "dt",
        "dd",
        "hr",
    }
)

_PARAGRAPH_BREAK_TAGS = sorted(BLOCK_TAGS.union(HEADING_TAGS, LIST_TAGS))
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that confuse line classification.

    Applies NFKC normalization, then removes zero-width characters and turns
    non-breaking spaces into plain spaces. Curly quotes and bullet glyphs are
    kept as they are.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def translate_entities(text: str) -> str:
    """Replace the supported HTML entities with literal characters."""
    for entity, literal in ENTITY_REPLACEMENTS:
        text = text.replace(entity, literal)
    return text


def collapse_line_whitespace(text: str) -> str:
    """
    Collapse whitespace inside each line and cap blank-line runs at one.

    Args:
        text: Multi-line text

    Returns:
        Text whose lines are trimmed and single-spaced, with no run of
        3+ newlines, trimmed at both ends
    """
    lines = [_INLINE_WHITESPACE.sub(" ", line).strip() for line in text.split("\n")]
    return set_max_consecutive_blank_lines("\n".join(lines), max_consecutive=1).strip()


def strip_markup(raw: str) -> str:
    """
    Convert raw markup into plain text that keeps paragraph structure.

    Markup goes through the HTML parser: DROPPED_TAGS elements and comments
    are removed with their content, block boundaries become blank lines,
    <br> and <li> boundaries become line breaks, and entities are decoded
    once by the parser. Text without tags only gets ENTITY_REPLACEMENTS.

    Args:
        raw: HTML or plain text (None is treated as empty)

    Returns:
        Markup-free text with at most one blank line between paragraphs

    Example:
        >>> strip_markup("<p>Fish &amp; chips</p><p>Second</p>")
        'Fish & chips\\n\\nSecond'
    """
    if not raw:
        return ""

    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = markup_to_text(text) if contains_markup(text) else translate_entities(text)

    return collapse_line_whitespace(normalize_unicode(text))


def markup_to_text(markup: str) -> str:
    """Parse HTML and return its text with newlines at line and block boundaries."""
    soup = BeautifulSoup(markup, "html.parser")

    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()
    for tag in soup.find_all(list(DROPPED_TAGS)):
        # Children of an already removed element are removed with it
        if not tag.decomposed:
            tag.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")
    for item in soup.find_all("li"):
        item.insert_before("\n")
        item.insert_after("\n")
    for tag in soup.find_all(_PARAGRAPH_BREAK_TAGS):
        tag.insert_before("\n\n")
        tag.insert_after("\n\n")

    return soup.get_text()


def extract_clean_text_preview(raw: str, max_length: int = 200) -> str:
    """
    Produce a single-line, markup-free preview for job cards.

    Structure is discarded entirely: all whitespace collapses to single
    spaces. When the text is longer than max_length it is cut, trailing
    whitespace is removed and "…" is appended, so the result is never longer
    than max_length + 1 characters.

    Args:
        raw: HTML or plain-text description
        max_length: Maximum number of text characters kept

    Returns:
        Preview string, empty for empty input or a non-positive max_length
    """
    if not raw or max_length <= 0:
        return ""

    flattened = " ".join(strip_markup(raw).split())

    if len(flattened) <= max_length:
        return flattened

    return flattened[:max_length].rstrip() + PREVIEW_ELLIPSIS


def has_structured_content(raw: str) -> bool:
    """
    Check whether raw markup carries explicit structure.

    Args:
        raw: Raw description

    Returns:
        True if it contains heading tags, list tags or classed divs
    """
    if not raw:
        return False

    return bool(
        re.search(r"<h[1-6][^>]*>", raw, re.IGNORECASE)
        or re.search(r"<[uo]l[^>]*>", raw, re.IGNORECASE)
        or re.search(r"<div[^>]*class[^>]*>", raw, re.IGNORECASE)
    )


def format_content_for_display(content: str) -> str:
    """Trim every line and drop empty ones."""
    if not content:
        return ""
    return "\n".join(line.strip() for line in content.split("\n") if line.strip())
