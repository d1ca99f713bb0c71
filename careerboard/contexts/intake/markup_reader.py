"""
DOM walk that turns HTML job descriptions into raw content blocks.

Headings and lists come straight from the markup. Everything else (p/div
text, loose inline text, <br>-separated lines) is gathered into paragraph
candidates that the block parser re-classifies afterwards. No text is lost:
inline text sitting between block elements is flushed as its own candidate.
"""

import re

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from careerboard.contexts.intake.block_patterns import BlockThresholds, match_bullet
from careerboard.contexts.intake.content_data_structure import (
    LIST_ITEM_PREFIX,
    ListStyle,
    TextBlock,
)
from careerboard.contexts.intake.logger import _log_debug
from careerboard.contexts.intake.normalizer import (
    BLOCK_TAGS,
    DROPPED_TAGS,
    HEADING_TAGS,
    LIST_TAGS,
    collapse_line_whitespace,
    normalize_unicode,
)

BOLD_TAGS = ("strong", "b")

_WHITESPACE = re.compile(r"\s+")


def _is_text(node) -> bool:
    # Comments, doctypes and CDATA are PreformattedString subclasses
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", normalize_unicode(text)).strip()


def _own_text(tag: Tag) -> str:
    """Text of a tag, skipping nested lists. <br> and block children are space separated."""
    parts = []
    for child in tag.children:
        if isinstance(child, Tag):
            if child.name in LIST_TAGS or child.name in DROPPED_TAGS:
                continue
            if child.name == "br":
                parts.append(" ")
            elif child.name in BLOCK_TAGS or child.name in HEADING_TAGS:
                parts.append(f" {_own_text(child)} ")
            else:
                parts.append(_own_text(child))
        elif _is_text(child):
            parts.append(str(child))
    return "".join(parts)


class _BlockCollector:
    """
    Accumulates raw blocks while walking a parsed document.

    Inline text is buffered in _pending until a block boundary flushes it
    into a paragraph candidate.
    """

    def __init__(self):
        self.blocks: list[TextBlock] = []
        self._pending: list[str] = []

    def flush(self) -> None:
        if not self._pending:
            return
        text = collapse_line_whitespace(normalize_unicode("".join(self._pending)))
        self._pending = []
        if text:
            self.blocks.append(TextBlock.make_paragraph(text))

    def visit(self, node) -> None:
        if isinstance(node, Tag):
            name = (node.name or "").lower()
            if name in DROPPED_TAGS:
                return
            if name == "br":
                self._pending.append("\n")
            elif name in HEADING_TAGS:
                self._add_heading(node, int(name[1]))
            elif name in LIST_TAGS:
                self._add_list(node)
            elif name == "li":
                self._add_stray_item(node)
            elif name in BLOCK_TAGS:
                self._visit_block(node)
            else:
                for child in node.children:
                    self.visit(child)
        elif _is_text(node):
            # Source newlines are layout, not content
            self._pending.append(_WHITESPACE.sub(" ", str(node)))

    def _visit_block(self, tag: Tag) -> None:
        self.flush()

        if _is_bold_only(tag):
            self.blocks.append(TextBlock.make_header(_collapse(tag.get_text()), is_strong=True))
            return

        for child in tag.children:
            self.visit(child)
        self.flush()

    def _add_heading(self, tag: Tag, level: int) -> None:
        self.flush()
        text = _collapse(_own_text(tag))
        if text:
            self.blocks.append(TextBlock.make_header(text, level=level))

    def _add_list(self, tag: Tag) -> None:
        self.flush()
        items: list[str] = []
        _collect_items(tag, items)
        if items:
            style = ListStyle.NUMBER if tag.name == "ol" else ListStyle.BULLET
            self.blocks.append(TextBlock.make_list(items, style))

    def _add_stray_item(self, tag: Tag) -> None:
        # <li> outside any list: keep it as a bullet line so neighbours group into a list
        text = _collapse(_own_text(tag))
        if text:
            if not "".join(self._pending).rstrip(" ").endswith("\n"):
                self._pending.append("\n")
            self._pending.append(f"{LIST_ITEM_PREFIX}{text}\n")
        for nested in tag.find_all(list(LIST_TAGS), recursive=False):
            self._add_list(nested)


def _is_bold_only(tag: Tag) -> bool:
    """True if all text of the block sits inside a single bold element."""
    if tag.find(list(HEADING_TAGS + LIST_TAGS)) is not None:
        return False

    text = _collapse(tag.get_text())
    if not text or len(text) >= BlockThresholds.STRONG_HEADER_MAX_LENGTH:
        return False

    bold = tag.find(list(BOLD_TAGS))
    return bold is not None and _collapse(bold.get_text()) == text


def _collect_items(container: Tag, items: list[str]) -> None:
    """
    Flatten list items of a ul/ol, nested lists included, in document order.

    Each item contributes only its own text; nested items are collected
    separately so no text appears twice.
    """
    for child in container.children:
        if isinstance(child, Tag):
            if child.name in DROPPED_TAGS:
                continue
            if child.name in LIST_TAGS:
                _collect_items(child, items)
                continue
            if child.name == "li" or container.name in LIST_TAGS:
                text = _collapse(_own_text(child))
                if text:
                    # Some boards type the bullet glyph into the item as well
                    items.append(match_bullet(text) or text)
            _collect_items(child, items)
        elif _is_text(child) and container.name in LIST_TAGS:
            text = _collapse(str(child))
            if text:
                items.append(match_bullet(text) or text)


def read_markup_blocks(markup: str) -> list[TextBlock]:
    """
    Parse HTML into raw content blocks.

    Args:
        markup: HTML job description

    Returns:
        Header and list blocks taken from the markup plus paragraph
        candidates (possibly multi-line) in document order
    """
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(list(DROPPED_TAGS)):
        # Children of an already removed element are removed with it
        if not tag.decomposed:
            tag.decompose()

    collector = _BlockCollector()
    for child in soup.children:
        collector.visit(child)
    collector.flush()

    _log_debug(f"Read {len(collector.blocks)} raw blocks from markup")
    return collector.blocks
