"""
Job description block parser for the Intake context.

Turns arbitrary HTML or plain-text job descriptions into ordered header,
paragraph and list blocks plus a flattened clean-text rendering.

Pipeline:
1. Markup input is walked as a DOM (markup_reader); plain text is stripped
   (normalizer.strip_markup) and split into blank-line chunks.
2. Every paragraph candidate is re-classified line by line (classify_chunk):
   it may turn out to be a header, a bullet or numbered list, or a header
   followed by a list.
3. Blocks are rendered back into clean text.

Pattern follows the parser/data-structure split: this module produces
ParsedContent, section_extractor consumes it.
"""

import re
from typing import Optional

from careerboard.contexts.intake.block_patterns import (
    BlockThresholds,
    LinePatterns,
    contains_markup,
    is_header,
    match_bullet,
    match_numbered,
)
from careerboard.contexts.intake.content_data_structure import (
    ListStyle,
    ParsedContent,
    TextBlock,
)
from careerboard.contexts.intake.logger import _log_debug
from careerboard.contexts.intake.markup_reader import read_markup_blocks
from careerboard.contexts.intake.normalizer import strip_markup
from careerboard.utils.text_processing import set_max_consecutive_blank_lines

_CHUNK_BREAK = re.compile(LinePatterns.CHUNK_BREAK)


def split_chunks(text: str) -> list[list[str]]:
    """
    Split plain text into blank-line separated chunks of trimmed lines.

    Args:
        text: Markup-free text

    Returns:
        One list of non-empty, trimmed lines per chunk (empty chunks dropped)
    """
    chunks = []
    for chunk in _CHUNK_BREAK.split(text):
        lines = [line.strip() for line in chunk.split("\n") if line.strip()]
        if lines:
            chunks.append(lines)
    return chunks


def detect_list(lines: list[str], min_lines: int = 2) -> Optional[TextBlock]:
    """
    Recognise a group of lines as a bullet or numbered list.

    At least 60% of the lines must carry the same kind of marker. Markers are
    stripped from the lines that have one; other lines become items verbatim.

    Args:
        lines: Trimmed, non-empty lines
        min_lines: Fewest lines that may form a list

    Returns:
        List block, or None if the lines do not read as a list
    """
    if len(lines) < min_lines:
        return None

    threshold = len(lines) * BlockThresholds.LIST_LINE_RATIO

    for matcher, style in ((match_bullet, ListStyle.BULLET), (match_numbered, ListStyle.NUMBER)):
        matched = [matcher(line) for line in lines]
        if sum(item is not None for item in matched) >= threshold:
            items = [item if item is not None else line for item, line in zip(matched, lines)]
            return TextBlock.make_list(items, style)

    return None


def classify_chunk(lines: list[str], depth: int = 0) -> list[TextBlock]:
    """
    Classify one chunk of lines into blocks.

    Rules, in order:
    - a single line is a header if it passes is_header(), else a paragraph
    - a header first line with more lines after it becomes a header block,
      and the rest is classified again as list or paragraph only
    - lines that are mostly bullets or mostly numbered become a list
    - anything else is one paragraph with lines joined by spaces

    Recursion happens at most once (BlockThresholds.MAX_SEGMENT_DEPTH), so a
    pathological run of header-like lines cannot nest.

    Args:
        lines: Trimmed, non-empty lines of the chunk
        depth: Current recursion depth

    Returns:
        Blocks for the chunk in order
    """
    if not lines:
        return []

    splittable = depth < BlockThresholds.MAX_SEGMENT_DEPTH

    if splittable and len(lines) == 1:
        line = lines[0]
        return [TextBlock.make_header(line) if is_header(line) else TextBlock.make_paragraph(line)]

    if splittable and is_header(lines[0]):
        return [TextBlock.make_header(lines[0])] + classify_chunk(lines[1:], depth + 1)

    # Below a split-off header a single bullet line still counts as a list
    listed = detect_list(lines, min_lines=2 if splittable else 1)
    if listed is not None:
        return [listed]

    return [TextBlock.make_paragraph(" ".join(lines))]


def segment_text(text: str) -> list[TextBlock]:
    """Split text into chunks and classify each one."""
    blocks = []
    for lines in split_chunks(text):
        blocks.extend(classify_chunk(lines))
    return blocks


def refine_blocks(raw_blocks: list[TextBlock]) -> list[TextBlock]:
    """
    Re-classify paragraph candidates; headers and lists pass through.

    Args:
        raw_blocks: Blocks as read from the source

    Returns:
        Final block sequence
    """
    blocks = []
    for block in raw_blocks:
        if block.is_paragraph:
            blocks.extend(segment_text(block.text))
        else:
            blocks.append(block)
    return blocks


def assemble_clean_text(blocks: list[TextBlock]) -> str:
    """
    Render blocks as clean text.

    Headers and paragraphs render as their text, list items as "• item"
    lines; blocks are separated by one blank line and no run of more than
    two newlines survives.
    """
    text = "\n\n".join(block.render() for block in blocks)
    return set_max_consecutive_blank_lines(text, max_consecutive=1).strip()


def parse_job_description(raw: Optional[str]) -> ParsedContent:
    """
    Parse a raw job description into structured content.

    Never raises for string or None input: empty input yields an empty
    ParsedContent with has_structure False.

    Args:
        raw: HTML or plain-text description

    Returns:
        ParsedContent with clean text, refined blocks, raw blocks and the
        structure flag

    Example:
        >>> parsed = parse_job_description("<ul><li>Item 1</li><li>Item 2</li></ul>")
        >>> parsed.blocks[0].items
        ('Item 1', 'Item 2')
        >>> parsed.clean_text
        '• Item 1\\n• Item 2'
    """
    if not raw or not raw.strip():
        return ParsedContent.empty()

    if contains_markup(raw):
        raw_blocks = read_markup_blocks(raw)
    else:
        raw_blocks = [
            TextBlock.make_paragraph("\n".join(lines)) for lines in split_chunks(strip_markup(raw))
        ]

    blocks = refine_blocks(raw_blocks)
    has_structure = any(block.is_header for block in blocks)

    _log_debug(
        f"Parsed {len(blocks)} blocks ({len(raw_blocks)} raw), "
        f"structure={'yes' if has_structure else 'no'}"
    )

    return ParsedContent(
        clean_text=assemble_clean_text(blocks),
        blocks=tuple(blocks),
        has_structure=has_structure,
        raw_blocks=tuple(raw_blocks),
    )
