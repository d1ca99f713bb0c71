"""
Semantic section extraction for parsed job descriptions.

Walks the block sequence once. A header that matches a section keyword set
opens that section and is consumed as its label; the blocks after it are
routed into the section until the next header. Everything that cannot be
routed (unmatched headers and their content, preamble before the first
header, paragraphs under list sections) is rendered into `other`.
"""

from typing import Optional

from careerboard.contexts.intake.block_patterns import match_job_section
from careerboard.contexts.intake.content_data_structure import (
    JobSections,
    ParsedContent,
    TextBlock,
)
from careerboard.contexts.intake.logger import _log_debug

LIST_SECTIONS = ("responsibilities", "requirements", "benefits")


def extract_job_sections(content: ParsedContent) -> JobSections:
    """
    Re-derive about/responsibilities/requirements/benefits from blocks.

    Routing per block:
    - matched header: opens its section, not copied anywhere
    - unmatched header: closes the current section, rendered into other
    - list under a list section: items extend that section
    - paragraph under a list section: rendered into other
    - paragraph or list under about: appended to about
    - anything outside a matched section: rendered into other

    If the content has no headers at all, other is the clean text verbatim.

    Args:
        content: Result of parse_job_description()

    Returns:
        JobSections covering every block exactly once
    """
    sections = JobSections()

    if not content.has_structure:
        sections.other = content.clean_text
        return sections

    about_parts: list[str] = []
    other_parts: list[str] = []
    current: Optional[str] = None

    for block in content.blocks:
        if block.is_header:
            current = match_job_section(block.text)
            if current is None:
                other_parts.append(block.render())
            continue

        if current is None:
            other_parts.append(block.render())
        elif current == "about":
            about_parts.append(block.render())
        elif block.is_list:
            getattr(sections, current).extend(block.items)
        else:
            other_parts.append(block.render())

    sections.about = "\n\n".join(about_parts)
    sections.other = "\n\n".join(other_parts)

    _log_debug(
        f"Sections: about={len(sections.about)} chars, "
        f"responsibilities={len(sections.responsibilities)}, "
        f"requirements={len(sections.requirements)}, "
        f"benefits={len(sections.benefits)}, other={len(sections.other)} chars"
    )
    return sections


def section_of(block: TextBlock) -> Optional[str]:
    """Section a header block opens, or None for non-headers and unmatched headers."""
    return match_job_section(block.text) if block.is_header else None
