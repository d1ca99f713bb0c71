"""
Intake Context

Responsibilities:
- Strips markup from raw job descriptions (HTML or plain text)
- Segments descriptions into header, paragraph and list blocks
- Re-derives about/responsibilities/requirements/benefits sections
- Produces single-line card previews

Owns: Job description block parsing logic
Never: Normalizes filter values or builds tags (see faceting context)
"""

from careerboard.contexts.intake.block_parser import classify_chunk, parse_job_description
from careerboard.contexts.intake.block_patterns import is_header
from careerboard.contexts.intake.content_data_structure import (
    BlockKind,
    BlockMetadata,
    JobSections,
    ListStyle,
    ParsedContent,
    TextBlock,
)
from careerboard.contexts.intake.normalizer import (
    extract_clean_text_preview,
    format_content_for_display,
    has_structured_content,
    strip_markup,
)
from careerboard.contexts.intake.section_extractor import extract_job_sections

__all__ = [
    "BlockKind",
    "BlockMetadata",
    "JobSections",
    "ListStyle",
    "ParsedContent",
    "TextBlock",
    "classify_chunk",
    "extract_clean_text_preview",
    "extract_job_sections",
    "format_content_for_display",
    "has_structured_content",
    "is_header",
    "parse_job_description",
    "strip_markup",
]
