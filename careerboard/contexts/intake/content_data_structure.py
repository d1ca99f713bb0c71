"""
Data structures for parsed job-description content.

The block parser produces ParsedContent; section extraction consumes it and
produces JobSections. Everything here is immutable except JobSections, which
is filled in incrementally by the extractor.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional, Union

LIST_ITEM_PREFIX = "• "


class BlockKind(str, Enum):
    """Kind of a content block."""

    HEADER = "header"
    PARAGRAPH = "paragraph"
    LIST = "list"


class ListStyle(str, Enum):
    """Marker style of a list block."""

    BULLET = "bullet"
    NUMBER = "number"


@dataclass(frozen=True)
class BlockMetadata:
    """
    Optional facts recovered from the source formatting.

    Attributes:
        level: Heading level 1-6, only for headers taken from h1-h6 tags
        is_strong: True for headers recovered from a bold-only paragraph
        list_style: Marker style, only for list blocks
    """

    level: Optional[int] = None
    is_strong: bool = False
    list_style: Optional[ListStyle] = None


@dataclass(frozen=True)
class TextBlock:
    """
    One header, paragraph or list of a job description.

    Headers and paragraphs carry a string; lists carry a tuple of item
    strings. Use the make_* constructors rather than building blocks directly.
    """

    kind: BlockKind
    content: Union[str, tuple]
    metadata: BlockMetadata = field(default_factory=BlockMetadata)

    @classmethod
    def make_header(cls, text: str, level: Optional[int] = None, is_strong: bool = False) -> "TextBlock":
        return cls(BlockKind.HEADER, text, BlockMetadata(level=level, is_strong=is_strong))

    @classmethod
    def make_paragraph(cls, text: str) -> "TextBlock":
        return cls(BlockKind.PARAGRAPH, text)

    @classmethod
    def make_list(cls, items, style: ListStyle = ListStyle.BULLET) -> "TextBlock":
        return cls(BlockKind.LIST, tuple(items), BlockMetadata(list_style=style))

    @property
    def is_header(self) -> bool:
        return self.kind is BlockKind.HEADER

    @property
    def is_paragraph(self) -> bool:
        return self.kind is BlockKind.PARAGRAPH

    @property
    def is_list(self) -> bool:
        return self.kind is BlockKind.LIST

    @property
    def items(self) -> tuple:
        """List items, or an empty tuple for non-list blocks."""
        return self.content if self.is_list else ()

    @property
    def text(self) -> str:
        """Header or paragraph text, or an empty string for list blocks."""
        return "" if self.is_list else self.content

    def render(self) -> str:
        """Render the block the way it appears in clean text."""
        if self.is_list:
            return "\n".join(f"{LIST_ITEM_PREFIX}{item}" for item in self.content)
        return self.content


@dataclass(frozen=True)
class ParsedContent:
    """
    Result of parsing one job description.

    Attributes:
        clean_text: Flattened text, blocks separated by one blank line
        blocks: Blocks after paragraph re-classification
        has_structure: True iff at least one block is a header
        raw_blocks: Blocks as read from the source, before re-classification
    """

    clean_text: str
    blocks: tuple = ()
    has_structure: bool = False
    raw_blocks: tuple = ()

    @classmethod
    def empty(cls) -> "ParsedContent":
        return cls("", (), False, ())

    @property
    def headers(self) -> list[TextBlock]:
        return [block for block in self.blocks if block.is_header]

    @property
    def lists(self) -> list[TextBlock]:
        return [block for block in self.blocks if block.is_list]

    @property
    def paragraphs(self) -> list[TextBlock]:
        return [block for block in self.blocks if block.is_paragraph]


@dataclass
class JobSections:
    """
    Semantic sections re-derived from parsed content.

    Every block of the source ParsedContent lands in exactly one field;
    recognised section headers are consumed as labels.
    """

    about: str = ""
    responsibilities: list[str] = field(default_factory=list)
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    other: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    def is_empty(self) -> bool:
        return not (
            self.about or self.responsibilities or self.requirements or self.benefits or self.other
        )
