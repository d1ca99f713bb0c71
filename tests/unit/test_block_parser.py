"""Unit tests for job description block parsing."""

import pytest

from careerboard.contexts.intake.block_parser import (
    classify_chunk,
    detect_list,
    parse_job_description,
    split_chunks,
)
from careerboard.contexts.intake.content_data_structure import (
    BlockKind,
    ListStyle,
    ParsedContent,
    TextBlock,
)


@pytest.mark.unit
class TestEmptyInput:
    """Empty and whitespace-only descriptions."""

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n\n\t"])
    def test_empty_input_yields_empty_content(self, raw):
        """Blank input parses to no blocks, no text and no structure."""
        assert parse_job_description(raw) == ParsedContent("", (), False)

    def test_markup_without_text(self):
        """Markup that holds no visible text yields no blocks."""
        parsed = parse_job_description("<div><script>var x = 1;</script></div>")
        assert parsed.blocks == ()
        assert parsed.clean_text == ""
        assert parsed.has_structure is False


@pytest.mark.unit
class TestMarkupParsing:
    """HTML descriptions."""

    def test_paragraphs_become_paragraph_blocks(self):
        """Three <p> elements give three paragraphs separated by blank lines."""
        parsed = parse_job_description("<p>Paragraph 1</p><p>Paragraph 2</p><p>Paragraph 3</p>")

        assert [block.kind for block in parsed.blocks] == [BlockKind.PARAGRAPH] * 3
        assert [block.text for block in parsed.blocks] == ["Paragraph 1", "Paragraph 2", "Paragraph 3"]
        assert parsed.clean_text == "Paragraph 1\n\nParagraph 2\n\nParagraph 3"
        assert parsed.has_structure is False

    def test_unordered_list(self):
        """A <ul> becomes one bullet list block."""
        parsed = parse_job_description("<ul><li>Item 1</li><li>Item 2</li></ul>")

        assert len(parsed.blocks) == 1
        block = parsed.blocks[0]
        assert block.is_list
        assert block.items == ("Item 1", "Item 2")
        assert block.metadata.list_style == "bullet"
        assert "• Item 1" in parsed.clean_text
        assert "• Item 2" in parsed.clean_text

    def test_ordered_list_is_numbered(self):
        """An <ol> becomes a numbered list block."""
        parsed = parse_job_description("<ol><li>First</li><li>Second</li></ol>")
        assert parsed.blocks[0].metadata.list_style is ListStyle.NUMBER

    def test_bold_paragraph_becomes_strong_header(self):
        """A paragraph whose only text is bold is a header."""
        parsed = parse_job_description("<p><strong>Responsibilities</strong></p><p>Do things</p>")

        header, paragraph = parsed.blocks
        assert header.is_header
        assert header.text == "Responsibilities"
        assert header.metadata.is_strong is True
        assert paragraph.is_paragraph
        assert paragraph.text == "Do things"
        assert parsed.has_structure is True

    def test_heading_tags_keep_level(self):
        """h1-h6 headers record their level."""
        parsed = parse_job_description("<h1>Product Manager</h1><h4>Benefits</h4>")
        assert [block.metadata.level for block in parsed.blocks] == [1, 4]

    def test_line_breaks_split_header_from_list(self):
        """A <br>-separated paragraph is re-classified line by line."""
        parsed = parse_job_description(
            "<p>Key Responsibilities:<br>• Ship features<br>• Talk to users</p>"
        )

        header, listed = parsed.blocks
        assert header.text == "Key Responsibilities:"
        assert listed.items == ("Ship features", "Talk to users")

    def test_raw_blocks_keep_candidates_before_refinement(self):
        """raw_blocks holds the paragraph candidate, blocks holds the result."""
        parsed = parse_job_description("<p>Line one<br>Line two</p>")

        assert len(parsed.raw_blocks) == 1
        assert parsed.raw_blocks[0].text == "Line one\nLine two"
        assert parsed.blocks == (TextBlock.make_paragraph("Line one Line two"),)

    def test_entities_decoded(self):
        """Entities never reach the clean text."""
        parsed = parse_job_description("<p>Fish &amp; chips &lt;daily&gt;</p>")
        assert parsed.clean_text == "Fish & chips <daily>"


@pytest.mark.unit
class TestPlainTextParsing:
    """Plain-text descriptions."""

    def test_header_then_bullets(self):
        """A chunk with a header line followed by bullets splits in two."""
        parsed = parse_job_description("Requirements:\n- Python\n- SQL\n- Communication")

        header, listed = parsed.blocks
        assert header.text == "Requirements:"
        assert listed.items == ("Python", "SQL", "Communication")
        assert listed.metadata.list_style is ListStyle.BULLET

    def test_numbered_list(self):
        """Numbered lines form a numbered list."""
        parsed = parse_job_description("1. Discover\n2. Define\n3. Deliver")

        assert len(parsed.blocks) == 1
        assert parsed.blocks[0].items == ("Discover", "Define", "Deliver")
        assert parsed.blocks[0].metadata.list_style is ListStyle.NUMBER

    def test_plain_lines_join_into_paragraph(self):
        """Lines without markers join with spaces."""
        parsed = parse_job_description("We build tools\nfor product teams.")
        assert parsed.blocks == (TextBlock.make_paragraph("We build tools for product teams."),)

    def test_no_triple_newlines(self):
        """Clean text never contains more than one blank line in a row."""
        parsed = parse_job_description("First\n\n\n\n\nSecond\n\n\n\nTHIRD SECTION\n\n\nFourth")
        assert "\n\n\n" not in parsed.clean_text
        assert parsed.clean_text.startswith("First\n\nSecond")

    def test_block_text_is_conserved(self):
        """Every word of the input appears in the clean text."""
        raw = "About Us\nWe make maps.\n\nBenefits:\n- Dental\n- Vision"
        parsed = parse_job_description(raw)

        for word in ("About", "Us", "We", "make", "maps.", "Benefits:", "Dental", "Vision"):
            assert word in parsed.clean_text


@pytest.mark.unit
class TestClassifyChunk:
    """Chunk classification rules."""

    def test_single_header_line(self):
        assert classify_chunk(["BENEFITS"]) == [TextBlock.make_header("BENEFITS")]

    def test_single_paragraph_line(self):
        assert classify_chunk(["We ship weekly."]) == [TextBlock.make_paragraph("We ship weekly.")]

    def test_mostly_numbered_lines(self):
        """60% of lines with a marker is enough; unmarked lines stay verbatim."""
        blocks = classify_chunk(["1. First", "2. Second", "Third"])
        assert blocks == [TextBlock.make_list(["First", "Second", "Third"], ListStyle.NUMBER)]

    def test_header_split_happens_once(self):
        """A second header-like line below a split-off header is not split again."""
        blocks = classify_chunk(["Requirements:", "Skills:", "- SQL"])

        assert blocks == [
            TextBlock.make_header("Requirements:"),
            TextBlock.make_paragraph("Skills: - SQL"),
        ]

    def test_single_bullet_under_header_is_list(self):
        """Below a header, one bullet line is already a list."""
        blocks = classify_chunk(["Benefits:", "• Remote stipend"])
        assert blocks[1] == TextBlock.make_list(["Remote stipend"])

    def test_empty_chunk(self):
        assert classify_chunk([]) == []


@pytest.mark.unit
def test_split_chunks_drops_blank_lines():
    """Chunks are separated by blank lines, including whitespace-only ones."""
    assert split_chunks("a\nb\n   \nc\n\n\n") == [["a", "b"], ["c"]]


@pytest.mark.unit
def test_detect_list_needs_two_lines_by_default():
    """A lone bullet line is not a list at top level."""
    assert detect_list(["• One"]) is None
    assert detect_list(["• One"], min_lines=1) == TextBlock.make_list(["One"])
