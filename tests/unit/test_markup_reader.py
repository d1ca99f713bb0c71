"""Unit tests for the HTML DOM walk that produces raw blocks."""

import pytest

from careerboard.contexts.intake.content_data_structure import ListStyle, TextBlock
from careerboard.contexts.intake.markup_reader import read_markup_blocks


@pytest.mark.unit
def test_dropped_elements_removed_with_content():
    """Scripts, styles and comments never produce text."""
    blocks = read_markup_blocks(
        "<p>Visible</p><script>alert('x')</script><style>p { color: red; }</style><!-- note -->"
    )
    assert blocks == [TextBlock.make_paragraph("Visible")]


@pytest.mark.unit
def test_nested_list_items_flattened_in_order():
    """Nested list items follow their parent item, text appears once."""
    blocks = read_markup_blocks("<ul><li>Parent<ul><li>Child</li></ul></li><li>Sibling</li></ul>")
    assert blocks == [TextBlock.make_list(["Parent", "Child", "Sibling"])]


@pytest.mark.unit
def test_typed_bullet_glyphs_stripped_from_items():
    """Items that repeat the bullet glyph lose it."""
    blocks = read_markup_blocks("<ul><li>• Roadmaps</li><li>• Pricing</li></ul>")
    assert blocks[0].items == ("Roadmaps", "Pricing")


@pytest.mark.unit
def test_inline_formatting_kept_in_paragraph():
    """Inline tags do not split a paragraph."""
    blocks = read_markup_blocks("<p>Work with <em>design</em> and <a href='#'>data</a> teams.</p>")
    assert blocks == [TextBlock.make_paragraph("Work with design and data teams.")]


@pytest.mark.unit
def test_partially_bold_paragraph_is_not_header():
    """Bold text that is only part of a paragraph stays inline."""
    blocks = read_markup_blocks("<p><strong>Note:</strong> this role is hybrid.</p>")
    assert blocks == [TextBlock.make_paragraph("Note: this role is hybrid.")]


@pytest.mark.unit
def test_loose_text_between_blocks_is_kept():
    """Text outside any block element becomes its own candidate."""
    blocks = read_markup_blocks("<h2>Overview</h2>Loose text here<ul><li>One</li></ul>")

    assert blocks == [
        TextBlock.make_header("Overview", level=2),
        TextBlock.make_paragraph("Loose text here"),
        TextBlock.make_list(["One"]),
    ]


@pytest.mark.unit
def test_stray_list_items_group_together():
    """<li> elements outside a list become bullet lines of one candidate."""
    blocks = read_markup_blocks("<li>One</li><li>Two</li>")
    assert blocks == [TextBlock.make_paragraph("• One\n• Two")]


@pytest.mark.unit
def test_ordered_list_style():
    blocks = read_markup_blocks("<ol><li>Apply</li><li>Interview</li></ol>")
    assert blocks[0].metadata.list_style is ListStyle.NUMBER


@pytest.mark.unit
def test_non_breaking_spaces_normalized():
    """&nbsp; and zero-width characters do not survive."""
    blocks = read_markup_blocks("<p>Remote&nbsp;first\u200b team</p>")
    assert blocks == [TextBlock.make_paragraph("Remote first team")]


@pytest.mark.unit
@pytest.mark.parametrize(
    "markup, text",
    [
        ("<div>Hello <form>Apply via our portal</form> world</div>", "Hello Apply via our portal world"),
        ("<p>Text with <button>Click me</button></p>", "Text with Click me"),
    ],
)
def test_form_controls_keep_their_text(markup, text):
    """Only code, metadata and media elements lose their content."""
    assert read_markup_blocks(markup) == [TextBlock.make_paragraph(text)]


@pytest.mark.unit
def test_block_children_of_list_item_are_separated():
    """Paragraphs inside one <li> do not run together."""
    blocks = read_markup_blocks("<ul><li><p>Own roadmap</p><p>Ship features</p></li></ul>")
    assert blocks == [TextBlock.make_list(["Own roadmap Ship features"])]


@pytest.mark.unit
def test_heading_with_block_children():
    blocks = read_markup_blocks("<h2><div>About</div><div>Us</div></h2>")
    assert blocks == [TextBlock.make_header("About Us", level=2)]
