"""Tests for rendering StructuredContent to plain text, HTML and Markdown."""

import re

import pytest

from word_convert.converters.content_to_format import (
    FormatRenderer,
    group_list_sections,
    list_to_html,
    list_to_markdown,
    render,
    table_to_markdown,
)
from word_convert.converters.markup_to_content import extract
from word_convert.core.document_model import ContentSection, ListType, OutputFormat, SectionType


def max_list_depth(markup: str) -> int:
    depth = deepest = 0
    for closing, _ in re.findall(r"<(/?)(ol|ul)>", markup):
        depth += -1 if closing else 1
        deepest = max(deepest, depth)
    return deepest


# Plain text

def test_plain_text_layout(renderer, make_content, unordered):
    content = make_content(
        ("heading", "Intro", {"level": 1}),
        ("paragraph", "Hello"),
        ("list", "• a\n  ◦ b", unordered),
        ("table", "A | B\n1 | 2"),
    )
    assert renderer.to_plain_text(content) == (
        "Doc\n\nIntro\n\nHello\n\n• • a\n  ◦ b\n[Table: A | B\n1 | 2]"
    )


def test_plain_text_table_passthrough(renderer, make_content):
    content = make_content(("table", "A | B\n1 | 2"), title="")
    assert renderer.render(content, "plaintext") == "[Table: A | B\n1 | 2]"


# HTML

def test_html_escapes_paragraph_markup(renderer, make_content):
    content = make_content(("paragraph", "<b>bold</b>"))
    output = renderer.to_html(content)
    assert "<p>&lt;b&gt;bold&lt;/b&gt;</p>" in output
    assert "<b>" not in output


def test_html_escapes_title_headings_lists_and_tables(renderer, make_content, unordered):
    content = make_content(
        ("heading", "R&D <plans>", {"level": 2}),
        ("list", "• x < y", unordered),
        ("table", "<a> | b & c"),
        title="A & B",
    )
    output = renderer.to_html(content)
    assert "<h1>A &amp; B</h1>" in output
    assert "<h2>R&amp;D &lt;plans&gt;</h2>" in output
    assert "<li>x &lt; y</li>" in output
    assert '<div class="table-content">&lt;a&gt; | b &amp; c</div>' in output


def test_html_heading_level_is_clamped(renderer, make_content):
    content = make_content(
        ("heading", "deep", {"level": 9}),
        ("heading", "none"),
        title="",
    )
    assert renderer.to_html(content) == "<h6>deep</h6>\n<h2>none</h2>"


def test_html_nested_mixed_list():
    output = list_to_html("1. top\n  • nested\n2. top2")
    assert output == "\n".join([
        "<ol>",
        "<li>top</li>",
        "<ul>",
        "<li>nested</li>",
        "</ul>",
        "<li>top2</li>",
        "</ol>",
    ])
    assert output.count("<ol>") == output.count("</ol>") == 1
    assert output.count("<ul>") == output.count("</ul>") == 1
    assert max_list_depth(output) == 2


def test_html_ordered_sublist_shares_one_frame():
    output = list_to_html("1. first\n  a. sub-a\n  a. sub-b\n2. second")
    assert output.replace("\n", "") == (
        "<ol><li>first</li><ol><li>sub-a</li><li>sub-b</li></ol><li>second</li></ol>"
    )


def test_html_type_change_at_same_level_switches_list():
    assert list_to_html("• a\n1. b").replace("\n", "") == "<ul><li>a</li></ul><ol><li>b</li></ol>"


def test_html_depth_matches_deepest_level():
    output = list_to_html("• a\n  • b\n    • c\n  • d\n• e")
    assert max_list_depth(output) == 3
    assert output.count("<ul>") == output.count("</ul>") == 3


def test_html_skips_items_without_text():
    assert list_to_html("• \n\n• real").replace("\n", "") == "<ul><li>real</li></ul>"


def test_html_tolerates_inconsistent_indentation():
    output = list_to_html("      • deep first\n• back")
    assert output.replace("\n", "") == "<ul><li>deep first</li></ul><ul><li>back</li></ul>"


# Markdown

def test_markdown_unordered_nesting():
    assert list_to_markdown("• top\n  • nested\n• top2") == "- top\n  - nested\n- top2"


def test_markdown_renumbers_ordered_items_per_level():
    content = "1. first\n  a. sub-a\n  a. sub-b\n2. second\n  a. again"
    assert list_to_markdown(content) == (
        "1. first\n  1. sub-a\n  2. sub-b\n2. second\n  1. again"
    )


def test_markdown_skipped_items_do_not_count():
    assert list_to_markdown("1. one\n2.   \n3. two") == "1. one\n2. two"


def test_markdown_bullets_between_numbers_keep_the_count():
    assert list_to_markdown("1. a\n• note\n2. b") == "1. a\n- note\n2. b"


def test_markdown_document(renderer, make_content, ordered):
    content = make_content(
        ("heading", "Sub", {"level": 3}),
        ("paragraph", "Keep *this* <as is>"),
        ("list", "1. x\n2. y", ordered),
        ("table", "A | B\n1 | 2"),
    )
    assert renderer.to_markdown(content) == (
        "# Doc\n\n### Sub\n\nKeep *this* <as is>\n\n1. x\n2. y\n\n**Table:** A | B\n1 | 2"
    )


def test_markdown_pipe_tables(make_content):
    content = make_content(("table", "A | B\n1 | 2"), title="")
    assert FormatRenderer(pipe_tables=True).to_markdown(content) == (
        "| A | B |\n| --- | --- |\n| 1 | 2 |"
    )


def test_table_to_markdown_ragged_rows():
    assert table_to_markdown("A | B | C\n1 | 2") == (
        "| A | B | C |\n| --- | --- | --- |\n| 1 | 2 |"
    )
    assert table_to_markdown("") == ""


# Grouping

def test_adjacent_lists_of_same_type_are_merged(make_content, unordered):
    content = make_content(("list", "• a", unordered), ("list", "• b", unordered))
    grouped = group_list_sections(content.sections)
    assert len(grouped) == 1
    assert grouped[0].content == "• a\n• b"
    assert FormatRenderer().to_html(content).count("<ul>") == 1


def test_grouping_closes_on_type_change_and_other_sections(make_content, ordered, unordered):
    content = make_content(
        ("list", "1. a", ordered),
        ("list", "• b", unordered),
        ("paragraph", "p"),
        ("list", "• c", unordered),
    )
    grouped = group_list_sections(content.sections)
    assert [(s.type, s.content) for s in grouped] == [
        (SectionType.LIST, "1. a"),
        (SectionType.LIST, "• b"),
        (SectionType.PARAGRAPH, "p"),
        (SectionType.LIST, "• c"),
    ]


def test_grouping_uses_first_line_not_stored_type(unordered):
    sections = [
        ContentSection(type=SectionType.LIST, content="1. numbered", **unordered),
        ContentSection(type=SectionType.LIST, content="2. more", list_type=ListType.ORDERED),
    ]
    grouped = group_list_sections(sections)
    assert len(grouped) == 1
    assert grouped[0].list_type == ListType.ORDERED


def test_grouping_looks_only_at_first_line(unordered):
    sections = [
        ContentSection(type=SectionType.LIST, content="• a\n1. b", **unordered),
        ContentSection(type=SectionType.LIST, content="• c", **unordered),
    ]
    assert [s.content for s in group_list_sections(sections)] == ["• a\n1. b\n• c"]


# Whole pipeline

def test_sibling_ordered_lists_restart_numbering():
    content = extract("<ol><li>a</li><li>b</li></ol><p>between</p><ol><li>c</li></ol>", "", "t.docx")
    assert render(content, OutputFormat.MARKDOWN) == "# t\n\n1. a\n2. b\n\nbetween\n\n1. c"
    html_output = render(content, "html")
    assert html_output.count("<ol>") == 2


def test_extracted_nested_list_renders_as_nested_html():
    content = extract(
        "<h1>Plan</h1><ol><li>Step<ul><li>detail</li></ul></li><li>Next</li></ol>",
        "",
        "plan.docx",
    )
    output = render(content, "html")
    assert output.replace("\n", "") == (
        "<h1>Plan</h1><h1>Plan</h1>"
        "<ol><li>Step</li><ul><li>detail</li></ul><li>Next</li></ol>"
    )


def test_render_accepts_enum_and_string(renderer, make_content):
    content = make_content(("paragraph", "x"))
    assert renderer.render(content, OutputFormat.MARKDOWN) == renderer.render(content, "markdown")
    with pytest.raises(ValueError):
        renderer.render(content, "pdf")


def test_available_formats():
    formats = {f["key"]: f["extension"] for f in FormatRenderer.available_formats()}
    assert formats == {"plaintext": "txt", "html": "html", "markdown": "md"}


def test_adjacent_ordered_lists_restart_numbering():
    content = extract("<ol><li>a</li><li>b</li></ol><ol><li>c</li></ol>", "", "t.docx")
    assert len(group_list_sections(content.sections)) == 1

    assert render(content, OutputFormat.MARKDOWN) == "# t\n\n1. a\n2. b\n1. c"
    assert render(content, "html").replace("\n", "") == (
        "<h1>t</h1><ol><li>a</li><li>b</li></ol><ol><li>c</li></ol>"
    )


def test_restart_closes_nested_lists_too():
    assert list_to_html("1. a\n  a. x\n1. b").replace("\n", "") == (
        "<ol><li>a</li><ol><li>x</li></ol></ol><ol><li>b</li></ol>"
    )
    assert list_to_markdown("1. a\n  a. x\n1. b\n2. c") == "1. a\n  1. x\n1. b\n2. c"


def test_parenthesised_level_four_items_stay_ordered():
    output = list_to_html("1. a\n  a. b\n    i. c\n      (1) d")
    assert output.count("<ol>") == 4
    assert "<ul>" not in output
