"""
Renderer from StructuredContent to plain text, HTML and Markdown.

Lists are rebuilt from the flattened line encoding: each line is decoded with
``classify_list_line`` and fed through a ``ListStack`` that decides where
nested ``<ul>``/``<ol>`` elements open and close. Markdown renumbers ordered
items per nesting level.
"""

from __future__ import annotations

import html
import logging
from typing import Dict, List, Optional, Sequence, Union

from ..core.document_model import (
    ContentSection,
    ListType,
    OutputFormat,
    SectionType,
    StructuredContent,
)
from ..core.list_lines import INDENT_WIDTH, classify_list_line, restarts_numbering
from ..core.list_stack import ListKind, ListStack, advance_counters, truncate_counters


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` so text is never read back as markup."""
    return html.escape(text, quote=False)


def _heading_level(section: ContentSection) -> int:
    return min(max(section.level or 2, 1), 6)


def section_list_type(section: ContentSection) -> ListType:
    """Type of a list section as derived from its first line."""
    first_line = section.content.split("\n", 1)[0]
    if classify_list_line(first_line).is_ordered:
        return ListType.ORDERED
    return ListType.UNORDERED


def group_list_sections(sections: Sequence[ContentSection]) -> List[ContentSection]:
    """
    Merge runs of adjacent list sections of the same type.

    The type used for grouping comes from each section's first line, not from
    its stored ``list_type``. A change of type or any non-list section ends
    the current group.
    """
    grouped: List[ContentSection] = []
    pending: List[ContentSection] = []
    pending_type: Optional[ListType] = None

    def flush() -> None:
        if pending:
            grouped.append(ContentSection(
                type=SectionType.LIST,
                content="\n".join(s.content for s in pending),
                list_type=pending_type,
            ))
            pending.clear()

    for section in sections:
        if section.type != SectionType.LIST:
            flush()
            pending_type = None
            grouped.append(section)
            continue

        list_type = section_list_type(section)
        if pending_type is not None and list_type != pending_type:
            flush()
        pending_type = list_type
        pending.append(section)

    flush()
    return grouped


def list_to_html(content: str) -> str:
    """
    Rebuild nested ``<ul>``/``<ol>`` markup from encoded list lines.

    A top-level item numbered 1 after other items closes every open list, so
    adjacent ordered lists merged into one section stay separate lists.
    """
    parts: List[str] = []
    stack = ListStack()

    for line in content.split("\n"):
        if not line.strip():
            continue
        item = classify_list_line(line)
        if not item.text:
            continue

        if restarts_numbering(item):
            parts.extend(f"</{frame.kind.tag}>" for frame in stack.close_all())

        closed, opened = stack.enter(item.level, ListKind.of(item.is_ordered))
        parts.extend(f"</{frame.kind.tag}>" for frame in closed)
        if opened is not None:
            parts.append(f"<{opened.kind.tag}>")
        parts.append(f"<li>{escape_html(item.text)}</li>")

    parts.extend(f"</{frame.kind.tag}>" for frame in stack.close_all())
    return "\n".join(parts)


def list_to_markdown(content: str) -> str:
    """
    Rebuild a Markdown list from encoded list lines.

    Unordered items become ``-`` bullets. Ordered items are renumbered from 1
    per nesting level; moving back to a shallower level forgets the deeper
    counters so the next sublist starts again at 1. A top-level item numbered
    1 starts a new list and resets every counter.
    """
    result: List[str] = []
    counters: tuple = ()

    for line in content.split("\n"):
        if not line.strip():
            continue
        item = classify_list_line(line)
        if not item.text:
            continue

        if restarts_numbering(item):
            counters = ()

        indent = " " * (INDENT_WIDTH * item.level)
        if item.is_ordered:
            counters, number = advance_counters(counters, item.level)
            result.append(f"{indent}{number}. {item.text}")
        else:
            counters = truncate_counters(counters, item.level)
            result.append(f"{indent}- {item.text}")

    return "\n".join(result)


def table_to_markdown(content: str) -> str:
    """
    Build a Markdown pipe table from " | "-delimited rows.

    The first row is the header; the separator has one ``---`` per header
    cell. Ragged data rows are emitted as they are.
    """
    rows = [row for row in content.split("\n") if row.strip()]
    if not rows:
        return ""

    header = rows[0].split(" | ")
    lines = [
        f"| {' | '.join(header)} |",
        f"| {' | '.join('---' for _ in header)} |",
    ]
    lines.extend(f"| {' | '.join(row.split(' | '))} |" for row in rows[1:])
    return "\n".join(lines)


class FormatRenderer:
    """
    Renders StructuredContent into the supported output formats.

    Rendering is a pure function of the content; the renderer holds only
    presentation options.
    """

    def __init__(self, pipe_tables: bool = False):
        self.pipe_tables = pipe_tables
        self.logger = logging.getLogger(__name__)

    def render(self, content: StructuredContent, fmt: Union[OutputFormat, str]) -> str:
        """Render content in the given format (``plaintext``, ``html`` or ``markdown``)."""
        output_format = OutputFormat(fmt)
        self.logger.debug(f"Rendering {len(content.sections)} sections as {output_format.value}")

        if output_format is OutputFormat.HTML:
            return self.to_html(content)
        if output_format is OutputFormat.MARKDOWN:
            return self.to_markdown(content)
        return self.to_plain_text(content)

    @staticmethod
    def available_formats() -> List[Dict[str, str]]:
        return [
            {"key": f.value, "label": f.label, "extension": f.extension}
            for f in OutputFormat
        ]

    # Plain text

    def to_plain_text(self, content: StructuredContent) -> str:
        lines: List[str] = []
        if content.title:
            lines.extend([content.title, ""])

        for section in content.sections:
            if section.type == SectionType.HEADING:
                lines.extend([section.content, ""])
            elif section.type == SectionType.PARAGRAPH:
                lines.extend([section.content, ""])
            elif section.type == SectionType.LIST:
                lines.append(f"• {section.content}")
            elif section.type == SectionType.TABLE:
                lines.extend([f"[Table: {section.content}]", ""])
            else:
                lines.append(section.content)

        return "\n".join(lines).strip()

    # HTML

    def to_html(self, content: StructuredContent) -> str:
        parts: List[str] = []
        if content.title:
            parts.append(f"<h1>{escape_html(content.title)}</h1>")

        for section in group_list_sections(content.sections):
            parts.append(self._section_to_html(section))

        return "\n".join(parts)

    def _section_to_html(self, section: ContentSection) -> str:
        if section.type == SectionType.HEADING:
            level = _heading_level(section)
            return f"<h{level}>{escape_html(section.content)}</h{level}>"
        if section.type == SectionType.PARAGRAPH:
            return f"<p>{escape_html(section.content)}</p>"
        if section.type == SectionType.LIST:
            return list_to_html(section.content)
        if section.type == SectionType.TABLE:
            return f'<div class="table-content">{escape_html(section.content)}</div>'
        return f"<div>{escape_html(section.content)}</div>"

    # Markdown

    def to_markdown(self, content: StructuredContent) -> str:
        blocks: List[str] = []
        if content.title:
            blocks.append(f"# {content.title}")

        for section in group_list_sections(content.sections):
            block = self._section_to_markdown(section)
            if block:
                blocks.append(block)

        return "\n\n".join(blocks).strip()

    def _section_to_markdown(self, section: ContentSection) -> str:
        if section.type == SectionType.HEADING:
            return f"{'#' * _heading_level(section)} {section.content}"
        if section.type == SectionType.LIST:
            return list_to_markdown(section.content)
        if section.type == SectionType.TABLE:
            if self.pipe_tables:
                return table_to_markdown(section.content)
            return f"**Table:** {section.content}"
        return section.content


def render(content: StructuredContent, fmt: Union[OutputFormat, str], pipe_tables: bool = False) -> str:
    """Render content with a default renderer."""
    return FormatRenderer(pipe_tables=pipe_tables).render(content, fmt)
