"""
Converter from semantic HTML markup to StructuredContent.

The markup is what pandoc (or any other DOCX-to-HTML step) produces: headings,
paragraphs, ordered and unordered lists that may nest inside list items, and
tables. The extractor walks it in reading order and emits one typed section
per logical block:

1. Headings and paragraphs become one section each
2. A whole list, including every nested sublist, collapses into a single
   list section whose lines carry the nesting and numbering
3. A table becomes one section of " | "-delimited rows
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime
from typing import Iterator, List, Optional, Union

from lxml import etree
from lxml import html as lxml_html

from ..core.document_model import (
    ContentSection,
    ListType,
    ProcessingMetadata,
    SectionType,
    StructuredContent,
)
from ..core.list_lines import bullet_marker, format_list_line, ordered_marker


HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
LIST_TAGS = {"ol", "ul"}
CELL_TAGS = {"td", "th"}

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_CHARS = re.compile(r"[^\x20-\x7E\u00A0-\u024F\u1E00-\u1EFF]")
_EXTENSION = re.compile(r"\.[^/.]+$")

# Word typography mapped to plain equivalents
_TYPOGRAPHY = (
    ("\u00a0", " "),   # non-breaking space
    ("\u2007", " "),   # figure space
    ("\u2009", " "),   # thin space
    ("\u200b", ""),    # zero-width space
    ("\f", ""),
    ("\u2013", "-"),
    ("\u2014", "--"),
    ("\u2018", "'"),
    ("\u2019", "'"),
    ("\u201c", '"'),
    ("\u201d", '"'),
    ("\u2026", "..."),
)

Markup = Union[str, bytes, etree._Element]

_UTF8_PARSER = lxml_html.HTMLParser(encoding="utf-8", remove_comments=True)
# Without a fixed encoding lxml follows the document's charset declaration
_DETECTING_PARSER = lxml_html.HTMLParser(remove_comments=True)


def clean_text(text: str) -> str:
    """Collapse whitespace, drop unprintable characters and trim."""
    return _UNSAFE_CHARS.sub("", _WHITESPACE.sub(" ", text)).strip()


def normalize_typography(text: str) -> str:
    for source, target in _TYPOGRAPHY:
        text = text.replace(source, target)
    return text


def strip_extension(filename: str) -> str:
    return _EXTENSION.sub("", filename)


def count_words(text: str) -> int:
    return len(text.split())


def _tag(element: etree._Element) -> Optional[str]:
    """Lower-case local name of an element, None for comments and PIs."""
    if not isinstance(element.tag, str):
        return None
    return element.tag.rsplit("}", 1)[-1].lower()


def _text_of(element: etree._Element, skip_lists: bool = False) -> str:
    """Text of an element and its descendants, optionally leaving out lists."""
    parts = [element.text or ""]
    for child in element:
        tag = _tag(child)
        if tag == "br":
            parts.append(" ")
        elif tag is not None and not (skip_lists and tag in LIST_TAGS):
            parts.append(_text_of(child, skip_lists))
        parts.append(child.tail or "")
    return "".join(parts)


def _nested_lists(item: etree._Element) -> Iterator[etree._Element]:
    """Lists inside a list item, in document order, not descending into them."""
    for child in item:
        tag = _tag(child)
        if tag in LIST_TAGS:
            yield child
        elif tag is not None:
            yield from _nested_lists(child)


def parse_markup(markup: Markup) -> Optional[etree._Element]:
    """
    Parse HTML markup and return the element whose children are the blocks.

    Already-parsed elements are returned unchanged. Strings and UTF-8 bytes
    are read as UTF-8; other bytes are decoded from their charset
    declaration. Returns None for empty or unparseable input.
    """
    if isinstance(markup, etree._Element):
        return markup

    if isinstance(markup, str):
        markup = markup.encode("utf-8")
    if not markup or not markup.strip():
        return None

    try:
        markup.decode("utf-8")
        parser = _UTF8_PARSER
    except UnicodeDecodeError:
        parser = _DETECTING_PARSER

    try:
        document = lxml_html.document_fromstring(markup, parser=parser)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError):
        return None

    body = document.find("body")
    return body if body is not None else document


class StructureExtractor:
    """
    Extracts typed content sections from semantic block markup.

    Extraction is a pure function of its input: the extractor keeps no state
    between calls and never raises on malformed or empty markup.
    """

    def __init__(self, normalize_typography: bool = False):
        self.normalize_typography = normalize_typography
        self.logger = logging.getLogger(__name__)

    def extract(self, markup: Markup, raw_text: str = "", filename: str = "") -> StructuredContent:
        """
        Build StructuredContent from markup.

        Args:
            markup: HTML string/bytes, or a parsed element whose children are
                the document blocks.
            raw_text: Plain text of the document, used only for word and
                character counts.
            filename: Source filename, used for the fallback title.
        """
        start = time.perf_counter()
        warnings: List[str] = []
        sections: List[ContentSection] = []

        root = parse_markup(markup)
        if root is None:
            warnings.append("No block content found in markup")
        else:
            self._walk(root, sections)

        headings = [s for s in sections if s.type == SectionType.HEADING]
        title = headings[0].content if headings else strip_extension(filename)

        raw_text = raw_text or ""
        metadata = ProcessingMetadata(
            original_filename=filename,
            processed_at=datetime.now().isoformat(),
            word_count=count_words(raw_text),
            character_count=len(raw_text),
            processing_time=(time.perf_counter() - start) * 1000,
            warnings=tuple(warnings),
        )

        self.logger.debug(f"Extracted {len(sections)} sections from {filename or '<markup>'}")
        return StructuredContent(title=title, sections=sections, metadata=metadata)

    def _clean(self, text: str) -> str:
        if self.normalize_typography:
            text = normalize_typography(text)
        return clean_text(text)

    def _walk(self, element: etree._Element, sections: List[ContentSection]) -> None:
        """Emit sections for the block children of an element."""
        for child in element:
            tag = _tag(child)
            if tag is None:
                continue

            if tag in HEADING_TAGS:
                text = self._clean(_text_of(child))
                if text:
                    sections.append(ContentSection(
                        type=SectionType.HEADING,
                        content=text,
                        level=int(tag[1]),
                    ))

            elif tag == "p":
                text = self._clean(_text_of(child))
                if text:
                    sections.append(ContentSection(type=SectionType.PARAGRAPH, content=text))

            elif tag in LIST_TAGS:
                lines = self._list_lines(child, level=1)
                if lines:
                    sections.append(ContentSection(
                        type=SectionType.LIST,
                        content="\n".join(lines),
                        list_type=ListType.ORDERED if tag == "ol" else ListType.UNORDERED,
                    ))

            elif tag == "table":
                rows = self._table_rows(child)
                if rows:
                    sections.append(ContentSection(type=SectionType.TABLE, content="\n".join(rows)))

            else:
                # Wrappers (div, section, blockquote, ...) are transparent
                self._walk(child, sections)

    def _list_lines(self, list_element: etree._Element, level: int) -> List[str]:
        """
        Flatten a list and its sublists into encoded lines.

        Each list numbers its own direct items from 1; nested lists are
        walked one level deeper with their own counter.
        """
        ordered = _tag(list_element) == "ol"
        lines: List[str] = []
        counter = 1

        for item in list_element:
            if _tag(item) != "li":
                continue

            text = self._clean(_text_of(item, skip_lists=True))
            if text:
                marker = ordered_marker(counter, level) if ordered else bullet_marker(level)
                lines.append(format_list_line(text, level, marker))
                if ordered:
                    counter += 1

            for nested in _nested_lists(item):
                lines.extend(self._list_lines(nested, level + 1))

        return lines

    def _table_rows(self, table: etree._Element) -> List[str]:
        rows = []
        for row in table.iter():
            if _tag(row) != "tr":
                continue
            cells = [self._clean(_text_of(cell)) for cell in row if _tag(cell) in CELL_TAGS]
            if cells:
                rows.append(" | ".join(cells))
        return rows


def extract(markup: Markup, raw_text: str = "", filename: str = "") -> StructuredContent:
    """Extract StructuredContent with default settings."""
    return StructureExtractor().extract(markup, raw_text, filename)
