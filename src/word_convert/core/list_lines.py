"""
Line encoding for list sections.

A list section stores every item, at any nesting depth, as one line of its
``content``. Each line carries two spaces of indentation per nesting level,
then a marker, then the item text::

    1. first
      a. nested
        i. deeper
    2. second

The extractor writes lines with ``format_list_line`` and the renderer reads
them back with ``classify_list_line``, so both sides agree on indentation and
on which markers count as ordered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

INDENT_WIDTH = 2

BULLETS = ("•", "◦", "▪")

# Markers that make a line ordered: "12.", "b)", "iv.", "(3)"
_ORDERED_MARKER = re.compile(
    r"^(?:\d+[.)]|[a-zA-Z][.)]|[ivxlcdm]+[.)]|\(\d+\))(?=\s)",
    re.IGNORECASE,
)
_BULLET_MARKER = re.compile(r"^[•◦▪\-*+](?=\s|$)")

_ROMAN_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


@dataclass(frozen=True)
class ListLine:
    """A list line decoded into its nesting level, type and text."""

    level: int  # 0 for top-level items
    is_ordered: bool
    text: str
    marker: str = ""


def classify_list_line(line: str) -> ListLine:
    """
    Decode one list line.

    The level is the number of leading spaces divided by ``INDENT_WIDTH``.
    A line is ordered when it starts with a number, a single letter or a
    roman numeral followed by ``.`` or ``)``, or with a parenthesised number.
    Anything else is unordered; a leading bullet glyph is treated as its
    marker. Lines without a recognised marker keep their whole text.
    """
    stripped = line.lstrip(" \t")
    indent = len(line) - len(stripped)
    level = indent // INDENT_WIDTH

    match = _ORDERED_MARKER.match(stripped)
    if match:
        marker = match.group(0)
        return ListLine(level, True, stripped[len(marker):].strip(), marker)

    match = _BULLET_MARKER.match(stripped)
    if match:
        marker = match.group(0)
        return ListLine(level, False, stripped[len(marker):].strip(), marker)

    return ListLine(level, False, stripped.strip())


def restarts_numbering(item: ListLine) -> bool:
    """True for a top-level ordered item numbered 1, which begins a new list."""
    return item.is_ordered and item.level == 0 and item.marker.strip("().") == "1"


def to_roman(number: int) -> str:
    result = []
    for value, symbol in _ROMAN_NUMERALS:
        while number >= value:
            result.append(symbol)
            number -= value
    return "".join(result)


def ordered_marker(counter: int, level: int) -> str:
    """
    Numbering glyph for the ``counter``-th item of an ordered list at ``level``.

    Levels are 1-based: ``1.``, ``a.``, ``i.``, ``(1)``, then arabic again.
    """
    if level == 2 and counter <= 26:
        return f"{chr(ord('a') + counter - 1)}."
    if level == 3:
        return f"{to_roman(counter).lower()}."
    if level == 4:
        return f"({counter})"
    return f"{counter}."


def bullet_marker(level: int) -> str:
    """Bullet glyph for an unordered item at 1-based ``level``."""
    return BULLETS[min(max(level, 1), len(BULLETS)) - 1]


def indent_for(level: int) -> str:
    """Indentation for a 1-based nesting level."""
    return " " * (INDENT_WIDTH * max(level - 1, 0))


def format_list_line(text: str, level: int, marker: str) -> str:
    return f"{indent_for(level)}{marker} {text}"
