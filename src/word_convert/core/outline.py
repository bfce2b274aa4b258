"""
Heading outline of a converted document.
"""

from __future__ import annotations

from typing import List

from .document_model import ContentSection, OutlineNode, SectionType, StructuredContent


def build_outline(content: StructuredContent) -> List[OutlineNode]:
    """
    Nest sections under the headings that precede them.

    A heading becomes a child of the closest earlier heading with a lower
    level. Non-heading sections are attached to the current heading; those
    that appear before the first heading are collected in a level-0 node
    titled after the document.
    """
    roots: List[OutlineNode] = []
    stack: List[OutlineNode] = []
    preamble: List[ContentSection] = []

    for section in content.sections:
        if section.type == SectionType.HEADING:
            level = section.level or 1
            node = OutlineNode(title=section.content, level=level)

            # Headings at the same or a higher level end the current branch
            while stack and stack[-1].level >= level:
                stack.pop()

            if stack:
                stack[-1].children.append(node)
            else:
                roots.append(node)
            stack.append(node)
        elif stack:
            stack[-1].sections.append(section)
        else:
            preamble.append(section)

    if preamble:
        roots.insert(0, OutlineNode(title=content.title, level=0, sections=preamble))
    return roots


def iter_outline(nodes: List[OutlineNode], depth: int = 0):
    """Yield ``(depth, node)`` pairs in document order."""
    for node in nodes:
        yield depth, node
        yield from iter_outline(node.children, depth + 1)
