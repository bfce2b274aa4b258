"""
word-convert: structure-preserving conversion of Word documents to plain
text, HTML and Markdown.
"""

from .converters import FormatRenderer, StructureExtractor, extract, render
from .core import ContentSection, ListType, OutputFormat, SectionType, StructuredContent
from .processor import DocumentProcessor

__version__ = "0.1.0"

__all__ = [
    "FormatRenderer",
    "StructureExtractor",
    "extract",
    "render",
    "ContentSection",
    "ListType",
    "OutputFormat",
    "SectionType",
    "StructuredContent",
    "DocumentProcessor",
]
