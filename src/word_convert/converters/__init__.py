"""
Document format conversion modules.
"""

from .markup_to_content import StructureExtractor, extract
from .content_to_format import FormatRenderer, render
from .docx_reader import DocxMarkup, DocxReader

__all__ = [
    "StructureExtractor",
    "extract",
    "FormatRenderer",
    "render",
    "DocxMarkup",
    "DocxReader",
]
