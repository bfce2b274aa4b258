"""
Core content model and list encoding helpers.
"""

from .document_model import (
    BatchResult,
    ContentSection,
    FileProcessingResult,
    ListType,
    OutlineNode,
    OutputFormat,
    ProcessingMetadata,
    SectionType,
    StructuredContent,
)
from .list_lines import ListLine, classify_list_line
from .list_stack import ListFrame, ListKind, ListStack, advance_counters
from .outline import build_outline

__all__ = [
    "BatchResult",
    "ContentSection",
    "FileProcessingResult",
    "ListType",
    "OutlineNode",
    "OutputFormat",
    "ProcessingMetadata",
    "SectionType",
    "StructuredContent",
    "ListLine",
    "classify_list_line",
    "ListFrame",
    "ListKind",
    "ListStack",
    "advance_counters",
    "build_outline",
]
