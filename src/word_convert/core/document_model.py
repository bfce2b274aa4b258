"""
Core content model shared by the structure extractor and the format renderer.

A converted document is a ``StructuredContent``: a title, an ordered tuple of
typed ``ContentSection`` blocks and some informational processing metadata.
Nested lists and tables are not modelled as trees here; their structure is
carried inside the section ``content`` string using the line encoding
implemented in ``list_lines``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SectionType(str, Enum):
    """Kinds of logical blocks a document is split into."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"


class ListType(str, Enum):
    """Dominant type of a list section."""
    ORDERED = "ordered"
    UNORDERED = "unordered"


class OutputFormat(str, Enum):
    """Output formats the renderer can produce."""
    PLAINTEXT = "plaintext"
    HTML = "html"
    MARKDOWN = "markdown"

    @property
    def extension(self) -> str:
        """File extension used when the rendered output is persisted."""
        return _FORMAT_EXTENSIONS[self]

    @property
    def label(self) -> str:
        return _FORMAT_LABELS[self]


_FORMAT_EXTENSIONS = {
    OutputFormat.PLAINTEXT: "txt",
    OutputFormat.HTML: "html",
    OutputFormat.MARKDOWN: "md",
}

_FORMAT_LABELS = {
    OutputFormat.PLAINTEXT: "Plain Text",
    OutputFormat.HTML: "HTML",
    OutputFormat.MARKDOWN: "Markdown",
}


class ProcessingMetadata(BaseModel):
    """Informational metadata recorded while a document is processed."""

    model_config = ConfigDict(frozen=True)

    original_filename: str = ""
    processed_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    word_count: int = 0
    character_count: int = 0
    processing_time: Optional[float] = None  # milliseconds
    original_format: str = "docx"
    warnings: Tuple[str, ...] = ()


class ContentSection(BaseModel):
    """
    One logical block of a document.

    ``level`` is only meaningful for headings (1-6). ``list_type`` is only set
    for lists and records the type of the list the section was built from;
    nested items of the other type may still appear inside ``content``.
    """

    model_config = ConfigDict(frozen=True)

    type: SectionType
    content: str
    level: Optional[int] = None
    list_type: Optional[ListType] = None


class StructuredContent(BaseModel):
    """Result of extracting the structure of one document."""

    model_config = ConfigDict(frozen=True)

    title: str
    sections: Tuple[ContentSection, ...] = ()
    metadata: ProcessingMetadata = Field(default_factory=ProcessingMetadata)

    def sections_of_type(self, section_type: SectionType) -> List[ContentSection]:
        return [s for s in self.sections if s.type == section_type]

    def get_stats(self) -> Dict[str, Any]:
        """Get document statistics."""
        return {
            "title": self.title,
            "section_count": len(self.sections),
            "heading_count": len(self.sections_of_type(SectionType.HEADING)),
            "paragraph_count": len(self.sections_of_type(SectionType.PARAGRAPH)),
            "list_count": len(self.sections_of_type(SectionType.LIST)),
            "table_count": len(self.sections_of_type(SectionType.TABLE)),
            "word_count": self.metadata.word_count,
            "character_count": self.metadata.character_count,
        }


class FileProcessingResult(BaseModel):
    """Success/failure envelope for processing a single file."""

    filename: str
    success: bool
    output: Optional[StructuredContent] = None
    error: Optional[str] = None
    processing_time: float = 0.0  # milliseconds


class BatchResult(BaseModel):
    """Aggregate result of processing several files one after another."""

    total_files: int
    successful_files: int
    failed_files: int
    results: List[FileProcessingResult] = Field(default_factory=list)
    total_processing_time: float = 0.0

    @classmethod
    def from_results(cls, results: List[FileProcessingResult]) -> BatchResult:
        successful = sum(1 for r in results if r.success)
        return cls(
            total_files=len(results),
            successful_files=successful,
            failed_files=len(results) - successful,
            results=results,
            total_processing_time=sum(r.processing_time for r in results),
        )


class OutlineNode(BaseModel):
    """A heading together with the sections and sub-headings that follow it."""

    title: str
    level: int
    sections: List[ContentSection] = Field(default_factory=list)
    children: List[OutlineNode] = Field(default_factory=list)
