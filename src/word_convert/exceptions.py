"""
Exceptions raised by the file-facing layers of word-convert.

The extractor and renderer never raise on malformed content; these errors
come from reading files, running pandoc and validating inputs.
"""

from __future__ import annotations

from typing import Optional


class WordConvertError(Exception):
    """Base class for word-convert errors."""


class InvalidFileError(WordConvertError, ValueError):
    """The input file is missing, too large or not a DOCX document."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


class DocumentProcessingError(WordConvertError, RuntimeError):
    """A document could not be converted."""

    def __init__(self, message: str, stage: str = "processing"):
        super().__init__(message)
        self.stage = stage


class PandocNotFoundError(DocumentProcessingError):
    """Pandoc is not installed or not runnable."""

    def __init__(self, message: str):
        super().__init__(message, stage="pandoc")
