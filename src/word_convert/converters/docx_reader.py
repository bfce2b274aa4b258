"""
Reader that turns a DOCX file into semantic HTML markup and raw text.

The container itself is never parsed here:
1. Pandoc converts the document body to HTML (headings, paragraphs,
   nested lists, tables)
2. python-docx supplies the raw text used for word and character counts
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List

from docx import Document
from docx.document import Document as DocxDocument

from ..exceptions import DocumentProcessingError, PandocNotFoundError


@dataclass
class DocxMarkup:
    """Markup and raw text read from one DOCX file."""

    html: str
    raw_text: str
    filename: str


class DocxReader:
    """
    Reads DOCX files through pandoc and python-docx.

    Pandoc must be installed; its availability is checked when the reader
    is created.
    """

    def __init__(self, pandoc_path: str = "pandoc"):
        self.pandoc_path = pandoc_path
        self.logger = logging.getLogger(__name__)
        self._validate_pandoc()

    def _validate_pandoc(self) -> None:
        """Ensure Pandoc is available."""
        try:
            result = subprocess.run(
                [self.pandoc_path, "--version"],
                capture_output=True,
                text=True,
                check=True
            )
            if "pandoc" not in result.stdout.lower():
                raise PandocNotFoundError("Pandoc validation failed")
        except (subprocess.SubprocessError, FileNotFoundError) as e:
            raise PandocNotFoundError(f"Pandoc not found or not working: {e}")

    def read(self, docx_path: Path) -> DocxMarkup:
        """
        Read a DOCX file.

        Returns:
            DocxMarkup with pandoc's HTML and the raw paragraph and table
            cell text.
        """
        docx_path = Path(docx_path)
        if not docx_path.exists():
            raise FileNotFoundError(f"DOCX file not found: {docx_path}")

        markup = self._convert_with_pandoc(docx_path)
        doc = self._open_document(docx_path)

        return DocxMarkup(
            html=markup,
            raw_text=self._extract_raw_text(doc),
            filename=docx_path.name,
        )

    def _convert_with_pandoc(self, docx_path: Path) -> str:
        """Convert the document body to HTML with pandoc."""
        command = [
            self.pandoc_path,
            str(docx_path),
            "--from", "docx",
            "--to", "html",
            "--wrap=none",
        ]
        self.logger.debug(f"Running {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            raise DocumentProcessingError(f"Pandoc conversion failed: {e.stderr}", stage="pandoc")

        return result.stdout

    def _open_document(self, docx_path: Path) -> DocxDocument:
        try:
            return Document(str(docx_path))
        except Exception as e:
            raise DocumentProcessingError(f"Could not open document: {e}", stage="docx")

    def _extract_raw_text(self, doc: DocxDocument) -> str:
        """Text of all body paragraphs and table cells, one block per line."""
        blocks: List[str] = [p.text for p in doc.paragraphs]

        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    blocks.append(cell.text)

        return "\n".join(block for block in blocks if block.strip())
