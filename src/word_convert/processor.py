"""
Document processing driver.

Ties the reader, the structure extractor and the renderer together for
whole files. Failures are reported as FileProcessingResult objects instead of
exceptions so a batch keeps going after a bad file.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import WordConvertConfig
from .converters.content_to_format import FormatRenderer
from .converters.docx_reader import DocxReader
from .converters.markup_to_content import StructureExtractor
from .core.document_model import (
    BatchResult,
    FileProcessingResult,
    OutputFormat,
    StructuredContent,
)
from .exceptions import DocumentProcessingError, InvalidFileError

VALID_EXTENSIONS = {'.docx'}


class DocumentProcessor:
    """Converts DOCX files into StructuredContent and rendered output."""

    def __init__(
        self,
        reader: Optional[DocxReader] = None,
        extractor: Optional[StructureExtractor] = None,
        renderer: Optional[FormatRenderer] = None,
        config: Optional[WordConvertConfig] = None,
    ):
        self.config = config or WordConvertConfig()
        self._reader = reader
        self.extractor = extractor or StructureExtractor(
            normalize_typography=self.config.normalize_typography
        )
        self.renderer = renderer or FormatRenderer(pipe_tables=self.config.pipe_tables)
        self.logger = logging.getLogger(__name__)

    @property
    def reader(self) -> DocxReader:
        # Created lazily so pandoc is only required once a file is read
        if self._reader is None:
            self._reader = DocxReader(pandoc_path=self.config.pandoc_path)
        return self._reader

    def validate_file(self, path: Path) -> None:
        """Raise InvalidFileError unless path is an existing, reasonably sized .docx file."""
        if not path.exists() or not path.is_file():
            raise InvalidFileError(f"File not found: {path}", filename=path.name)

        if path.suffix.lower() not in VALID_EXTENSIONS:
            raise InvalidFileError("Invalid file type. Please provide a .docx file.", filename=path.name)

        size = path.stat().st_size
        if size > self.config.max_file_size:
            limit_mb = self.config.max_file_size // (1024 * 1024)
            raise InvalidFileError(f"File too large. Maximum size is {limit_mb}MB.", filename=path.name)

    def extract_file(self, path: Union[str, Path]) -> StructuredContent:
        """Read and extract one file, raising on failure."""
        path = Path(path)
        self.validate_file(path)

        markup = self.reader.read(path)
        return self.extractor.extract(markup.html, markup.raw_text, markup.filename)

    def process_file(self, path: Union[str, Path]) -> FileProcessingResult:
        """Process one file into a success or failure result."""
        path = Path(path)
        start = time.perf_counter()
        self.logger.info(f"Processing {path}")

        def elapsed() -> float:
            return (time.perf_counter() - start) * 1000

        try:
            content = self.extract_file(path)
        except InvalidFileError as e:
            self.logger.warning(f"Rejected {path}: {e}")
            return FileProcessingResult(
                filename=path.name, success=False, error=str(e), processing_time=elapsed()
            )
        except (DocumentProcessingError, OSError) as e:
            self.logger.error(f"Processing failed for {path}: {e}", exc_info=True)
            return FileProcessingResult(
                filename=path.name,
                success=False,
                error=f"Processing failed: {e}",
                processing_time=elapsed(),
            )

        self.logger.info(f"Processed {path} into {len(content.sections)} sections")
        return FileProcessingResult(
            filename=path.name, success=True, output=content, processing_time=elapsed()
        )

    def process_files(self, paths: Iterable[Union[str, Path]]) -> BatchResult:
        """Process files one after another."""
        results = [self.process_file(path) for path in paths]
        batch = BatchResult.from_results(results)
        self.logger.info(
            f"Batch finished: {batch.successful_files}/{batch.total_files} succeeded"
        )
        return batch

    def render(self, content: StructuredContent, fmt: Union[OutputFormat, str, None] = None) -> str:
        return self.renderer.render(content, fmt or self.config.default_format)

    def convert(self, path: Union[str, Path], fmt: Union[OutputFormat, str, None] = None) -> str:
        """Read, extract and render one file, raising on failure."""
        return self.render(self.extract_file(path), fmt)

    def output_path(
        self,
        result: FileProcessingResult,
        fmt: Union[OutputFormat, str, None] = None,
        output_dir: Optional[Path] = None,
    ) -> Path:
        output_format = OutputFormat(fmt or self.config.default_format)
        directory = Path(output_dir or self.config.output_dir or Path.cwd())
        return directory / f"{Path(result.filename).stem}.{output_format.extension}"

    def write_output(
        self,
        result: FileProcessingResult,
        fmt: Union[OutputFormat, str, None] = None,
        output_dir: Optional[Path] = None,
    ) -> Path:
        """Render a successful result and write it as <stem>.<extension>."""
        if not result.success or result.output is None:
            raise DocumentProcessingError(
                f"Cannot write output for failed file {result.filename}", stage="output"
            )

        target = self.output_path(result, fmt, output_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(result.output, fmt), encoding="utf-8")
        self.logger.info(f"Wrote {target}")
        return target

    def write_outputs(
        self,
        batch: BatchResult,
        fmt: Union[OutputFormat, str, None] = None,
        output_dir: Optional[Path] = None,
    ) -> List[Path]:
        return [
            self.write_output(result, fmt, output_dir)
            for result in batch.results
            if result.success
        ]
