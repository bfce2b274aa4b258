from pathlib import Path

import pytest

from word_convert.converters.content_to_format import FormatRenderer
from word_convert.converters.docx_reader import DocxMarkup
from word_convert.converters.markup_to_content import StructureExtractor
from word_convert.core.document_model import (
    ContentSection,
    ListType,
    SectionType,
    StructuredContent,
)
from word_convert.exceptions import DocumentProcessingError


SAMPLE_HTML = """
<h1>Quarterly Report</h1>
<p>Summary of the quarter.</p>
<ol>
  <li>Revenue
    <ol>
      <li>Product sales</li>
      <li>Services</li>
    </ol>
  </li>
  <li>Costs</li>
</ol>
<table>
  <tr><th>Region</th><th>Total</th></tr>
  <tr><td>North</td><td>10</td></tr>
</table>
"""


class FakeReader:
    """Stands in for DocxReader so tests never need pandoc."""

    def __init__(self, html=SAMPLE_HTML, raw_text="Quarterly Report Summary of the quarter.", error=None):
        self.html = html
        self.raw_text = raw_text
        self.error = error
        self.calls = []

    def read(self, docx_path: Path) -> DocxMarkup:
        self.calls.append(docx_path)
        if self.error:
            raise DocumentProcessingError(self.error)
        return DocxMarkup(html=self.html, raw_text=self.raw_text, filename=Path(docx_path).name)


@pytest.fixture
def extractor() -> StructureExtractor:
    return StructureExtractor()


@pytest.fixture
def renderer() -> FormatRenderer:
    return FormatRenderer()


@pytest.fixture
def fake_reader() -> FakeReader:
    return FakeReader()


@pytest.fixture
def docx_file(tmp_path: Path) -> Path:
    path = tmp_path / "report.docx"
    path.write_bytes(b"PK\x03\x04 not really a docx")
    return path


@pytest.fixture
def make_content():
    """Factory for StructuredContent built from (type, content[, extra]) tuples."""

    def _make(*sections, title="Doc"):
        built = []
        for entry in sections:
            section_type, content = entry[0], entry[1]
            extra = entry[2] if len(entry) > 2 else {}
            built.append(ContentSection(type=SectionType(section_type), content=content, **extra))
        return StructuredContent(title=title, sections=built)

    return _make


@pytest.fixture
def ordered():
    return {"list_type": ListType.ORDERED}


@pytest.fixture
def unordered():
    return {"list_type": ListType.UNORDERED}
