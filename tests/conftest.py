import io

import pytest
from docx import Document

import extraction


def _build_docx(paragraphs) -> bytes:
    doc = Document()
    for item in paragraphs:
        text, bold = item if isinstance(item, tuple) else (item, False)
        run = doc.add_paragraph().add_run(text)
        run.bold = bold
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


class _FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


@pytest.fixture
def make_docx():
    return _build_docx


@pytest.fixture
def pdf_pages(monkeypatch):
    """Make PdfReader hand back the given page texts."""
    def _install(pages):
        class _FakeReader:
            def __init__(self, stream):
                self.pages = [_FakePage(t) for t in pages]
        monkeypatch.setattr(extraction, "PdfReader", _FakeReader)
    return _install
