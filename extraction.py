import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, NamedTuple, Optional

import mammoth
from bs4 import BeautifulSoup, NavigableString
from pypdf import PdfReader

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload a PDF or DOCX file."


class DocumentError(Exception):
    """Base class for failures before any line parsing happens."""


class UnsupportedFileTypeError(DocumentError):
    pass


class DocumentDecodeError(DocumentError):
    pass


class SourceLine(NamedTuple):
    text: str
    bold: bool = False


@dataclass
class ExtractedText:
    kind: str                       # "pdf" | "docx"
    lines: List[SourceLine] = field(default_factory=list)
    html: bool = False              # lines came from the bold-aware HTML path

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


def detect_document_kind(filename: str, media_type: Optional[str] = None) -> str:
    suffix = PurePath(filename or "").suffix.lower()
    media_type = (media_type or "").split(";")[0].strip().lower()

    if media_type == DOCX_MEDIA_TYPE or suffix == ".docx":
        return "docx"
    if media_type == PDF_MEDIA_TYPE or suffix == ".pdf":
        return "pdf"
    raise UnsupportedFileTypeError(UNSUPPORTED_MESSAGE)


def text_to_lines(text: str) -> List[SourceLine]:
    lines = []
    for raw_line in re.split(r"\r?\n", text or ""):
        line = raw_line.strip()
        if line:
            lines.append(SourceLine(line))
    return lines


# =============================================================================
# PDF
# =============================================================================

RESEGMENT_MAX_PASSES = 4

# Applied in order. Rules eat the whitespace in front of their token but only
# spaces after it, so a break inserted by an earlier rule survives. "A. " goes
# last since earlier breaks decide whether a letter-dot is followed by a space.
_PDF_BREAK_RULES = [
    # numbered question "12) "
    (re.compile(r"\s*(?<![\w(])(\d{1,3})\)[^\S\n]*"), r"\n\1) "),
    # "Q. " unless it already follows a "12) " token
    (re.compile(r"(?<!\d\))(?<!\d\) )\s*(?<![\w.])Q\.[^\S\n]*"), "\nQ. "),
    # options "A) ", "(A) "
    (re.compile(r"\s*(?<![\w(])([A-E])\)[^\S\n]*"), r"\n\1) "),
    (re.compile(r"\s*\(([A-E])\)[^\S\n]*"), r"\n(\1) "),
    (re.compile(r"\s*\b(?:Correct\s+)?Answer\s*:[^\S\n]*", re.IGNORECASE), "\nAnswer: "),
    (re.compile(r"\s*\b(Diff|Skill|Objective|Learning\s+Outcome|AACSB)\s*:[^\S\n]*", re.IGNORECASE), r"\n\1: "),
    # answer-key section markers
    (re.compile(r"\s*\b(Answer\s+Key|Correct\s+Answers|Answers\s*:)", re.IGNORECASE), r"\n\1"),
    # options "A. "
    (re.compile(r"\s*(?<![\w.])([A-E])\.[^\S\n]+"), r"\n\1. "),
]


def _resegment_once(text: str) -> str:
    text = re.sub(r"\s+", " ", text)
    for pattern, replacement in _PDF_BREAK_RULES:
        text = pattern.sub(replacement, text)
    lines = [line.strip() for line in text.split("\n")]
    return "\n".join(line for line in lines if line)


def resegment_pdf_text(text: str) -> str:
    text = text or ""
    for _ in range(RESEGMENT_MAX_PASSES):
        segmented = _resegment_once(text)
        if segmented == text:
            break
        text = segmented
    return text


def _read_pdf_pages(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    full_text = ""
    for page in reader.pages:
        full_text += (page.extract_text() or "") + "\n"
    return full_text


def extract_pdf(data: bytes) -> ExtractedText:
    try:
        raw_text = _read_pdf_pages(data)
    except Exception as exc:
        raise DocumentDecodeError(f"Could not read PDF: {exc}") from exc
    return ExtractedText(kind="pdf", lines=text_to_lines(resegment_pdf_text(raw_text)))


# =============================================================================
# DOCX
# =============================================================================

BOLD_TAGS = {"strong", "b"}
BLOCK_TAGS = ["p", "li", "h1", "h2", "h3", "h4", "h5", "h6", "td", "th"]

# bold markup touching an option label: "<strong>B. Paris" or "B. <strong>Paris"
_BOLD_OPTION_RE = re.compile(
    r"<(?:strong|b)>\s*\(?[A-Ea-e][.)]"
    r"|>\s*\(?[A-Ea-e][.)]\s*<(?:strong|b)>"
)
_PLAIN_LABEL_RE = re.compile(r"\s*(?:\(?[A-Ea-e][.)]\)?)?\s*")


def has_bold_answer_markup(html: str) -> bool:
    return bool(_BOLD_OPTION_RE.search(html or ""))


def _inside_bold(piece: NavigableString, block) -> bool:
    parent = piece.parent
    while parent is not None and parent is not block:
        if parent.name in BOLD_TAGS:
            return True
        parent = parent.parent
    return False


def _block_lines(block) -> List[SourceLine]:
    segments = [[]]
    for piece in block.find_all(string=True):
        bold = _inside_bold(piece, block)
        parts = str(piece).split("\n")
        for idx, part in enumerate(parts):
            if idx > 0:
                segments.append([])
            segments[-1].append((part, bold))

    lines = []
    for segment in segments:
        text = re.sub(r"\s+", " ", "".join(part for part, _ in segment)).strip()
        if not text:
            continue
        plain = "".join(part for part, b in segment if not b)
        has_bold = any(part.strip() for part, b in segment if b)
        # an unbolded option label in front of bold text still counts
        lines.append(SourceLine(text, has_bold and bool(_PLAIN_LABEL_RE.fullmatch(plain))))
    return lines


def html_to_lines(html: str) -> List[SourceLine]:
    soup = BeautifulSoup(html or "", "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")

    lines: List[SourceLine] = []
    for block in soup.find_all(BLOCK_TAGS):
        # only the innermost block carries the text
        if block.find(BLOCK_TAGS):
            continue
        lines.extend(_block_lines(block))
    return lines


def extract_docx(data: bytes) -> ExtractedText:
    try:
        html = mammoth.convert_to_html(io.BytesIO(data)).value
        if has_bold_answer_markup(html):
            logger.debug("Bold option markup found, using HTML lines")
            return ExtractedText(kind="docx", lines=html_to_lines(html), html=True)
        raw_text = mammoth.extract_raw_text(io.BytesIO(data)).value
    except Exception as exc:
        raise DocumentDecodeError(f"Could not read DOCX: {exc}") from exc
    return ExtractedText(kind="docx", lines=text_to_lines(raw_text))


def extract_text(data: bytes, filename: str, media_type: Optional[str] = None) -> ExtractedText:
    kind = detect_document_kind(filename, media_type)
    if kind == "pdf":
        return extract_pdf(data)
    return extract_docx(data)
