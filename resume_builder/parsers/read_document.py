"""
Binary resume upload -> plain text.

PDFs go through a fixed chain of strategies, stopping at the first that
yields non-empty text:
 1. PyMuPDF text layer
 2. pdfplumber page-by-page reader
 3. raw content-stream scan (last resort, noisy, length-gated)

DOCX is read with python-docx (no fallback). Legacy DOC is decoded as text
and stripped of non-printable characters, which is best effort only.
"""
import io
import logging
import re
from typing import Callable, List, Tuple

import fitz  # PyMuPDF
import pdfplumber
from docx import Document as DocxDocument

from resume_builder.config import settings
from resume_builder.constants import MEDIA_TYPE_KINDS
from resume_builder.errors import (
    ExtractionError,
    ExtractionFailureCategory,
    StrategyFailure,
)

logger = logging.getLogger(__name__)

_TEXT_BLOCK_RE = re.compile(r"\bBT\b(.*?)\bET\b", re.DOTALL)
_LITERAL_STRING_RE = re.compile(r"\(((?:\\.|[^\\)])*)\)")
_LITERAL_ESCAPE_RE = re.compile(r"\\([()\\])")
_NON_PRINTABLE_RE = re.compile(r"[\x00-\x1F\x7F-\x9F]")
# Keeps \t and \n; \r is normalised away before this runs
_DOC_CONTROL_RE = re.compile(r"[\x00-\x08\x0B-\x1F\x7F-\x9F]")


class _StrategyFailed(Exception):
    def __init__(self, reason: str, category: ExtractionFailureCategory):
        self.reason = reason
        self.category = category
        super().__init__(reason)


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _looks_like_password_error(error: Exception) -> bool:
    description = f"{type(error).__name__} {error!r} {error.__cause__!r}".lower()
    return "password" in description or "encrypt" in description


# --- PDF strategies ---
def read_pdf_text_layer(data: bytes) -> str:
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise _StrategyFailed(
            f"Could not open PDF: {e}", ExtractionFailureCategory.CORRUPTED
        ) from e

    try:
        if doc.needs_pass:
            raise _StrategyFailed(
                "Password required to open document",
                ExtractionFailureCategory.PASSWORD_PROTECTED,
            )
        text = "\n".join(page.get_text("text") for page in doc)
    finally:
        doc.close()

    if not text.strip():
        raise _StrategyFailed(
            "No text content found", ExtractionFailureCategory.IMAGE_BASED
        )
    return text


def read_pdf_pages(data: bytes) -> str:
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            page_texts = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        category = (
            ExtractionFailureCategory.PASSWORD_PROTECTED
            if _looks_like_password_error(e)
            else ExtractionFailureCategory.CORRUPTED
        )
        raise _StrategyFailed(
            f"Could not read PDF pages: {e!r}", category
        ) from e

    text = "\n".join(page_texts)
    if not text.strip():
        raise _StrategyFailed(
            "No text content found", ExtractionFailureCategory.IMAGE_BASED
        )
    return text


def scan_raw_pdf_bytes(data: bytes) -> str:
    raw = data.decode("latin-1")
    blocks = _TEXT_BLOCK_RE.findall(raw)
    if not blocks:
        raise _StrategyFailed(
            "No content-stream text markers found",
            ExtractionFailureCategory.CORRUPTED,
        )

    fragments: List[str] = []
    for block in blocks:
        literals = _LITERAL_STRING_RE.findall(block)
        if literals:
            fragments.extend(_LITERAL_ESCAPE_RE.sub(r"\1", lit) for lit in literals)
        else:
            fragments.append(block)

    text = _NON_PRINTABLE_RE.sub(" ", " ".join(fragments))
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) <= settings.raw_scan_min_chars:
        raise _StrategyFailed(
            "Insufficient readable text found", ExtractionFailureCategory.CORRUPTED
        )
    return text


PDF_STRATEGIES: List[Tuple[str, Callable[[bytes], str]]] = [
    ("pymupdf", read_pdf_text_layer),
    ("pdfplumber", read_pdf_pages),
    ("raw-scan", scan_raw_pdf_bytes),
]


def _aggregate_category(failures: List[StrategyFailure]) -> ExtractionFailureCategory:
    categories = {failure.category for failure in failures}
    if ExtractionFailureCategory.PASSWORD_PROTECTED in categories:
        return ExtractionFailureCategory.PASSWORD_PROTECTED
    if ExtractionFailureCategory.IMAGE_BASED in categories:
        return ExtractionFailureCategory.IMAGE_BASED
    return ExtractionFailureCategory.CORRUPTED


def extract_text_from_pdf(data: bytes) -> str:
    failures: List[StrategyFailure] = []
    for name, strategy in PDF_STRATEGIES:
        try:
            text = strategy(data)
        except _StrategyFailed as e:
            failures.append(
                StrategyFailure(strategy=name, reason=e.reason, category=e.category)
            )
            logger.warning("PDF extraction with %s failed: %s", name, e.reason)
            continue
        except Exception as e:
            failures.append(
                StrategyFailure(
                    strategy=name,
                    reason=str(e) or type(e).__name__,
                    category=ExtractionFailureCategory.CORRUPTED,
                )
            )
            logger.warning("PDF extraction with %s raised: %s", name, e)
            continue

        if text.strip():
            logger.info("Extracted %d characters with %s", len(text), name)
            return text

    category = _aggregate_category(failures)
    error = ExtractionError(category, failures=failures)
    logger.error(
        "Failed to extract text from PDF using all available methods:\n%s",
        error.technical_details,
    )
    raise error


# --- Word documents ---
def extract_text_from_docx(data: bytes) -> str:
    try:
        doc = DocxDocument(io.BytesIO(data))
        parts = [paragraph.text for paragraph in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    parts.extend(paragraph.text for paragraph in cell.paragraphs)
    except Exception as e:
        logger.error("DOCX extraction failed: %s", e)
        raise ExtractionError(
            ExtractionFailureCategory.CORRUPTED,
            "Failed to extract text from DOCX",
            failures=[
                StrategyFailure(
                    strategy="python-docx",
                    reason=str(e) or type(e).__name__,
                    category=ExtractionFailureCategory.CORRUPTED,
                )
            ],
        ) from e
    return "\n".join(parts)


def extract_text_from_doc(data: bytes) -> str:
    text = normalize_line_endings(data.decode("utf-8", errors="ignore"))
    text = _DOC_CONTROL_RE.sub(" ", text)
    text = re.sub(r"[ \t]+", " ", text)
    return text.strip()


def extract_text(data: bytes, media_type: str) -> str:
    """Extract plain text from an uploaded resume.

    Raises ExtractionError carrying a failure category and a remediation
    hint; an empty result is always reported as a failure.
    """
    kind = MEDIA_TYPE_KINDS.get((media_type or "").strip().lower())
    if kind is None:
        raise ExtractionError(
            ExtractionFailureCategory.UNSUPPORTED,
            f'File type "{media_type}" is not supported. '
            "Please upload a PDF, DOC, or DOCX file.",
        )
    if not data:
        raise ExtractionError(
            ExtractionFailureCategory.CORRUPTED,
            "The uploaded file appears to be empty.",
        )

    if kind == "pdf":
        text = extract_text_from_pdf(data)
    elif kind == "docx":
        text = extract_text_from_docx(data)
    else:
        text = extract_text_from_doc(data)

    text = normalize_line_endings(text)
    if not text.strip():
        raise ExtractionError(
            ExtractionFailureCategory.CORRUPTED,
            "No readable text could be extracted from the file.",
        )
    return text
