import fitz  # PyMuPDF
import pytest

from resume_builder.errors import ExtractionError, ExtractionFailureCategory
from resume_builder.parsers.read_document import (
    extract_text,
    extract_text_from_doc,
    extract_text_from_pdf,
    normalize_line_endings,
    scan_raw_pdf_bytes,
)
from conftest import make_blank_pdf, make_docx, make_pdf

RAW_STREAM_PDF = (
    b"%PDF-1.4\n1 0 obj\n<< /Length 120 >>\nstream\n"
    b"BT /F1 12 Tf 72 712 Td (Jane Doe Senior Software Engineer with ten years "
    b"of backend experience) Tj ET\nendstream\nendobj\n"
)


def test_pdf_text_layer_is_extracted(resume_pdf_bytes):
    text = extract_text(resume_pdf_bytes, "application/pdf")
    assert "John Smith" in text
    assert "Software Engineer at Acme" in text


def test_short_media_type_names_are_accepted(resume_pdf_bytes):
    assert "John Smith" in extract_text(resume_pdf_bytes, "pdf")


def test_unknown_media_type_is_unsupported():
    with pytest.raises(ExtractionError) as exc_info:
        extract_text(b"hello", "text/plain")
    assert exc_info.value.category == ExtractionFailureCategory.UNSUPPORTED
    assert "PDF, DOC, or DOCX" in exc_info.value.message


def test_empty_upload_is_reported_as_corrupted():
    with pytest.raises(ExtractionError) as exc_info:
        extract_text(b"", "application/pdf")
    assert exc_info.value.category == ExtractionFailureCategory.CORRUPTED


def test_image_only_pdf_is_categorised_image_based():
    with pytest.raises(ExtractionError) as exc_info:
        extract_text_from_pdf(make_blank_pdf())
    error = exc_info.value
    assert error.category == ExtractionFailureCategory.IMAGE_BASED
    assert [f.strategy for f in error.failures] == ["pymupdf", "pdfplumber", "raw-scan"]
    assert error.suggestions


def test_password_protected_pdf_is_categorised():
    data = make_pdf(
        "Confidential resume text",
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner-secret",
        user_pw="user-secret",
    )
    with pytest.raises(ExtractionError) as exc_info:
        extract_text_from_pdf(data)
    assert exc_info.value.category == ExtractionFailureCategory.PASSWORD_PROTECTED
    assert "password" in exc_info.value.remediation.lower()


def test_garbage_bytes_are_categorised_corrupted():
    with pytest.raises(ExtractionError) as exc_info:
        extract_text_from_pdf(b"this is definitely not a pdf file")
    error = exc_info.value
    assert error.category == ExtractionFailureCategory.CORRUPTED
    assert len(error.failures) == 3
    assert "pymupdf" in error.technical_details


def test_raw_scan_reads_literal_strings():
    text = scan_raw_pdf_bytes(RAW_STREAM_PDF)
    assert "Jane Doe Senior Software Engineer" in text


def test_raw_scan_is_the_last_resort():
    text = extract_text(RAW_STREAM_PDF, "application/pdf")
    assert "backend experience" in text


def test_docx_paragraphs_and_tables_are_extracted():
    data = make_docx(
        ["Jane Doe", "SKILLS", "Python, SQL"],
        table_rows=[["Languages", "English"]],
    )
    text = extract_text(
        data,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )
    lines = text.splitlines()
    assert lines[:3] == ["Jane Doe", "SKILLS", "Python, SQL"]
    assert "English" in lines


def test_broken_docx_is_a_single_corrupted_failure():
    with pytest.raises(ExtractionError) as exc_info:
        extract_text(b"PK\x03\x04 not really a zip", "docx")
    assert exc_info.value.category == ExtractionFailureCategory.CORRUPTED
    assert [f.strategy for f in exc_info.value.failures] == ["python-docx"]


def test_doc_decoding_strips_control_characters():
    raw = "Jane Doe\r\nEngineer\x00\x07 at Acme\x1f".encode("utf-8")
    assert extract_text_from_doc(raw) == "Jane Doe\nEngineer at Acme"


def test_line_endings_are_normalised():
    assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"
