from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class ExtractionFailureCategory(str, Enum):
    IMAGE_BASED = "image_based"
    PASSWORD_PROTECTED = "password_protected"
    CORRUPTED = "corrupted"
    UNSUPPORTED = "unsupported"


class RenderFailureKind(str, Enum):
    VALIDATION = "validation"
    RENDERER = "renderer"
    TIMEOUT = "timeout"


class StrategyFailure(BaseModel):
    strategy: str
    reason: str
    category: ExtractionFailureCategory


_EXTRACTION_GUIDANCE = {
    ExtractionFailureCategory.IMAGE_BASED: (
        "The file appears to contain only images or non-selectable text.",
        "The file may be scanned or image-based; convert it to a text-based PDF.",
        [
            "Ensure the PDF contains selectable text (not scanned images)",
            "Try using OCR software to convert images to text",
            "Re-create the resume using a word processor",
            "Convert to Word document (.docx) format",
        ],
    ),
    ExtractionFailureCategory.PASSWORD_PROTECTED: (
        "The file appears to be password-protected.",
        "Remove password protection from the file and upload it again.",
        [
            "Remove password protection from the PDF",
            "Save the PDF without password protection",
            "Convert to Word document (.docx) format",
        ],
    ),
    ExtractionFailureCategory.CORRUPTED: (
        "The file appears to be corrupted or invalid.",
        "Re-save or re-export the file from its original source.",
        [
            "Try re-saving the file from the original source",
            "Use \"Save As\" to create a new copy of the file",
            "Convert to Word document (.docx) format",
            "Check if the file downloaded completely",
        ],
    ),
    ExtractionFailureCategory.UNSUPPORTED: (
        "This file type is not supported.",
        "Upload a PDF, DOC, or DOCX file.",
        ["Supported formats: PDF with selectable text, Word (.docx), legacy Word (.doc)"],
    ),
}


class ExtractionError(Exception):
    """Text could not be extracted from an uploaded document.

    Always recoverable by the caller: ``category`` tells which remediation to
    show, ``failures`` lists the reason each strategy gave up.
    """

    def __init__(
        self,
        category: ExtractionFailureCategory,
        message: Optional[str] = None,
        failures: Optional[List[StrategyFailure]] = None,
    ):
        default_message, remediation, suggestions = _EXTRACTION_GUIDANCE[category]
        self.category = category
        self.message = message or default_message
        self.remediation = remediation
        self.suggestions = list(suggestions)
        self.failures = list(failures or [])
        super().__init__(self.message)

    @property
    def technical_details(self) -> str:
        if not self.failures:
            return self.message
        return "\n".join(f"{f.strategy}: {f.reason}" for f in self.failures)

    def to_detail(self) -> dict:
        return {
            "error": "Text extraction failed",
            "category": self.category.value,
            "message": self.message,
            "remediation": self.remediation,
            "suggestions": self.suggestions,
            "technicalDetails": self.technical_details,
        }


class ResumeValidationError(ValueError):
    """The resume payload has an unusable shape; nothing was rendered."""

    kind = RenderFailureKind.VALIDATION


class RenderError(Exception):
    kind = RenderFailureKind.RENDERER
    remediation = "Try shortening long sections or removing unusual characters, then try again."

    def __init__(self, message: str, attempts: Optional[List[str]] = None):
        self.message = message
        self.attempts = list(attempts or [])
        super().__init__(message)

    def to_detail(self) -> dict:
        return {
            "error": "PDF generation failed",
            "kind": self.kind.value,
            "message": self.message,
            "remediation": self.remediation,
            "attempts": self.attempts,
        }


class RendererError(RenderError):
    """The document renderer failed on every degradation tier."""


class RenderTimeoutError(RenderError):
    kind = RenderFailureKind.TIMEOUT
    remediation = "PDF generation is taking too long. Please try again later."
