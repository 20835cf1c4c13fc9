import asyncio
import logging
import os
from typing import Optional, Tuple

from fastapi import HTTPException, UploadFile

from resume_builder.config import settings
from resume_builder.constants import MEDIA_TYPE_KINDS
from resume_builder.errors import ExtractionError, ExtractionFailureCategory
from resume_builder.parsers.read_document import extract_text

logger = logging.getLogger(__name__)


def resolve_media_type(content_type: Optional[str], filename: Optional[str]) -> str:
    """
    Declared content type when it is one we read, else the file extension
    (browsers often send application/octet-stream for .doc files).
    """
    declared = (content_type or "").split(";")[0].strip().lower()
    if declared in MEDIA_TYPE_KINDS:
        return declared
    extension = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if extension in MEDIA_TYPE_KINDS:
        return extension
    return declared


async def read_upload_text(file: UploadFile) -> Tuple[bytes, str, str]:
    """
    Read an uploaded resume and extract its text.
    Returns (raw bytes, media type, text); raises HTTPException on any
    rejection so routers can re-raise it unchanged.
    """
    media_type = resolve_media_type(file.content_type, file.filename)
    if media_type not in MEDIA_TYPE_KINDS:
        error = ExtractionError(
            ExtractionFailureCategory.UNSUPPORTED,
            "Invalid file type. Only PDF, DOC, and DOCX files are accepted.",
        )
        raise HTTPException(status_code=400, detail=error.to_detail())

    data = await file.read()
    if not data:
        raise HTTPException(
            status_code=400,
            detail=ExtractionError(
                ExtractionFailureCategory.CORRUPTED,
                "The uploaded file appears to be empty.",
            ).to_detail(),
        )
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB.",
        )

    try:
        # PDF libraries are blocking; keep them off the event loop
        text = await asyncio.to_thread(extract_text, data, media_type)
    except ExtractionError as e:
        logger.warning("Text extraction failed for %s: %s", file.filename, e.message)
        raise HTTPException(status_code=400, detail=e.to_detail()) from e

    if len(text.strip()) < settings.min_extracted_chars:
        error = ExtractionError(
            ExtractionFailureCategory.IMAGE_BASED,
            "Could not extract sufficient text from the file. "
            "Please ensure the file contains readable text.",
        )
        raise HTTPException(status_code=400, detail=error.to_detail())

    return data, media_type, text
