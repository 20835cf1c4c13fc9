import logging
from typing import Optional, Tuple

from resume_builder.config import settings
from resume_builder.models import ParsedResume  # Pydantic model for the final resume
from resume_builder.parsers.read_document import extract_text, normalize_line_endings
from resume_builder.parsers.group_lines_into_sections import (
    group_lines_into_sections,
    split_into_lines,
)
from resume_builder.parsers.extract_resume_from_sections.main_extractor import (
    extract_resume_from_sections,
)
from resume_builder.parsers.extract_resume_from_sections.lib.ids import (
    resolve_id_factory,
)
from resume_builder.parsers.types import IdFactory, ResumeSectionToLinesMap

logger = logging.getLogger(__name__)


def parse_resume_text(
    text: str,
    id_factory: Optional[IdFactory] = None,
    section_strategy: Optional[str] = None,
) -> ParsedResume:
    """Best-effort structured resume from plain text.

    Total: unrecognised input yields a record whose lists are all empty.
    """
    if not isinstance(text, str):
        text = "" if text is None else str(text)

    # Step 1. Normalise and split into trimmed, non-empty lines
    text = normalize_line_endings(text)
    lines = split_into_lines(text)
    if not lines:
        return ParsedResume()

    # Step 2. Group lines into sections
    sections_map: ResumeSectionToLinesMap = group_lines_into_sections(
        lines, section_strategy or settings.section_strategy
    )

    # Step 3. Extract each section's fields
    resume = extract_resume_from_sections(
        lines, text, sections_map, resolve_id_factory(id_factory)
    )
    logger.debug(
        "Parsed resume: %d work, %d education, %d skills",
        len(resume.work_experience),
        len(resume.education),
        len(resume.skills),
    )
    return resume


def parse_resume_from_upload(
    data: bytes, media_type: str, id_factory: Optional[IdFactory] = None
) -> Tuple[str, ParsedResume]:
    """Extract text from an upload and parse it. Raises ExtractionError."""
    text = extract_text(data, media_type)
    return text, parse_resume_text(text, id_factory=id_factory)
