# resume_builder/services/pdf_renderer.py
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import fitz  # PyMuPDF

from resume_builder.constants import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    DEFAULT_SECTION_ORDER,
    PAGE_MARGIN_PT,
)
from resume_builder.errors import RendererError
from resume_builder.models import SanitizedResume

logger = logging.getLogger(__name__)

REGULAR_FONT = "notos"  # Noto Sans, shipped by pymupdf-fonts
BOLD_FONT = "notosbo"
FALLBACK_FONT = "cjk"  # Droid Sans Fallback, built into MuPDF

NAME_SIZE = 20
HEADING_SIZE = 13
BODY_SIZE = 10
LINE_SPACING = 1.4
BULLET = "-"

# (text, font, size, indent) for one logical paragraph
Paragraph = Tuple[str, str, float, float]

_fonts: Dict[str, fitz.Font] = {}


def _font(name: str) -> fitz.Font:
    if name not in _fonts:
        _fonts[name] = fitz.Font(name)
    return _fonts[name]


def _font_for(text: str, font: str) -> str:
    """The requested font, or the CJK fallback when it lacks a glyph the text needs."""
    primary = _font(font)
    for char in set(text):
        if char.isspace() or primary.has_glyph(ord(char)):
            continue
        if _font(FALLBACK_FONT).has_glyph(ord(char)):
            return FALLBACK_FONT
    return font


def _resource_name(font: str) -> str:
    # Kept apart from the base-14 and pymupdf-fonts reserved names
    return f"Resume-{font}"


def _has(text: Optional[str]) -> bool:
    return bool(text and text.strip())


def _join(*parts: Optional[str], sep: str = " | ") -> str:
    return sep.join(p.strip() for p in parts if _has(p))


def _period(start: str, end: str) -> str:
    return _join(start, end, sep=" - ")


def _body(text: str, indent: float = 0) -> Paragraph:
    return text, REGULAR_FONT, BODY_SIZE, indent


def _strong(text: str, indent: float = 0) -> Paragraph:
    return text, BOLD_FONT, BODY_SIZE, indent


def _bullets(items: Sequence[str], indent: float = 12) -> List[Paragraph]:
    return [_body(f"{BULLET} {item}", indent) for item in items if _has(item)]


class _PageWriter:
    """Writes wrapped lines top to bottom, starting new A4 pages as needed."""

    def __init__(self, doc: fitz.Document):
        self.doc = doc
        self.width = A4_WIDTH_PT - 2 * PAGE_MARGIN_PT
        self.page = None
        self.page_fonts = set()
        self.y = 0.0
        self._new_page()

    def _new_page(self) -> None:
        self.page = self.doc.new_page(width=A4_WIDTH_PT, height=A4_HEIGHT_PT)
        self.page_fonts = set()
        self.y = PAGE_MARGIN_PT

    def _use_font(self, font: str) -> None:
        if font not in self.page_fonts:
            self.page.insert_font(fontname=_resource_name(font), fontbuffer=_font(font).buffer)
            self.page_fonts.add(font)

    def _wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        measure = _font(font).text_length
        lines: List[str] = []
        for raw_line in text.splitlines() or [""]:
            current = ""
            for word in raw_line.split():
                candidate = f"{current} {word}" if current else word
                if measure(candidate, fontsize=size) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                # A single word wider than the line is hard-split
                while measure(word, fontsize=size) > width:
                    cut = len(word) - 1
                    while cut > 1 and measure(word[:cut], fontsize=size) > width:
                        cut -= 1
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)
        return lines

    def write(self, text: str, font: str, size: float, indent: float = 0) -> None:
        font = _font_for(text, font)
        line_height = size * LINE_SPACING
        for line in self._wrap(text, font, size, self.width - indent):
            if self.y + line_height > A4_HEIGHT_PT - PAGE_MARGIN_PT:
                self._new_page()
            self.y += line_height
            self._use_font(font)
            self.page.insert_text(
                (PAGE_MARGIN_PT + indent, self.y),
                line,
                fontname=_resource_name(font),
                fontsize=size,
            )

    def gap(self, points: float = 6) -> None:
        self.y += points


# --- Section layouts ---
def _summary(resume: SanitizedResume) -> List[Paragraph]:
    summary = resume.personal_info.professional_summary
    return [_body(summary)] if _has(summary) else []


def _work(resume: SanitizedResume) -> List[Paragraph]:
    paragraphs: List[Paragraph] = []
    for job in resume.work_experience:
        paragraphs.append(_strong(_join(job.job_title, job.company, job.location)))
        if _has(_period(job.start_date, job.end_date)):
            paragraphs.append(_body(_period(job.start_date, job.end_date)))
        paragraphs.extend(_bullets(job.achievements))
        if job.technologies:
            paragraphs.append(_body("Technologies: " + ", ".join(job.technologies), 12))
    return paragraphs


def _skills(resume: SanitizedResume) -> List[Paragraph]:
    return [_body(", ".join(resume.skills))] if resume.skills else []


def _education(resume: SanitizedResume) -> List[Paragraph]:
    paragraphs: List[Paragraph] = []
    for edu in resume.education:
        paragraphs.append(_strong(_join(edu.degree, edu.institution, edu.location)))
        details = _join(_period(edu.start_date, edu.end_date), f"GPA: {edu.gpa}" if _has(edu.gpa) else "")
        if details:
            paragraphs.append(_body(details))
        if edu.relevant_coursework:
            paragraphs.append(_body("Coursework: " + ", ".join(edu.relevant_coursework), 12))
        paragraphs.extend(_bullets(edu.honors))
    return paragraphs


def _certifications(resume: SanitizedResume) -> List[Paragraph]:
    return [
        _body(_join(cert.name, cert.issuing_organization, cert.issue_date))
        for cert in resume.certifications
        if _has(_join(cert.name, cert.issuing_organization, cert.issue_date))
    ]


def _projects(resume: SanitizedResume) -> List[Paragraph]:
    paragraphs: List[Paragraph] = []
    for project in resume.projects:
        paragraphs.append(_strong(_join(project.name, _period(project.start_date, project.end_date))))
        if _has(project.description):
            paragraphs.append(_body(project.description))
        if project.technologies:
            paragraphs.append(_body("Technologies: " + ", ".join(project.technologies), 12))
        paragraphs.extend(_bullets(project.highlights))
        links = _join(project.github_url, project.live_url)
        if links:
            paragraphs.append(_body(links, 12))
    return paragraphs


def _volunteer(resume: SanitizedResume) -> List[Paragraph]:
    paragraphs: List[Paragraph] = []
    for vol in resume.volunteer_experience:
        end = "Present" if vol.current and not _has(vol.end_date) else vol.end_date
        paragraphs.append(_strong(_join(vol.role, vol.organization, vol.location)))
        if _has(_period(vol.start_date, end)):
            paragraphs.append(_body(_period(vol.start_date, end)))
        if _has(vol.description):
            paragraphs.append(_body(vol.description))
        paragraphs.extend(_bullets(vol.achievements))
        if _has(vol.impact):
            paragraphs.append(_body(f"Impact: {vol.impact}", 12))
    return paragraphs


def _awards(resume: SanitizedResume) -> List[Paragraph]:
    paragraphs: List[Paragraph] = []
    for award in resume.awards:
        header = _join(award.name, award.organization, award.date)
        if header:
            paragraphs.append(_strong(header))
        if _has(award.description):
            paragraphs.append(_body(award.description, 12))
    return paragraphs


def _languages(resume: SanitizedResume) -> List[Paragraph]:
    lines = []
    for language in resume.languages:
        text = language.name.strip()
        if _has(language.proficiency):
            text = f"{text} ({language.proficiency.strip()})" if text else language.proficiency
        if _has(text):
            lines.append(_body(text))
    if not lines and resume.personal_info.languages:
        lines.append(_body(", ".join(resume.personal_info.languages)))
    return lines


def _references(resume: SanitizedResume) -> List[Paragraph]:
    if resume.available_on_request:
        return [_body("Available upon request")]
    paragraphs: List[Paragraph] = []
    for ref in resume.references:
        header = _join(ref.name, ref.title, ref.company)
        if header:
            paragraphs.append(_strong(header))
        contact = _join(ref.email, ref.phone, ref.relationship)
        if contact:
            paragraphs.append(_body(contact, 12))
    return paragraphs


def _hobbies(resume: SanitizedResume) -> List[Paragraph]:
    return [_body(", ".join(resume.hobbies))] if resume.hobbies else []


SECTION_LAYOUTS: Dict[str, Callable[[SanitizedResume], List[Paragraph]]] = {
    "Professional Summary": _summary,
    "Work Experience": _work,
    "Skills": _skills,
    "Education": _education,
    "Certifications": _certifications,
    "Projects": _projects,
    "Volunteer Experience": _volunteer,
    "Awards": _awards,
    "Languages": _languages,
    "References": _references,
    "Hobbies & Interests": _hobbies,
}


class PdfRenderer:
    """Lays a SanitizedResume out as an A4 PDF with PyMuPDF."""

    def __init__(self, section_order: Optional[Sequence[str]] = None):
        self.section_order = list(section_order or DEFAULT_SECTION_ORDER)

    def render(self, resume: SanitizedResume) -> bytes:
        doc = fitz.open()
        try:
            writer = _PageWriter(doc)
            info = resume.personal_info
            writer.write(info.full_name, BOLD_FONT, NAME_SIZE)
            place = info.address if _has(info.address) else info.location
            contact = _join(info.email, info.phone, place)
            if contact:
                writer.write(contact, REGULAR_FONT, BODY_SIZE)
            links = _join(info.linkedin, info.github, info.portfolio)
            if links:
                writer.write(links, REGULAR_FONT, BODY_SIZE)

            for title in self.section_order:
                layout = SECTION_LAYOUTS.get(title)
                if layout is None:
                    continue
                paragraphs = layout(resume)
                if not paragraphs:
                    continue
                writer.gap(10)
                writer.write(title, BOLD_FONT, HEADING_SIZE)
                writer.gap(2)
                for text, font, size, indent in paragraphs:
                    writer.write(text, font, size, indent)

            doc.set_metadata({"title": f"{info.full_name.strip()} - Resume", "creator": "resume-builder"})
            data = doc.tobytes(garbage=3, deflate=True)
        finally:
            doc.close()

        if not data:
            raise RendererError("Renderer produced an empty document")
        logger.debug("Rendered %d-byte PDF for %r", len(data), resume.personal_info.full_name)
        return data
