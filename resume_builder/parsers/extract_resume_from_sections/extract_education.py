import re
from typing import List
from resume_builder.parsers.types import IdFactory, Line, Lines
from resume_builder.parsers.extract_resume_from_sections.lib.common_features import (
    EDUCATION_SEPARATORS,
    looks_like_degree,
    split_title_line,
)
from resume_builder.parsers.extract_resume_from_sections.lib.entries import (
    collect_entries,
)
from resume_builder.models import Education

# "GPA: 3.8", "GPA 3.85/4.0"
GPA_REGEX = re.compile(r"\bGPA\b[:\s]*([0-9](?:\.[0-9]{1,2})?(?:\s*/\s*[0-9](?:\.[0-9]{1,2})?)?)", re.I)
COURSEWORK_REGEX = re.compile(r"\bcourse(?:work|s)?\b", re.I)
COURSEWORK_PREFIX_REGEX = re.compile(r"^(?:relevant\s+)?course(?:work|s)?\s*:\s*", re.I)


def _gpa_of(line: Line):
    match = GPA_REGEX.search(line)
    return match.group(1).replace(" ", "") if match else None


def _split_coursework(text: str) -> List[str]:
    text = COURSEWORK_PREFIX_REGEX.sub("", text)
    return [course.strip() for course in text.split(",") if course.strip()]


def extract_education(lines: Lines, id_factory: IdFactory) -> List[Education]:
    def new_entry(line: Line) -> Education:
        degree, institution = split_title_line(line, EDUCATION_SEPARATORS)
        return Education(
            id=id_factory(), degree=degree, institution=institution, gpa=_gpa_of(line)
        )

    def on_detail(entry: Education, line: Line) -> bool:
        gpa = _gpa_of(line)
        if gpa and not looks_like_degree(line):
            entry.gpa = gpa
            return True
        if COURSEWORK_PREFIX_REGEX.match(line):
            entry.relevant_coursework.extend(_split_coursework(line))
            return True
        return False

    def on_bullet(entry: Education, text: str) -> None:
        if COURSEWORK_REGEX.search(text):
            entry.relevant_coursework.extend(_split_coursework(text))
        else:
            entry.honors.append(text)

    return collect_entries(
        lines,
        is_entry_start=looks_like_degree,
        new_entry=new_entry,
        on_bullet=on_bullet,
        on_detail=on_detail,
    )
