import re
from typing import Dict, List, Optional
from resume_builder.parsers.types import (
    Line,
    Lines,
    ResumeKey,
    OptionalSectionRange,
    ResumeSectionToLinesMap,
    SectionStrategy,
)
from resume_builder.parsers.extract_resume_from_sections.lib.bullet_points import (
    is_bullet_line,
)

SUMMARY_SECTION: ResumeKey = "summary"
WORK_SECTION: ResumeKey = "work_experience"
EDUCATION_SECTION: ResumeKey = "education"
SKILLS_SECTION: ResumeKey = "skills"
PROJECTS_SECTION: ResumeKey = "projects"
CERTIFICATIONS_SECTION: ResumeKey = "certifications"
AWARDS_SECTION: ResumeKey = "awards"
LANGUAGES_SECTION: ResumeKey = "languages"
REFERENCES_SECTION: ResumeKey = "references"
VOLUNTEER_SECTION: ResumeKey = "volunteer"

# Header synonyms per section, matched case-insensitively as substrings
SECTION_KEYWORDS: Dict[ResumeKey, List[str]] = {
    SUMMARY_SECTION: ["summary", "objective", "about me"],
    WORK_SECTION: [
        "experience",
        "work experience",
        "employment",
        "professional experience",
    ],
    EDUCATION_SECTION: ["education", "academic background", "qualifications"],
    SKILLS_SECTION: [
        "skills",
        "technical skills",
        "core competencies",
        "technologies",
    ],
    CERTIFICATIONS_SECTION: [
        "certifications",
        "certificates",
        "professional certifications",
    ],
    PROJECTS_SECTION: ["projects", "personal projects", "side projects"],
    VOLUNTEER_SECTION: ["volunteer", "volunteer experience", "community service"],
    AWARDS_SECTION: ["awards", "honors", "achievements", "recognition"],
    LANGUAGES_SECTION: ["languages", "language skills"],
    REFERENCES_SECTION: ["references"],
}

# Canonical names that close a section (not the full synonym list)
SECTION_BOUNDARY_KEYWORDS = [
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "awards",
    "languages",
    "references",
    "volunteer",
]

KEYWORD_STRATEGY: SectionStrategy = "keyword"
HEADING_STRATEGY: SectionStrategy = "heading"
SECTION_STRATEGIES = (KEYWORD_STRATEGY, HEADING_STRATEGY)

MAX_HEADING_WORDS = 4


def split_into_lines(text: str) -> Lines:
    """Trimmed, non-empty lines of the text, in order."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def line_contains_keyword(line: Line, keywords: List[str]) -> bool:
    line_lower = line.lower()
    return any(keyword in line_lower for keyword in keywords)


def is_heading_line(line: Line) -> bool:
    """Short, non-bulleted line: "EXPERIENCE", "Technical Skills:"."""
    if is_bullet_line(line):
        return False
    words = re.sub(r"[:\s]+$", "", line).split()
    return 0 < len(words) <= MAX_HEADING_WORDS


def is_section_header(
    line: Line, keywords: List[str], strategy: SectionStrategy = KEYWORD_STRATEGY
) -> bool:
    if strategy == HEADING_STRATEGY and not is_heading_line(line):
        return False
    return line_contains_keyword(line, keywords)


def find_section_start(
    lines: Lines, keywords: List[str], strategy: SectionStrategy = KEYWORD_STRATEGY
) -> Optional[int]:
    for i, line in enumerate(lines):
        if is_section_header(line, keywords, strategy):
            return i
    return None


def find_next_section_start(
    lines: Lines, start_index: int, strategy: SectionStrategy = KEYWORD_STRATEGY
) -> int:
    """Index of the first boundary header at or after start_index, else len(lines)."""
    for i in range(start_index, len(lines)):
        if is_section_header(lines[i], SECTION_BOUNDARY_KEYWORDS, strategy):
            return i
    return len(lines)


def get_section_range(
    lines: Lines, keywords: List[str], strategy: SectionStrategy = KEYWORD_STRATEGY
) -> OptionalSectionRange:
    start = find_section_start(lines, keywords, strategy)
    if start is None:
        return None
    return start + 1, find_next_section_start(lines, start + 1, strategy)


def group_lines_into_sections(
    lines: Lines, strategy: SectionStrategy = KEYWORD_STRATEGY
) -> ResumeSectionToLinesMap:
    """Body lines for every known section; sections without a header map to []."""
    if strategy not in SECTION_STRATEGIES:
        raise ValueError(f"Unknown section strategy: {strategy}")

    sections_map: ResumeSectionToLinesMap = {}
    for section_key, keywords in SECTION_KEYWORDS.items():
        section_range = get_section_range(lines, keywords, strategy)
        if section_range is None:
            sections_map[section_key] = []
        else:
            start, end = section_range
            sections_map[section_key] = lines[start:end]
    return sections_map
