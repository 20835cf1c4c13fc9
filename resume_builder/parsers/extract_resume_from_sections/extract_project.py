import re
from typing import List
from resume_builder.parsers.types import IdFactory, Line, Lines
from resume_builder.parsers.extract_resume_from_sections.lib.common_features import (
    TITLE_SEPARATORS,
    apply_period,
    is_exact_date_range,
    looks_like_title,
    split_title_line,
)
from resume_builder.parsers.extract_resume_from_sections.lib.entries import (
    collect_entries,
)
from resume_builder.models import Project, VolunteerExperience

TECHNOLOGIES_LINE_REGEX = re.compile(
    r"^(?:technologies|tech stack|built with)\s*:\s*(.*)$", re.I
)


def _apply_exact_period(entry, line: Line) -> bool:
    # Checked before the title rule, which would otherwise take the line
    if is_exact_date_range(line):
        apply_period(entry, line)
        return True
    return False


def extract_project(lines: Lines, id_factory: IdFactory) -> List[Project]:
    def new_entry(line: Line) -> Project:
        return Project(id=id_factory(), name=line)

    def on_detail(entry: Project, line: Line) -> bool:
        if _apply_exact_period(entry, line):
            return True
        match = TECHNOLOGIES_LINE_REGEX.match(line)
        if match:
            entry.technologies.extend(
                tech.strip() for tech in re.split(r"[,;|]", match.group(1)) if tech.strip()
            )
            return True
        return False

    def add_highlight(entry: Project, text: str) -> None:
        entry.highlights.append(text)

    return collect_entries(
        lines,
        is_entry_start=looks_like_title,
        new_entry=new_entry,
        on_bullet=add_highlight,
        on_detail=on_detail,
    )


def extract_volunteer_experience(
    lines: Lines, id_factory: IdFactory
) -> List[VolunteerExperience]:
    def new_entry(line: Line) -> VolunteerExperience:
        role, organization = split_title_line(line, TITLE_SEPARATORS)
        return VolunteerExperience(
            id=id_factory(), role=role, organization=organization
        )

    def add_achievement(entry: VolunteerExperience, text: str) -> None:
        entry.achievements.append(text)

    return collect_entries(
        lines,
        is_entry_start=looks_like_title,
        new_entry=new_entry,
        on_bullet=add_achievement,
        on_detail=_apply_exact_period,
    )
