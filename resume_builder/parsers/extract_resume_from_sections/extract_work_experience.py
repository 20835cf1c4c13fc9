from typing import List
from resume_builder.parsers.types import IdFactory, Line, Lines
from resume_builder.parsers.extract_resume_from_sections.lib.common_features import (
    TITLE_SEPARATORS,
    looks_like_job_title,
    split_title_line,
)
from resume_builder.parsers.extract_resume_from_sections.lib.entries import (
    collect_entries,
)
from resume_builder.models import WorkExperience


def extract_work_experience(
    lines: Lines, id_factory: IdFactory
) -> List[WorkExperience]:
    def new_entry(line: Line) -> WorkExperience:
        job_title, company = split_title_line(line, TITLE_SEPARATORS)
        return WorkExperience(id=id_factory(), job_title=job_title, company=company)

    def add_achievement(entry: WorkExperience, text: str) -> None:
        entry.achievements.append(text)

    return collect_entries(
        lines,
        is_entry_start=looks_like_job_title,
        new_entry=new_entry,
        on_bullet=add_achievement,
    )
