from resume_builder.parsers.types import IdFactory, Lines, ResumeSectionToLinesMap
from resume_builder.parsers.group_lines_into_sections import (
    AWARDS_SECTION,
    CERTIFICATIONS_SECTION,
    EDUCATION_SECTION,
    LANGUAGES_SECTION,
    PROJECTS_SECTION,
    REFERENCES_SECTION,
    SKILLS_SECTION,
    SUMMARY_SECTION,
    VOLUNTEER_SECTION,
    WORK_SECTION,
)
from resume_builder.models import ParsedResume  # Pydantic model
from resume_builder.parsers.extract_resume_from_sections.extract_profile import (
    extract_profile,
)
from resume_builder.parsers.extract_resume_from_sections.extract_work_experience import (
    extract_work_experience,
)
from resume_builder.parsers.extract_resume_from_sections.extract_education import (
    extract_education,
)
from resume_builder.parsers.extract_resume_from_sections.extract_skills import (
    extract_skills,
)
from resume_builder.parsers.extract_resume_from_sections.extract_project import (
    extract_project,
    extract_volunteer_experience,
)
from resume_builder.parsers.extract_resume_from_sections.extract_listings import (
    extract_awards,
    extract_certifications,
    extract_references,
)
from resume_builder.parsers.extract_resume_from_sections.extract_languages import (
    extract_languages,
)
from resume_builder.parsers.extract_resume_from_sections.lib.get_section_lines import (
    get_section_lines_by_keys,
)


def extract_resume_from_sections(
    lines: Lines,
    text: str,
    sections: ResumeSectionToLinesMap,
    id_factory: IdFactory,
) -> ParsedResume:
    # Each section is extracted on its own; one failing to match never
    # affects the others
    def section(key):
        return get_section_lines_by_keys(sections, [key])

    return ParsedResume(
        personal_info=extract_profile(lines, text, section(SUMMARY_SECTION)),
        work_experience=extract_work_experience(section(WORK_SECTION), id_factory),
        education=extract_education(section(EDUCATION_SECTION), id_factory),
        skills=extract_skills(section(SKILLS_SECTION)),
        certifications=extract_certifications(
            section(CERTIFICATIONS_SECTION), id_factory
        ),
        projects=extract_project(section(PROJECTS_SECTION), id_factory),
        volunteer_experience=extract_volunteer_experience(
            section(VOLUNTEER_SECTION), id_factory
        ),
        awards=extract_awards(section(AWARDS_SECTION), id_factory),
        languages=extract_languages(section(LANGUAGES_SECTION), id_factory),
        references=extract_references(section(REFERENCES_SECTION), id_factory),
    )
