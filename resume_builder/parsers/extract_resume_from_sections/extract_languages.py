import re
from typing import List
from resume_builder.parsers.types import IdFactory, Lines
from resume_builder.models import Language, ProficiencyLevel

LANGUAGE_SEPARATORS_REGEX = re.compile(r"[-:,]")


def extract_proficiency(line: str) -> ProficiencyLevel:
    line_lower = line.lower()
    if "native" in line_lower or "fluent" in line_lower:
        return "native"
    if "advanced" in line_lower or "proficient" in line_lower:
        return "advanced"
    if "intermediate" in line_lower:
        return "intermediate"
    return "beginner"


def extract_languages(lines: Lines, id_factory: IdFactory) -> List[Language]:
    languages: List[Language] = []
    for line in lines:
        name = LANGUAGE_SEPARATORS_REGEX.split(line)[0].strip()
        if not name:
            continue
        languages.append(
            Language(id=id_factory(), name=name, proficiency=extract_proficiency(line))
        )
    return languages
