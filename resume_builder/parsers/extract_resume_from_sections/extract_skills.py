import re
from typing import List
from resume_builder.parsers.types import Lines

SKILL_SEPARATORS_REGEX = re.compile(r"[,;|•\-*]")


def extract_skills(lines: Lines) -> List[str]:
    """Every fragment longer than one character, in order, duplicates kept."""
    skills: List[str] = []
    for line in lines:
        for fragment in SKILL_SEPARATORS_REGEX.split(line):
            fragment = fragment.strip()
            if len(fragment) > 1:
                skills.append(fragment)
    return skills
