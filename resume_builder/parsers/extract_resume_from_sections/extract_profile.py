import re
from typing import Optional
from resume_builder.parsers.types import Lines
from resume_builder.models import PersonalInfo

NAME_SEARCH_LINES = 5
NAME_REGEX = re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+")
EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_REGEX = re.compile(r"(?:\+?1[-\s]?)?\(?[0-9]{3}\)?[-\s]?[0-9]{3}[-\s]?[0-9]{4}")
LINKEDIN_REGEX = re.compile(
    r"(?:linkedin\.com/in/|linkedin\.com/profile/view\?id=)([a-zA-Z0-9-]+)", re.I
)
GITHUB_REGEX = re.compile(r"(?:github\.com/)([a-zA-Z0-9-]+)", re.I)
# "Austin, TX" or "Berlin, Germany"
ADDRESS_REGEX = re.compile(r"([A-Z][a-z]+,\s*[A-Z]{2}|[A-Z][a-z]+\s*,\s*[A-Z][a-z]+)")


def _first_match(regex: re.Pattern, text: str) -> Optional[str]:
    match = regex.search(text)
    return match.group(0) if match else None


def extract_name(lines: Lines) -> Optional[str]:
    # The name is usually the first prominent line; contact lines are skipped
    for line in lines[:NAME_SEARCH_LINES]:
        if NAME_REGEX.match(line) and "@" not in line and "http" not in line:
            return line
    return None


def extract_profile(lines: Lines, text: str, summary_lines: Lines) -> PersonalInfo:
    """Contact details from the whole text; each field is matched independently."""
    summary = " ".join(summary_lines).strip()
    return PersonalInfo(
        full_name=extract_name(lines),
        email=_first_match(EMAIL_REGEX, text),
        phone=_first_match(PHONE_REGEX, text),
        linkedin=_first_match(LINKEDIN_REGEX, text),
        github=_first_match(GITHUB_REGEX, text),
        address=_first_match(ADDRESS_REGEX, text),
        professional_summary=summary or None,
    )
