# resume_builder/parsers/extract_resume_from_sections/lib/common_features.py
import re
from typing import List, Optional, Pattern, Sequence, Tuple
from resume_builder.parsers.types import Line
from resume_builder.parsers.extract_resume_from_sections.lib.bullet_points import (
    is_bullet_line,
)

# Any one of these makes a line "look like a date"
DATE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\b", re.I),
    re.compile(r"\b\d{4}\b"),
    re.compile(r"\b(present|current|now)\b", re.I),
    re.compile(r"\d{1,2}/\d{1,2}/\d{2,4}"),
]

# "Jan 2020 - Present", "June 2018 – Dec 2019"
DATE_RANGE_REGEX = re.compile(
    r"(\w+\s+\d{4})\s*[-–—]\s*(\w+\s+\d{4}|present|current)", re.I
)
# "2016 - 2020", "2019 – now"
YEAR_RANGE_REGEX = re.compile(
    r"\b(\d{4})\s*[-–—]\s*(\d{4}|present|current|now)\b", re.I
)
# A line that is nothing but a single date: "May 2020", "2021"
SINGLE_DATE_REGEX = re.compile(r"^(?:[A-Za-z]+\.?\s+)?\d{4}$")

JOB_TITLE_PATTERNS: List[Pattern[str]] = [
    re.compile(
        r"\b(developer|engineer|manager|analyst|designer|consultant|director"
        r"|coordinator|specialist|lead|senior|junior)\b",
        re.I,
    ),
    re.compile(r"\bat\s+[A-Z]"),
    re.compile(
        r"\b(software|web|mobile|data|product|project|marketing|sales|hr|finance)\b",
        re.I,
    ),
]

DEGREE_PATTERNS: List[Pattern[str]] = [
    re.compile(
        r"\b(bachelor|master|phd|doctorate|associate|diploma|certificate)\b", re.I
    ),
    re.compile(r"\b(b\.?s\.?|m\.?s\.?|b\.?a\.?|m\.?a\.?|ph\.?d\.?)\b", re.I),
    re.compile(r"\buniversity\b", re.I),
    re.compile(r"\bcollege\b", re.I),
]

# Title/organisation separators, tried in priority order
TITLE_SEPARATORS = (" at ", " - ", " | ")
EDUCATION_SEPARATORS = (" at ", " - ", " | ", " from ")


def matches_any(line: Line, patterns: Sequence[Pattern[str]]) -> bool:
    return any(p.search(line) for p in patterns)


def looks_like_date(line: Line) -> bool:
    return matches_any(line, DATE_PATTERNS)


def looks_like_job_title(line: Line) -> bool:
    return not is_bullet_line(line) and matches_any(line, JOB_TITLE_PATTERNS)


def looks_like_degree(line: Line) -> bool:
    return not is_bullet_line(line) and matches_any(line, DEGREE_PATTERNS)


def looks_like_title(line: Line) -> bool:
    return 5 < len(line) < 100 and not is_bullet_line(line)


def parse_date_range(line: Line) -> Optional[Tuple[str, str]]:
    """(start, end) when the line holds a recognisable range, else None.

    Open-ended ranges keep the literal end word ("Present").
    """
    match = DATE_RANGE_REGEX.search(line) or YEAR_RANGE_REGEX.search(line)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


def is_exact_date_range(line: Line) -> bool:
    """True when the whole line is a date range and nothing else."""
    match = DATE_RANGE_REGEX.fullmatch(line.strip()) or YEAR_RANGE_REGEX.fullmatch(
        line.strip()
    )
    return match is not None


def parse_single_date(line: Line) -> Optional[str]:
    stripped = line.strip()
    return stripped if SINGLE_DATE_REGEX.match(stripped) else None


def split_title_line(
    line: Line, separators: Sequence[str] = TITLE_SEPARATORS
) -> Tuple[Optional[str], Optional[str]]:
    """Split "Title at Org" style lines into (title, org).

    The first separator present wins; without one the whole line is the title.
    """
    for separator in separators:
        if separator in line:
            title, rest = line.split(separator, 1)
            return (title.strip() or line.strip()), (rest.strip() or None)
    return line.strip(), None


def apply_period(entry, line: Line) -> None:
    """Copy a date range (or a lone date, as end date) from line onto entry."""
    date_range = parse_date_range(line)
    if date_range:
        entry.start_date, entry.end_date = date_range
        return
    single = parse_single_date(line)
    if single:
        entry.end_date = single
