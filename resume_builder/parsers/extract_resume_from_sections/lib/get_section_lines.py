from typing import List
from resume_builder.parsers.types import Lines, ResumeSectionToLinesMap


def get_section_lines_by_keys(
    sections: ResumeSectionToLinesMap, keys: List[str]
) -> Lines:
    for key in keys:
        section_lines = sections.get(key)
        if section_lines:
            return section_lines
    return []


def get_section_items(lines: Lines, min_length: int) -> List[str]:
    """Lines longer than min_length, as list items (one item per line)."""
    return [line for line in lines if len(line) > min_length]
