from typing import List
from resume_builder.parsers.types import IdFactory, Lines
from resume_builder.parsers.extract_resume_from_sections.lib.get_section_lines import (
    get_section_items,
)
from resume_builder.models import Award, Certification, Reference

# One record per line, for sections without internal structure
MIN_CERTIFICATION_LENGTH = 3
MIN_AWARD_LENGTH = 3
MIN_REFERENCE_LENGTH = 5
REFERENCES_ON_REQUEST = "available upon request"


def extract_certifications(lines: Lines, id_factory: IdFactory) -> List[Certification]:
    return [
        Certification(id=id_factory(), name=line)
        for line in get_section_items(lines, MIN_CERTIFICATION_LENGTH)
    ]


def extract_awards(lines: Lines, id_factory: IdFactory) -> List[Award]:
    return [
        Award(id=id_factory(), name=line, category="other")
        for line in get_section_items(lines, MIN_AWARD_LENGTH)
    ]


def extract_references(lines: Lines, id_factory: IdFactory) -> List[Reference]:
    return [
        Reference(id=id_factory(), name=line)
        for line in get_section_items(lines, MIN_REFERENCE_LENGTH)
        if REFERENCES_ON_REQUEST not in line.lower()
    ]
