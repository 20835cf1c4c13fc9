from typing import (
    Any,
    Callable,
    List,
    Optional,
    Tuple,
    Dict as PyDict,
)  # Renamed Dict to PyDict

Line = str
Lines = List[Line]

ResumeKey = str
# Body lines of a section, i.e. [header + 1, next header)
SectionRange = Tuple[int, int]
ResumeSectionToLinesMap = PyDict[ResumeKey, Lines]

# Produces opaque record identifiers; injected so tests get deterministic ids
IdFactory = Callable[[], str]

# "keyword" (substring containment, the default) or "heading" (short header lines only)
SectionStrategy = str

# Callbacks used by the entry state machine
EntryStartFunction = Callable[[Line], bool]
DetailFunction = Callable[[Any, Line], bool]
OptionalSectionRange = Optional[SectionRange]
