from typing import Any, Callable, List, Optional
from resume_builder.parsers.types import (
    DetailFunction,
    EntryStartFunction,
    Line,
    Lines,
)
from resume_builder.parsers.extract_resume_from_sections.lib.bullet_points import (
    is_bullet_line,
    strip_bullet,
)
from resume_builder.parsers.extract_resume_from_sections.lib.common_features import (
    apply_period,
    looks_like_date,
)


def collect_entries(
    lines: Lines,
    is_entry_start: EntryStartFunction,
    new_entry: Callable[[Line], Any],
    on_bullet: Callable[[Any, str], None],
    on_detail: Optional[DetailFunction] = None,
) -> List[Any]:
    """Walk section lines and build one record per detected entry.

    Lines before the first entry start are dropped. Inside an entry the
    order of checks is: on_detail (returns True when it consumed the line),
    entry start, bullet, date; anything else is ignored.
    """
    entries: List[Any] = []
    current = None

    for line in lines:
        if current is not None and on_detail is not None and on_detail(current, line):
            continue

        if is_entry_start(line):
            current = new_entry(line)
            entries.append(current)
            continue

        if current is None:
            continue

        if is_bullet_line(line):
            text = strip_bullet(line)
            if text:
                on_bullet(current, text)
        elif looks_like_date(line):
            apply_period(current, line)
        # Anything else is noise for this entry

    return entries
