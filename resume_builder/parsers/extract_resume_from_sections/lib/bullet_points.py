import re
from resume_builder.parsers.types import Line

# Only these three start a bullet; other glyphs are plain text
BULLET_POINTS_CHARS = ("•", "-", "*")
BULLET_REGEX = re.compile(r"^[•\-*]\s*")


def is_bullet_line(line: Line) -> bool:
    return line.startswith(BULLET_POINTS_CHARS)


def strip_bullet(line: Line) -> str:
    return BULLET_REGEX.sub("", line, count=1).strip()

