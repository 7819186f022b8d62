"""Line attribution shared by the checkers."""
from __future__ import annotations
from typing import Callable

from agents_lint.models import ParsedDocument


def locate(
    parsed: ParsedDocument,
    matches: Callable[[str], bool]
) -> tuple[int | None, str | None]:
    """Find the first line satisfying matches.

    Returns:
        (1-based line number, trimmed line text), or (None, None) if no line matches
    """
    for index, line in enumerate(parsed.lines):
        if matches(line):
            return index + 1, line.strip()
    return None, None


def locate_text(parsed: ParsedDocument, needle: str, ignore_case: bool = False) -> tuple[int | None, str | None]:
    """Find the first line containing needle."""
    if ignore_case:
        lowered = needle.lower()
        return locate(parsed, lambda line: lowered in line.lower())
    return locate(parsed, lambda line: needle in line)
