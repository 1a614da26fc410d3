from __future__ import annotations
import re
from typing import Optional, Sequence, Tuple

_KEY_LINE = re.compile(r"^(?:-\s*)?([a-zA-Z_][a-zA-Z0-9_-]*)\s*:")
_ITEM_OPENER = re.compile(r"^-\s*")


def split_lines(text: str) -> list[str]:
    """One entry per line; a trailing newline yields a final empty line."""
    return str(text or "").split("\n")


def line_indent(line: str) -> int:
    line = str(line or "")
    return len(line) - len(line.lstrip())


def is_item_opener(trimmed: str) -> bool:
    return bool(_ITEM_OPENER.match(trimmed))


def key_from_line(line: str) -> Optional[str]:
    """`  - name: A` -> "name"; None when the line holds no key."""
    m = _KEY_LINE.match(str(line or "").strip())
    return m.group(1) if m else None


def previous_non_empty_line(lines: Sequence[str], start_index: int) -> Optional[Tuple[str, int]]:
    for i in range(start_index, -1, -1):
        if i >= len(lines):
            continue
        line = lines[i] or ""
        if line.strip():
            return line, i
    return None


def root_content_bounds(lines: Sequence[str]) -> Tuple[int, int]:
    """(first, last) indices of non-blank lines, (-1, -1) for a blank document."""
    first = last = -1
    for i, line in enumerate(lines):
        if not (line or "").strip():
            continue
        if first < 0:
            first = i
        last = i
    return first, last


def is_root_boundary_empty_line(lines: Sequence[str], line_index: int) -> bool:
    # /* ~~~ blank line strictly above or below all document content ~~~ */
    if line_index < 0 or line_index >= len(lines):
        return False
    if (lines[line_index] or "").strip():
        return False
    first, last = root_content_bounds(lines)
    if first < 0:
        return False
    return line_index < first or line_index > last
