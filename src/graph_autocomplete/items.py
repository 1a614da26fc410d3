from __future__ import annotations
from typing import Optional, Sequence, Tuple

from .config import INDENT_SIZE
from .lines import is_item_opener, key_from_line, line_indent
from .sections import infer_section

_ENTRY_SECTIONS = ("nodes", "links")


def collect_current_object_keys(
    lines: Sequence[str],
    line_index: int,
    section: str,
    end_line_index: Optional[int] = None,
    indent_size: int = INDENT_SIZE,
) -> Tuple[str, ...]:
    """Keys already written in the entry that contains `line_index`, first-seen order."""
    if section not in _ENTRY_SECTIONS:
        return ()
    if end_line_index is None:
        end_line_index = len(lines) - 1

    start = -1
    object_indent = 0
    for i in range(min(line_index, len(lines) - 1), -1, -1):
        trimmed = (lines[i] or "").strip()
        if trimmed and is_item_opener(trimmed):
            start = i
            object_indent = line_indent(lines[i])
            break
    if start < 0:
        return ()

    keys: list[str] = []
    for i in range(start, min(end_line_index, len(lines) - 1) + 1):
        line = lines[i] or ""
        trimmed = line.strip()
        if not trimmed:
            continue
        indent = line_indent(line)
        if i > start and indent <= object_indent and is_item_opener(trimmed):
            break
        if i > start and indent < object_indent:
            break
        # nested collections belong to child entries
        if indent > object_indent + indent_size:
            continue
        key = key_from_line(line)
        if key and key not in keys:
            keys.append(key)
    return tuple(keys)


def find_item_start_backward(lines: Sequence[str], line_index: int, section: str) -> int:
    """Index of the nearest `-` opener whose own section is `section`, else -1."""
    if section not in _ENTRY_SECTIONS:
        return -1
    for i in range(min(line_index, len(lines) - 1), -1, -1):
        line = lines[i] or ""
        trimmed = line.strip()
        if not trimmed:
            continue
        if infer_section(lines, i, line_indent(line)).section != section:
            continue
        if is_item_opener(trimmed):
            return i
    return -1


def collect_item_context_info(
    lines: Sequence[str], line_index: int, section: str, indent_size: int = INDENT_SIZE
) -> Tuple[Tuple[str, ...], bool]:
    """
    (keys used by the entry under the cursor, whether that entry may continue).

    A bare `-` line has no keys of its own yet; in that case the previous
    entry's keys are reported so the user can still extend it.
    """
    current_start = find_item_start_backward(lines, line_index, section)
    if current_start < 0:
        return (), False

    keys = collect_current_object_keys(lines, current_start, section, line_index, indent_size)
    if keys:
        return keys, True

    if (lines[current_start] or "").strip() != "-":
        return (), False

    previous_start = find_item_start_backward(lines, current_start - 1, section)
    if previous_start < 0:
        return (), False
    return collect_current_object_keys(lines, previous_start, section, current_start - 1, indent_size), True
