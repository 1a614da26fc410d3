"""
Completion-context classifier.

Works line by line on text that is usually not valid YAML while the user types.
The rules below run in a fixed order and the first match wins; later rules
assume every earlier one failed:

  1. blank root line above/below all content   -> rootItemKey
  2. blank line continuing an entry after `type` -> itemKey
  3. `type: <partial>`                          -> nodeTypeValue / linkTypeValue
  4. `from:` / `to: <partial>` in links         -> endpointValue
  5. `- <partial>` or a bare key at item indent -> itemKey
  6. bare partial identifier                     -> key / rootKey
  7. anything else                               -> none
"""
from __future__ import annotations
import re
from typing import Sequence

from .config import INDENT_SIZE
from .lines import key_from_line, line_indent, previous_non_empty_line, is_root_boundary_empty_line, split_lines
from .models import (
    Context, ENDPOINT_VALUE, ITEM_KEY, KEY, LINK_TYPE_VALUE, NODE_TYPE_VALUE,
    NONE, ROOT_ITEM_KEY, ROOT_KEY,
)
from .sections import infer_section

_TYPE_VALUE = re.compile(r"^(?:-\s*)?type:\s*([a-zA-Z0-9_-]*)$")
_ENDPOINT_VALUE = re.compile(r"^(?:-\s*)?(from|to):\s*([^\s]*)$")
_LIST_KEY = re.compile(r"^-\s*([a-zA-Z_][a-zA-Z0-9_-]*)?$")
_BARE_KEY = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_-]*)?$")

# last field of an entry in each section
TERMINAL_KEYS = {"nodes": "type", "links": "type"}


def _is_continuation_after_terminal_key(
    lines: Sequence[str], line_index: int, section: str, item_indent: int
) -> bool:
    current = lines[line_index] or ""
    if current.strip():
        return False
    if line_indent(current) <= item_indent:
        return False

    previous = previous_non_empty_line(lines, line_index - 1)
    if previous is None:
        return False
    prev_line, _ = previous
    if line_indent(prev_line) < item_indent:
        return False

    prev_key = key_from_line(prev_line)
    return prev_key is not None and TERMINAL_KEYS.get(section) == prev_key


def get_context(text: str, line_number: int, column: int, indent_size: int = INDENT_SIZE) -> Context:
    """Classify the cursor at 1-based (line_number, column); out-of-range input is clamped."""
    lines = split_lines(text)
    while line_number > len(lines):
        lines.append("")
    line_number = max(1, min(line_number, len(lines)))
    line_index = line_number - 1
    line = lines[line_index] or ""
    column = max(1, min(column, len(line) + 1))

    left = line[: column - 1]
    trimmed = left.strip()
    indent = line_indent(line)
    info = infer_section(lines, line_index, indent)
    section = info.section
    item_indent = info.section_indent + indent_size

    if section == "root" and is_root_boundary_empty_line(lines, line_index):
        return Context(kind=ROOT_ITEM_KEY, section="root")
    if section != "root" and _is_continuation_after_terminal_key(lines, line_index, section, item_indent):
        return Context(kind=ITEM_KEY, section=section)

    m = _TYPE_VALUE.match(trimmed)
    if m and section == "nodes":
        return Context(kind=NODE_TYPE_VALUE, section=section, prefix=m.group(1) or "")
    if m and section == "links":
        return Context(kind=LINK_TYPE_VALUE, section=section, prefix=m.group(1) or "")

    m = _ENDPOINT_VALUE.match(trimmed)
    if m and section == "links":
        return Context(kind=ENDPOINT_VALUE, section=section, prefix=m.group(2) or "", endpoint=m.group(1))

    list_key = _LIST_KEY.match(trimmed)
    if section != "root" and (
        list_key or (indent <= item_indent and (trimmed == "" or _BARE_KEY.match(trimmed)))
    ):
        prefix = (list_key.group(1) or "") if list_key else trimmed
        return Context(kind=ITEM_KEY, section=section, prefix=prefix)

    m = _BARE_KEY.match(trimmed)
    if m:
        return Context(kind=ROOT_KEY if section == "root" else KEY, section=section, prefix=m.group(1) or "")

    return Context(kind=NONE, section=section)
