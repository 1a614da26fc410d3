from __future__ import annotations
import re

from .config import INDENT_SIZE
from .context import get_context
from .lines import is_item_opener, is_root_boundary_empty_line, line_indent, split_lines
from .models import BackspaceAction, EnterAction, ENDPOINT_VALUE
from .sections import infer_section

_LABEL_VALUE = re.compile(r"^(?:-\s*)?label:\s*\S")


def compute_indent_backspace_delete_count(line: str, column: int, indent_size: int = INDENT_SIZE) -> int:
    """
    Characters one Backspace should remove to land on the previous indent stop.

    Only applies when everything around the caret is whitespace; returns 0 otherwise.
    """
    line = str(line or "")
    caret = max(0, min(column - 1, len(line)))
    before, after = line[:caret], line[caret:]
    if not before or before.strip() or after.strip():
        return 0
    remainder = caret % indent_size
    return min(indent_size, caret) if remainder == 0 else remainder


def _item_marker_indent(line: str, indent_size: int) -> int:
    """Indent of the `-` that opens the entry this field line belongs to."""
    indent = line_indent(line)
    if is_item_opener(line.strip()):
        return indent
    return max(0, indent - indent_size)


def plan_enter(text: str, line_number: int, column: int, indent_size: int = INDENT_SIZE) -> EnterAction:
    lines = split_lines(text)
    if line_number < 1 or line_number > len(lines):
        return EnterAction(should_handle=False)
    line = lines[line_number - 1]
    column = max(1, min(column, len(line) + 1))
    if line[column - 1:].strip():
        return EnterAction(should_handle=False)

    context = get_context(text, line_number, column, indent_size)
    if context.kind == ENDPOINT_VALUE and context.section == "links":
        node, sep, port = context.prefix.partition(":")
        if not node or (sep and not port):
            return EnterAction(should_handle=False)
        marker = _item_marker_indent(line, indent_size)
        if context.endpoint == "from":
            return EnterAction(
                should_handle=True,
                insert_text=f"\n{' ' * (marker + indent_size)}to: ",
                edit_id="endpoint-from-enter",
            )
        return EnterAction(should_handle=True, insert_text=f"\n{' ' * marker}", edit_id="endpoint-to-enter")

    left = line[: column - 1].strip()
    if _LABEL_VALUE.match(left):
        section = infer_section(lines, line_number - 1, line_indent(line)).section
        if section == "links":
            marker = _item_marker_indent(line, indent_size)
            return EnterAction(should_handle=True, insert_text=f"\n{' ' * marker}", edit_id="label-enter")

    return EnterAction(should_handle=False)


def plan_backspace(text: str, line_number: int, column: int, indent_size: int = INDENT_SIZE) -> BackspaceAction:
    lines = split_lines(text)
    if line_number < 1 or line_number > len(lines):
        return BackspaceAction(should_handle=False)
    line = lines[line_number - 1]
    column = max(1, min(column, len(line) + 1))

    # /* ~~~ keep boundary blank lines: clear them, never merge upward ~~~ */
    section = infer_section(lines, line_number - 1, line_indent(line)).section
    if section == "root" and is_root_boundary_empty_line(lines, line_number - 1):
        return BackspaceAction(
            should_handle=True,
            delete_start_column=1,
            delete_end_column=column,
            edit_id="root-boundary-backspace",
        )

    count = compute_indent_backspace_delete_count(line, column, indent_size)
    if count <= 0:
        return BackspaceAction(should_handle=False)
    return BackspaceAction(
        should_handle=True,
        delete_start_column=column - count,
        delete_end_column=column,
        edit_id="indent-backspace",
    )
