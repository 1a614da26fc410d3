from __future__ import annotations
from typing import Optional, Sequence

from .config import COLLECTION_KEYS, INDENT_SIZE, KEY_DOCUMENTATION, NEXT_STEP_TITLE, VALUE_SUGGEST_KEYS
from .lines import line_indent
from .models import (
    AutocompleteSpec, CompletionCommand, Context, DEFAULT_SPEC, InsertText,
    ENDPOINT_VALUE, ITEM_KEY, KEY, LINK_TYPE_VALUE, NODE_TYPE_VALUE, ROOT_ITEM_KEY, ROOT_KEY,
)
from .sections import infer_section

SNIPPET_CURSOR = "$0"


def suggestion_key(suggestion: str) -> str:
    """`- name` / `  nodes` / `- links:` -> bare key."""
    key = str(suggestion or "").strip()
    if key.startswith("-"):
        key = key[1:].strip()
    if key.endswith(":"):
        key = key[:-1].strip()
    return key


def _entry_start_key(collection: str, spec: AutocompleteSpec) -> str:
    section_spec = spec.section_spec(collection)
    return section_spec.entry_start_key if section_spec else "name"


def _cascade(key: str, key_indent: int, item_indent: int, spec: AutocompleteSpec, lead: bool = True) -> str:
    """`<key>:` then the first entry opener of that collection one level deeper."""
    head = " " * key_indent if lead else ""
    return f"{head}{key}:\n{' ' * item_indent}- {_entry_start_key(key, spec)}: "


def build_insert_text(
    context: Context,
    suggestion: str,
    spec: Optional[AutocompleteSpec] = None,
    indent_size: int = INDENT_SIZE,
    lines: Sequence[str] = ("",),
    line_number: int = 1,
    current_line: Optional[str] = None,
    column: Optional[int] = None,
) -> InsertText:
    """
    Literal text that replaces the range [start_column, cursor) on the current line.

    Multi-line insertions carry absolute indentation (spaces only); item keys
    replace the whole left side of the line so they synthesize their own indent.
    Without `column` the cursor is taken to sit after the line's last character.
    """
    spec = spec or DEFAULT_SPEC
    if current_line is None:
        idx = max(0, min(line_number - 1, len(lines) - 1))
        current_line = lines[idx] if lines else ""
    indent = line_indent(current_line)
    cursor = column if column is not None else len(current_line.rstrip()) + 1
    cursor = max(1, min(cursor, len(current_line) + 1))
    prefix_start = max(1, cursor - len(context.prefix or ""))
    kind = context.kind
    key = suggestion_key(suggestion)

    if kind == ROOT_KEY:
        return InsertText(
            text=_cascade(key, 0, indent + indent_size, spec, lead=False),
            start_column=prefix_start,
        )

    if kind == ROOT_ITEM_KEY:
        return InsertText(text=_cascade(key, 0, indent_size, spec), start_column=1)

    if kind == ITEM_KEY:
        line_index = max(0, min(line_number - 1, len(lines) - 1))
        section_indent = infer_section(lines, line_index, indent).section_indent if lines else 0
        desired = section_indent + indent_size
        if str(suggestion).lstrip().startswith("-"):
            return InsertText(text=f"{' ' * desired}- {key}: ", start_column=1)
        if key in COLLECTION_KEYS:
            return InsertText(
                text=_cascade(key, desired + indent_size, desired + 2 * indent_size, spec),
                start_column=1,
            )
        return InsertText(text=f"{' ' * (desired + indent_size)}{key}: ", start_column=1)

    if kind == KEY:
        if key in COLLECTION_KEYS:
            return InsertText(
                text=_cascade(key, 0, indent + indent_size, spec, lead=False),
                start_column=prefix_start,
            )
        return InsertText(text=f"{key}: ", start_column=prefix_start)

    if kind == ENDPOINT_VALUE and suggestion == ":":
        # appended at the cursor, nothing replaced
        return InsertText(text=":", start_column=cursor)

    if kind in (NODE_TYPE_VALUE, LINK_TYPE_VALUE):
        return InsertText(
            text=f"{suggestion}\n{' ' * indent}{SNIPPET_CURSOR}",
            insert_as_snippet=True,
            start_column=prefix_start,
        )

    return InsertText(text=str(suggestion), start_column=prefix_start)


def build_completion_documentation(label: str) -> str:
    return KEY_DOCUMENTATION.get(str(label or ""), "")


def resolve_completion_command(
    context: Context, item: str, spec: Optional[AutocompleteSpec] = None
) -> CompletionCommand:
    """Whether accepting `item` should immediately re-open suggestions."""
    spec = spec or DEFAULT_SPEC
    kind = context.kind
    if kind in (NODE_TYPE_VALUE, LINK_TYPE_VALUE):
        return CompletionCommand(True, NEXT_STEP_TITLE, "type")
    if kind == ENDPOINT_VALUE:
        # a node name can still take ":port"; the port itself is free text
        return CompletionCommand(item != ":", NEXT_STEP_TITLE, context.endpoint or "")

    key = suggestion_key(item)
    if key in COLLECTION_KEYS and kind in (ROOT_KEY, ROOT_ITEM_KEY, ITEM_KEY, KEY):
        # cursor ends on the first field of the new collection
        key = _entry_start_key(key, spec)
    return CompletionCommand(key in VALUE_SUGGEST_KEYS, NEXT_STEP_TITLE, key)
