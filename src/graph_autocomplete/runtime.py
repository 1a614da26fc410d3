from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .catalog import ProfileCatalog
from .config import INDENT_SIZE
from .context import get_context
from .items import collect_current_object_keys, collect_item_context_info
from .models import AutocompleteMeta, AutocompleteSpec, DEFAULT_SPEC, ITEM_KEY, KEY, Runtime, SuggestionMeta
from .suggest import get_suggestions


def build_runtime(
    text: str, line_number: int, column: int, meta: AutocompleteMeta, indent_size: int = INDENT_SIZE
) -> Runtime:
    context = get_context(text, line_number, column, indent_size)
    lines = meta.lines
    line_index = max(0, min(line_number - 1, len(lines) - 1))
    in_entries = context.section in ("nodes", "links")

    item_keys: Tuple[str, ...] = ()
    can_continue = False
    if context.kind == ITEM_KEY and in_entries:
        item_keys, can_continue = collect_item_context_info(lines, line_index, context.section, indent_size)

    object_keys: Tuple[str, ...] = ()
    if context.kind == KEY and in_entries:
        object_keys = collect_current_object_keys(lines, line_index, context.section, line_index, indent_size)

    return Runtime(
        context=context,
        object_keys=object_keys,
        item_context_keys=item_keys,
        can_continue_item=can_continue,
        entities=meta.entities,
    )


def _vocabulary(catalog_types: Sequence[str], supplied: Optional[Sequence[str]]) -> Tuple[str, ...]:
    if catalog_types:
        return tuple(catalog_types)
    if isinstance(supplied, (list, tuple)):
        return tuple(t for t in supplied if isinstance(t, str) and t)
    return ()


def resolve_at_position(
    text: str,
    line_number: int,
    column: int,
    meta: AutocompleteMeta,
    *,
    profile_catalog: Optional[ProfileCatalog] = None,
    node_types: Optional[Sequence[str]] = None,
    link_types: Optional[Sequence[str]] = None,
    spec: Optional[AutocompleteSpec] = None,
    indent_size: int = INDENT_SIZE,
) -> Tuple[Runtime, List[str]]:
    """Classify the position and list its suggestions in one call."""
    runtime = build_runtime(text, line_number, column, meta, indent_size)
    catalog = profile_catalog or ProfileCatalog()
    suggestions = get_suggestions(
        runtime.context,
        SuggestionMeta(
            spec=spec or DEFAULT_SPEC,
            node_types=_vocabulary(catalog.node_types, node_types),
            link_types=_vocabulary(catalog.link_types, link_types),
            entities=runtime.entities,
            root_section_presence=meta.root_section_presence,
            object_keys=runtime.object_keys,
            item_context_keys=runtime.item_context_keys,
            can_continue_item=runtime.can_continue_item,
        ),
    )
    return runtime, suggestions
