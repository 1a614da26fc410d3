from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from .config import FORBIDDEN_AUTOCOMPLETE_KEYS, LINK_TYPE_SUGGESTIONS, NODE_TYPE_SUGGESTIONS
from .models import (
    Context, Entities, SectionSpec, SuggestionMeta,
    ENDPOINT_VALUE, ITEM_KEY, KEY, LINK_TYPE_VALUE, NODE_TYPE_VALUE, ROOT_ITEM_KEY, ROOT_KEY,
)


def collect_ordered_keys(section_spec: Optional[SectionSpec]) -> List[str]:
    """requiredKeys ++ orderedKeys, deduplicated, forbidden keys removed."""
    if section_spec is None:
        return []
    out: List[str] = []
    for key in (*section_spec.required_keys, *section_spec.ordered_keys):
        key = key.strip()
        if key and key not in FORBIDDEN_AUTOCOMPLETE_KEYS and key not in out:
            out.append(key)
    return out


def normalize_section_prefix(prefix: str) -> str:
    p = str(prefix or "")
    if p.startswith("-"):
        p = p[1:]
    if p.endswith(":"):
        p = p[:-1]
    return p.strip().lower()


def select_next_object_key(
    section_spec: Optional[SectionSpec], used_keys: Iterable[str], prefix: str
) -> List[str]:
    used = set(used_keys or ())
    available = [k for k in collect_ordered_keys(section_spec) if k not in used]
    p = normalize_section_prefix(prefix)
    if not p:
        return available[:1]
    return [k for k in available if k.lower().startswith(p)][:1]


def endpoint_suggestions(prefix: str, entities: Entities, endpoint: Optional[str]) -> List[str]:
    p = str(prefix or "").lower()
    if ":" in p:
        # port part is free text
        return []
    names = entities.node_names
    if endpoint in ("from", "to") and p and any(name.lower() == p for name in names):
        return [":"]
    return [name for name in names if name.lower().startswith(p)]


def _filter_vocabulary(vocabulary: Sequence[str], prefix: str) -> List[str]:
    p = str(prefix or "").lower()
    return [item for item in vocabulary if item.lower().startswith(p)]


def _item_key_suggestions(context: Context, meta: SuggestionMeta) -> List[str]:
    section_spec = meta.spec.section_spec(context.section)
    start_key = section_spec.entry_start_key if section_spec else ("name" if context.section == "nodes" else "from")
    used = meta.item_context_keys

    continuation = [k for k in collect_ordered_keys(section_spec) if k != start_key]
    # a node entry is closed once it has a type; links keep going
    if context.section == "nodes" and "type" in used:
        continuation = []
    continuation = [k for k in continuation if k not in used]

    options = [(f"- {start_key}", start_key)]
    if meta.can_continue_item:
        options.extend((f"  {k}", k) for k in continuation)

    p = normalize_section_prefix(context.prefix)
    return [label for label, key in options if key.lower().startswith(p)]


def get_suggestions(context: Context, meta: Optional[SuggestionMeta] = None) -> List[str]:
    """Ordered completion candidates for a classified context. Pure."""
    meta = meta or SuggestionMeta()
    kind = context.kind

    if kind == NODE_TYPE_VALUE:
        return _filter_vocabulary(meta.node_types or NODE_TYPE_SUGGESTIONS, context.prefix)
    if kind == LINK_TYPE_VALUE:
        return _filter_vocabulary(meta.link_types or LINK_TYPE_SUGGESTIONS, context.prefix)

    if kind == ENDPOINT_VALUE:
        return endpoint_suggestions(context.prefix, meta.entities, context.endpoint)

    if kind == ROOT_KEY:
        p = normalize_section_prefix(context.prefix)
        return [
            s for s in meta.spec.root_sections
            if s not in meta.root_section_presence and s.lower().startswith(p)
        ]

    if kind == ROOT_ITEM_KEY:
        return [f"- {s}:" for s in meta.spec.root_sections if s and s not in meta.root_section_presence]

    if kind == ITEM_KEY:
        return _item_key_suggestions(context, meta)

    if kind == KEY and context.section in ("nodes", "links"):
        return select_next_object_key(meta.spec.section_spec(context.section), meta.object_keys, context.prefix)

    return []
