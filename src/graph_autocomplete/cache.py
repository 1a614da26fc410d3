from __future__ import annotations
import logging
from typing import Any, Optional, Tuple

from .entities import build_metadata, collect_root_section_presence
from .lines import split_lines
from .models import AutocompleteMeta, DocumentState, MetaCache

log = logging.getLogger(__name__)


def empty_metadata_cache() -> MetaCache:
    """
    The invalidated slot. It only matches the empty document with no version,
    whose metadata it already holds.
    """
    return MetaCache()


def resolve_metadata_cache(
    text: str,
    version: Any = None,
    cache: Optional[MetaCache] = None,
    latest_state: Optional[DocumentState] = None,
) -> Tuple[AutocompleteMeta, MetaCache]:
    """
    Return (meta, cache) for `text`.

    The cached meta is served only when both version and text match exactly.
    On a miss, entities from the host's latest document state are reused when
    that state describes the very same text; otherwise the text is re-parsed.
    """
    text = str(text or "")
    if cache is not None and cache.version == version and cache.text == text:
        log.debug("metadata cache hit: version=%s", version)
        return cache.meta, cache

    if latest_state is not None and latest_state.text == text and latest_state.entities is not None:
        lines = split_lines(text)
        meta = AutocompleteMeta(
            lines=tuple(lines),
            entities=latest_state.entities,
            root_section_presence=collect_root_section_presence(lines, latest_state.parsed_graph),
        )
        log.debug("metadata from latest document state: version=%s", version)
    else:
        meta = build_metadata(text)
        log.debug("metadata rebuilt: version=%s lines=%d", version, len(meta.lines))

    return meta, MetaCache(version=version, text=text, meta=meta)
