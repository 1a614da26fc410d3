# graph_autocomplete/engine.py
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from . import config as CFG
from .cache import empty_metadata_cache, resolve_metadata_cache
from .catalog import EMPTY_PROFILE_CATALOG, ProfileCatalog, create_profile_catalog
from .insert import (
    build_completion_documentation, build_insert_text, resolve_completion_command, suggestion_key,
)
from .keypress import plan_backspace, plan_enter
from .lines import split_lines
from .markers import build_markers
from .models import (
    AutocompleteMeta, AutocompleteSpec, BackspaceAction, CompletionItem, Diagnostic,
    DocumentState, EnterAction, InsertText, Marker, MetaCache, Runtime,
    ENDPOINT_VALUE, ITEM_KEY, KEY, LINK_TYPE_VALUE, NODE_TYPE_VALUE, ROOT_KEY,
)
from .runtime import resolve_at_position

log = logging.getLogger(__name__)

_VALUE_KINDS = (NODE_TYPE_VALUE, LINK_TYPE_VALUE, ENDPOINT_VALUE)
_STEP_KINDS = (KEY, ITEM_KEY, ROOT_KEY)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the single-slot metadata cache (lines, entities, root sections),
      - the context classifier + suggestion generator,
      - the insertion-text builder and the Enter/Backspace planners.

    Public API (used by CLI/Flask):
      * complete(text, line, column, version): completion items for a position
      * context_at / suggestions_at:            the raw classification and labels
      * plan_enter / plan_backspace / plan_key: structural key-press edits
      * invalidate():                           drop cached metadata on every edit
      * apply_catalog(payload):                 switch type vocabularies
      * documentation(word):                    hover text for a key

    The host owns the engine and serializes calls; nothing here does I/O.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        *,
        spec: Any = None,
        indent_size: int = CFG.INDENT_SIZE,
        node_types: Optional[Sequence[str]] = None,
        link_types: Optional[Sequence[str]] = None,
    ) -> None:
        if int(indent_size) <= 0:
            raise ValueError("indent_size must be a positive number of spaces")
        self.spec: AutocompleteSpec = AutocompleteSpec.from_mapping(spec)
        self.indent_size = int(indent_size)
        self.node_types: tuple[str, ...] = tuple(node_types or CFG.NODE_TYPE_SUGGESTIONS)
        self.link_types: tuple[str, ...] = tuple(link_types or CFG.LINK_TYPE_SUGGESTIONS)
        self.catalog: ProfileCatalog = EMPTY_PROFILE_CATALOG
        self._cache: MetaCache = empty_metadata_cache()
        self._latest: Optional[DocumentState] = None

    # /* ~~~ Swap in a profile catalog; empty lists keep the current vocabulary ~~~ */
    def apply_catalog(self, payload: Any) -> ProfileCatalog:
        catalog = create_profile_catalog(payload)
        if not catalog.profile_id:
            log.debug("Ignoring profile catalog without a profile id")
            return self.catalog
        self.catalog = catalog
        if catalog.node_types:
            self.node_types = catalog.node_types
        if catalog.link_types:
            self.link_types = catalog.link_types
        log.info("Applied profile catalog %s (nodes=%d links=%d)",
                 catalog.profile_id, len(catalog.node_types), len(catalog.link_types))
        return catalog

    # /* ~~~ Content changed: never serve the old slot again ~~~ */
    def invalidate(self) -> None:
        self._cache = empty_metadata_cache()

    def set_document_state(self, state: Optional[DocumentState]) -> None:
        self._latest = state

    def metadata(self, text: str, version: Any = None) -> AutocompleteMeta:
        meta, self._cache = resolve_metadata_cache(text, version, self._cache, self._latest)
        return meta

    # ------------- query -------------

    def resolve(self, text: str, line_number: int, column: int, version: Any = None):
        meta = self.metadata(text, version)
        runtime, suggestions = resolve_at_position(
            text, line_number, column, meta,
            node_types=self.node_types,
            link_types=self.link_types,
            spec=self.spec,
            indent_size=self.indent_size,
        )
        return meta, runtime, suggestions

    def context_at(self, text: str, line_number: int, column: int, version: Any = None) -> Runtime:
        return self.resolve(text, line_number, column, version)[1]

    def suggestions_at(self, text: str, line_number: int, column: int, version: Any = None) -> List[str]:
        return self.resolve(text, line_number, column, version)[2]

    def insert_text(
        self, text: str, line_number: int, column: int, suggestion: str, version: Any = None
    ) -> InsertText:
        meta, runtime, _ = self.resolve(text, line_number, column, version)
        return self._insertion(meta, runtime, line_number, column, suggestion)

    # /* ~~~ Hover text for the key under the cursor ~~~ */
    def documentation(self, word: str) -> str:
        return build_completion_documentation(suggestion_key(word))

    # /* ~~~ Package suggestions the way an editor completion list wants them ~~~ */
    def complete(self, text: str, line_number: int, column: int, version: Any = None) -> List[CompletionItem]:
        meta, runtime, suggestions = self.resolve(text, line_number, column, version)
        context = runtime.context
        lines = meta.lines
        line_index = max(0, min(line_number - 1, len(lines) - 1))
        current_line = lines[line_index]
        end_column = max(1, min(column, len(current_line) + 1))

        items: List[CompletionItem] = []
        for idx, label in enumerate(suggestions):
            insertion = self._insertion(meta, runtime, line_number, end_column, label)
            command = resolve_completion_command(context, label, self.spec)
            doc_key = command.key_token if context.kind in _VALUE_KINDS else suggestion_key(label)
            items.append(CompletionItem(
                label=label,
                insert_text=insertion.text,
                insert_as_snippet=insertion.insert_as_snippet,
                start_column=insertion.start_column,
                end_column=end_column,
                kind="value" if context.kind in _VALUE_KINDS else "property",
                detail="Next graph step" if context.kind in _STEP_KINDS else "Graph value",
                documentation=build_completion_documentation(doc_key),
                sort_text=f"{idx:03d}-{label}",
                command=command if command.should_trigger_suggest else None,
            ))
        log.debug("complete(%d,%d) kind=%s items=%d", line_number, column, context.kind, len(items))
        return items

    # ------------- key presses -------------

    def plan_enter(self, text: str, line_number: int, column: int) -> EnterAction:
        return plan_enter(text, line_number, column, self.indent_size)

    def plan_backspace(self, text: str, line_number: int, column: int) -> BackspaceAction:
        return plan_backspace(text, line_number, column, self.indent_size)

    def plan_key(self, key: str, text: str, line_number: int, column: int):
        key = str(key or "").lower()
        if key == "enter":
            return self.plan_enter(text, line_number, column)
        if key == "backspace":
            return self.plan_backspace(text, line_number, column)
        raise ValueError(f"Unsupported key: {key!r} (expected 'enter' or 'backspace')")

    # ------------- diagnostics -------------

    def markers(
        self, text: str, diagnostics: Iterable[Diagnostic] = (), schema_error: Optional[str] = None
    ) -> List[Marker]:
        return build_markers(split_lines(text), diagnostics, schema_error)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self._cache = empty_metadata_cache()
        self._latest = None
        log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _insertion(
        self, meta: AutocompleteMeta, runtime: Runtime, line_number: int, column: int, suggestion: str
    ) -> InsertText:
        line_index = max(0, min(line_number - 1, len(meta.lines) - 1))
        return build_insert_text(
            runtime.context,
            suggestion,
            spec=self.spec,
            indent_size=self.indent_size,
            lines=meta.lines,
            line_number=line_number,
            current_line=meta.lines[line_index],
            column=column,
        )
