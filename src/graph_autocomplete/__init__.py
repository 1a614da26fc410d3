"""
Graph YAML Autocomplete Engine

Context-aware completion for the `nodes` / `links` graph YAML dialect. Given the
raw document text (valid YAML or not) and a cursor position it works out what
the user is typing, lists candidate completions and builds the exact text to
insert, including indentation. It also plans the structural Enter/Backspace
edits an editor host should apply.

The module is designed with a clean separation of concerns:
- Line/section tracking and the context classifier
- Entity extraction and the metadata cache
- Suggestion generation and insertion-text building
- Key-press planning and diagnostic markers

Example Usage:
    from graph_autocomplete import Engine

    eng = Engine()
    text = "nodes:\\n  - name: A\\n"
    for item in eng.complete(text, line_number=3, column=1):
        print(item.label, repr(item.insert_text))
"""

# src/graph_autocomplete/__init__.py
from .cache import empty_metadata_cache, resolve_metadata_cache
from .catalog import EMPTY_PROFILE_CATALOG, ProfileCatalog, catalog_cache_key, create_profile_catalog
from .context import get_context
from .engine import Engine
from .entities import build_metadata, collect_root_section_presence, extract_entities
from .insert import build_completion_documentation, build_insert_text, resolve_completion_command
from .keypress import compute_indent_backspace_delete_count, plan_backspace, plan_enter
from .markers import build_markers, marker_from_diagnostic
from .models import AutocompleteSpec, Context, DEFAULT_SPEC, Entities, SuggestionMeta
from .runtime import build_runtime, resolve_at_position
from .sections import infer_section
from .suggest import get_suggestions

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "AutocompleteSpec", "Context", "DEFAULT_SPEC", "Entities", "SuggestionMeta",
    "infer_section", "get_context", "extract_entities", "build_metadata",
    "collect_root_section_presence", "get_suggestions", "build_insert_text",
    "build_completion_documentation", "resolve_completion_command",
    "plan_enter", "plan_backspace", "compute_indent_backspace_delete_count",
    "empty_metadata_cache", "resolve_metadata_cache",
    "build_runtime", "resolve_at_position",
    "ProfileCatalog", "EMPTY_PROFILE_CATALOG", "create_profile_catalog", "catalog_cache_key",
    "build_markers", "marker_from_diagnostic",
]
