from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

import yaml

from .config import DEFAULT_AUTOCOMPLETE_SPEC, FORBIDDEN_AUTOCOMPLETE_KEYS

# Context kinds produced by the classifier (exactly one per position).
ROOT_KEY = "rootKey"
ROOT_ITEM_KEY = "rootItemKey"
ITEM_KEY = "itemKey"
KEY = "key"
NODE_TYPE_VALUE = "nodeTypeValue"
LINK_TYPE_VALUE = "linkTypeValue"
ENDPOINT_VALUE = "endpointValue"
NONE = "none"

CONTEXT_KINDS = (
    ROOT_KEY, ROOT_ITEM_KEY, ITEM_KEY, KEY,
    NODE_TYPE_VALUE, LINK_TYPE_VALUE, ENDPOINT_VALUE, NONE,
)


@dataclass(frozen=True)
class SectionInfo:
    section: str              # "root" | "nodes" | "links"
    section_indent: int       # indentation of the section header line


@dataclass(frozen=True)
class Context:
    kind: str
    section: str
    prefix: str = ""
    endpoint: Optional[str] = None   # "from" | "to" for endpointValue


@dataclass(frozen=True)
class Entities:
    node_names: Tuple[str, ...] = ()
    ports_by_node: Dict[str, FrozenSet[str]] = field(default_factory=dict)


def _pick(obj: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in obj:
            return obj[name]
    return None


def _str_list(value: Any) -> Optional[Tuple[str, ...]]:
    if not isinstance(value, (list, tuple)):
        return None
    return tuple(str(v).strip() for v in value if isinstance(v, str) and v.strip())


@dataclass(frozen=True)
class SectionSpec:
    ordered_keys: Tuple[str, ...]
    required_keys: Tuple[str, ...]
    entry_start_key: str

    @classmethod
    def from_mapping(cls, obj: Any, default: Mapping[str, Any]) -> "SectionSpec":
        """Missing or malformed fields, and a forbidden start key, take the value from `default`."""
        if not isinstance(obj, Mapping):
            obj = {}
        ordered = _str_list(_pick(obj, "orderedKeys", "ordered_keys"))
        required = _str_list(_pick(obj, "requiredKeys", "required_keys"))
        start = _pick(obj, "entryStartKey", "entry_start_key")
        if not isinstance(start, str) or not start.strip() or start.strip() in FORBIDDEN_AUTOCOMPLETE_KEYS:
            start = default["entryStartKey"]
        return cls(
            ordered_keys=ordered if ordered is not None else tuple(default["orderedKeys"]),
            required_keys=required if required is not None else tuple(default["requiredKeys"]),
            entry_start_key=start.strip(),
        )


@dataclass(frozen=True)
class AutocompleteSpec:
    root_sections: Tuple[str, ...]
    node: SectionSpec
    link: SectionSpec

    @classmethod
    def from_mapping(cls, obj: Any = None) -> "AutocompleteSpec":
        if isinstance(obj, AutocompleteSpec):
            return obj
        if not isinstance(obj, Mapping):
            obj = {}
        roots = _str_list(_pick(obj, "rootSections", "root_sections"))
        return cls(
            root_sections=roots or tuple(DEFAULT_AUTOCOMPLETE_SPEC["rootSections"]),
            node=SectionSpec.from_mapping(obj.get("node"), DEFAULT_AUTOCOMPLETE_SPEC["node"]),
            link=SectionSpec.from_mapping(obj.get("link"), DEFAULT_AUTOCOMPLETE_SPEC["link"]),
        )

    @classmethod
    def from_file(cls, path: str) -> "AutocompleteSpec":
        """Read a spec mapping from a YAML (or JSON) file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_mapping(yaml.safe_load(f))

    def section_spec(self, section: str) -> Optional[SectionSpec]:
        if section == "nodes":
            return self.node
        if section == "links":
            return self.link
        return None


DEFAULT_SPEC = AutocompleteSpec.from_mapping(DEFAULT_AUTOCOMPLETE_SPEC)


@dataclass(frozen=True)
class AutocompleteMeta:
    lines: Tuple[str, ...] = ("",)
    entities: Entities = field(default_factory=Entities)
    root_section_presence: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class MetaCache:
    version: Any = None
    text: str = ""
    meta: AutocompleteMeta = field(default_factory=AutocompleteMeta)


@dataclass(frozen=True)
class DocumentState:
    """Latest known parse of the document, as held by the host."""
    text: str
    parsed_graph: Any = None
    entities: Optional[Entities] = None


@dataclass(frozen=True)
class Runtime:
    context: Context
    object_keys: Tuple[str, ...] = ()
    item_context_keys: Tuple[str, ...] = ()
    can_continue_item: bool = False
    entities: Entities = field(default_factory=Entities)


@dataclass(frozen=True)
class SuggestionMeta:
    spec: AutocompleteSpec = DEFAULT_SPEC
    node_types: Tuple[str, ...] = ()
    link_types: Tuple[str, ...] = ()
    entities: Entities = field(default_factory=Entities)
    root_section_presence: FrozenSet[str] = frozenset()
    object_keys: Tuple[str, ...] = ()
    item_context_keys: Tuple[str, ...] = ()
    can_continue_item: bool = False


@dataclass(frozen=True)
class InsertText:
    text: str
    insert_as_snippet: bool = False
    start_column: int = 1     # 1-based column where the replaced range begins


@dataclass(frozen=True)
class CompletionCommand:
    should_trigger_suggest: bool
    title: str
    key_token: str


@dataclass(frozen=True)
class CompletionItem:
    label: str
    insert_text: str
    insert_as_snippet: bool
    start_column: int
    end_column: int
    kind: str                 # "property" | "value"
    detail: str
    documentation: str
    sort_text: str
    command: Optional[CompletionCommand] = None


@dataclass(frozen=True)
class EnterAction:
    should_handle: bool
    insert_text: str = ""
    edit_id: str = ""
    trigger_source: str = "enter"


@dataclass(frozen=True)
class BackspaceAction:
    should_handle: bool
    delete_start_column: int = 0
    delete_end_column: int = 0
    edit_id: str = ""
    trigger_source: str = "backspace"


@dataclass(frozen=True)
class Diagnostic:
    message: str
    line_number: int = 1
    column: int = 1
    end_line_number: Optional[int] = None
    end_column: Optional[int] = None
    severity: str = "error"   # "error" | "warning" | "info"
    source: Optional[str] = None


@dataclass(frozen=True)
class Marker:
    severity: str
    message: str
    source: str
    start_line_number: int
    start_column: int
    end_line_number: int
    end_column: int
