# src/e2e/test_suggestions.py
from itertools import combinations

from graph_autocomplete.config import LINK_TYPE_SUGGESTIONS
from graph_autocomplete.models import AutocompleteSpec, Context, Entities, SuggestionMeta
from graph_autocomplete.suggest import (
    collect_ordered_keys, endpoint_suggestions, get_suggestions, normalize_section_prefix,
)


def _item(section, prefix="", used=(), can_continue=True, spec=None):
    meta = SuggestionMeta(
        spec=spec or AutocompleteSpec.from_mapping(None),
        item_context_keys=tuple(used),
        can_continue_item=can_continue,
    )
    return get_suggestions(Context("itemKey", section, prefix), meta)


def test_type_vocabularies():
    assert get_suggestions(Context("nodeTypeValue", "nodes", "ro")) == ["router"]
    assert get_suggestions(Context("nodeTypeValue", "nodes", "RO")) == ["router"]
    assert get_suggestions(Context("linkTypeValue", "links", "")) == list(LINK_TYPE_SUGGESTIONS)
    assert get_suggestions(Context("linkTypeValue", "links", "d")) == ["directed", "dependency"]

    meta = SuggestionMeta(node_types=("Gateway", "gw", "hub"))
    assert get_suggestions(Context("nodeTypeValue", "nodes", "g"), meta) == ["Gateway", "gw"]


def test_endpoints():
    ents = Entities(node_names=("A", "Alpha", "B"))
    assert endpoint_suggestions("a", ents, "from") == [":"]
    assert endpoint_suggestions("al", ents, "to") == ["Alpha"]
    assert endpoint_suggestions("", ents, "from") == ["A", "Alpha", "B"]
    assert endpoint_suggestions("A:", ents, "from") == []
    assert endpoint_suggestions("A:et", ents, "from") == []


def test_root_keys_skip_present_sections():
    meta = SuggestionMeta(root_section_presence=frozenset({"nodes"}))
    assert get_suggestions(Context("rootKey", "root", ""), meta) == ["links"]
    assert get_suggestions(Context("rootKey", "root", "n")) == ["nodes"]


def test_root_item_keys():
    assert get_suggestions(Context("rootItemKey", "root")) == ["- nodes:", "- links:"]
    both = SuggestionMeta(root_section_presence=frozenset({"nodes", "links"}))
    assert get_suggestions(Context("rootItemKey", "root"), both) == []


def test_root_suggestions_never_repeat_present_sections():
    sections = ("nodes", "links")
    for n in range(len(sections) + 1):
        for present in combinations(sections, n):
            meta = SuggestionMeta(root_section_presence=frozenset(present))
            for kind in ("rootKey", "rootItemKey"):
                labels = get_suggestions(Context(kind, "root", ""), meta)
                for label in labels:
                    assert normalize_section_prefix(label) not in present


def test_item_keys_in_nodes():
    assert _item("nodes", can_continue=False) == ["- name"]
    assert _item("nodes", used=("name",)) == ["- name", "  type", "  ports", "  nodes", "  links"]
    # a node with a type is complete
    assert _item("nodes", used=("name", "type")) == ["- name"]
    assert _item("nodes", prefix="no", used=("name",)) == ["  nodes"]
    assert _item("nodes", prefix="-", used=("name",))[0] == "- name"


def test_item_keys_in_links():
    assert _item("links", used=("from", "to")) == ["- from", "  label", "  type"]
    assert _item("links", used=("from", "to", "label")) == ["- from", "  type"]
    assert _item("links", used=("from", "to", "label", "type")) == ["- from"]


def test_next_object_key_is_single():
    meta = SuggestionMeta(object_keys=("name",))
    assert get_suggestions(Context("key", "nodes", ""), meta) == ["type"]
    assert get_suggestions(Context("key", "nodes", "l"), meta) == ["links"]
    assert get_suggestions(Context("key", "nodes", "zz"), meta) == []
    assert get_suggestions(Context("key", "root", "")) == []


def test_forbidden_keys_never_offered():
    spec = AutocompleteSpec.from_mapping({
        "node": {"orderedKeys": ["id", "name", "type"], "requiredKeys": [], "entryStartKey": "name"},
    })
    assert collect_ordered_keys(spec.node) == ["name", "type"]
    meta = SuggestionMeta(spec=spec)
    assert get_suggestions(Context("key", "nodes", "i"), meta) == []
    assert get_suggestions(Context("key", "nodes", ""), meta) == ["name"]

    spec = AutocompleteSpec.from_mapping({
        "node": {"orderedKeys": ["id", "name"], "requiredKeys": [], "entryStartKey": "id"},
    })
    assert spec.node.entry_start_key == "name"
    assert _item("nodes", can_continue=False, spec=spec) == ["- name"]


def test_partial_spec_takes_defaults():
    spec = AutocompleteSpec.from_mapping({"link": {"orderedKeys": ["from", "to", "weight"]}})
    assert spec.link.entry_start_key == "from"
    assert spec.node.ordered_keys == ("name", "type", "ports", "nodes", "links")
    assert _item("links", used=("from", "to"), spec=spec) == ["- from", "  weight"]


def test_none_context_has_no_suggestions():
    assert get_suggestions(Context("none", "nodes", "x")) == []
