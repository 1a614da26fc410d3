# src/e2e/test_context_classifier.py
import pytest

from graph_autocomplete.context import get_context
from graph_autocomplete.lines import (
    is_root_boundary_empty_line, line_indent, previous_non_empty_line, root_content_bounds,
)
from graph_autocomplete.models import CONTEXT_KINDS
from graph_autocomplete.sections import infer_section

NESTED = [
    "nodes:",
    "  - name: sub",
    "    nodes:",
    "      - name: a",
    "    links:",
    "      - from: a",
]


def test_line_helpers():
    assert line_indent("    x") == 4
    assert line_indent("") == 0
    assert previous_non_empty_line(["a", "", "  "], 2) == ("a", 0)
    assert previous_non_empty_line(["", " "], 1) is None
    assert root_content_bounds(["", "a", "", "b", ""]) == (1, 3)
    assert root_content_bounds(["", "  "]) == (-1, -1)


def test_root_boundary_lines():
    lines = ["", "nodes:", "", "  - name: A", ""]
    assert is_root_boundary_empty_line(lines, 0) is True
    assert is_root_boundary_empty_line(lines, 4) is True
    assert is_root_boundary_empty_line(lines, 2) is False   # inside content
    assert is_root_boundary_empty_line(lines, 1) is False   # not blank
    assert is_root_boundary_empty_line(["", ""], 0) is False  # blank document


def test_infer_section_finds_innermost_block():
    assert infer_section(NESTED, 5, 6).section == "links"
    assert infer_section(NESTED, 5, 6).section_indent == 4
    assert infer_section(NESTED, 3, 6).section == "nodes"
    assert infer_section(NESTED, 3, 6).section_indent == 4
    assert infer_section(NESTED, 1, 2).section_indent == 0
    # a header line resolves to itself
    assert infer_section(NESTED, 2, 4).section_indent == 4
    assert infer_section(["foo: 1"], 0, 0).section == "root"


def test_edges_is_an_alias_for_links():
    ctx = get_context("edges:\n  - from: A", 2, 12)
    assert ctx.kind == "endpointValue"
    assert ctx.section == "links"


def test_blank_line_after_document_is_root_item_key():
    ctx = get_context("nodes:\n  - name: A\n", 3, 1)
    assert (ctx.kind, ctx.section, ctx.prefix) == ("rootItemKey", "root", "")


def test_blank_line_before_document_is_root_item_key():
    ctx = get_context("\nlinks:\n  - from: A\n    to: A", 1, 1)
    assert ctx.kind == "rootItemKey"


def test_empty_document_and_partial_root_key():
    assert get_context("", 1, 1).kind == "rootKey"
    ctx = get_context("no", 1, 3)
    assert (ctx.kind, ctx.prefix) == ("rootKey", "no")


def test_type_values():
    ctx = get_context("nodes:\n  - name: A\n    type: ro", 3, 13)
    assert (ctx.kind, ctx.section, ctx.prefix) == ("nodeTypeValue", "nodes", "ro")

    ctx = get_context("links:\n  - from: A\n    type: di", 3, 13)
    assert (ctx.kind, ctx.prefix) == ("linkTypeValue", "di")

    ctx = get_context("nodes:\n  - type: sw", 2, 13)
    assert (ctx.kind, ctx.prefix) == ("nodeTypeValue", "sw")


def test_endpoint_values():
    ctx = get_context("nodes:\n  - name: A\nlinks:\n  - from: A", 4, 12)
    assert (ctx.kind, ctx.endpoint, ctx.prefix) == ("endpointValue", "from", "A")

    ctx = get_context("links:\n  - from: A\n    to: ", 3, 9)
    assert (ctx.kind, ctx.endpoint, ctx.prefix) == ("endpointValue", "to", "")


def test_from_outside_links_is_not_an_endpoint():
    assert get_context("nodes:\n  - from: A", 2, 12).kind == "none"


def test_endpoint_in_nested_links_block():
    ctx = get_context("nodes:\n  - name: sub\n    links:\n      - from: ", 4, 15)
    assert (ctx.kind, ctx.section, ctx.endpoint) == ("endpointValue", "links", "from")


def test_item_keys():
    ctx = get_context("nodes:\n  - na", 2, 7)
    assert (ctx.kind, ctx.prefix) == ("itemKey", "na")

    ctx = get_context("nodes:\n  - name: node-1\n  no", 3, 5)
    assert (ctx.kind, ctx.section, ctx.prefix) == ("itemKey", "nodes", "no")


def test_key_deeper_than_item_indent():
    ctx = get_context("nodes:\n  - name: node-1\n    no", 3, 7)
    assert (ctx.kind, ctx.section, ctx.prefix) == ("key", "nodes", "no")


def test_blank_line_after_terminal_type_continues_as_item_key():
    ctx = get_context("nodes:\n  - name: A\n    type: router\n    ", 4, 5)
    assert (ctx.kind, ctx.section, ctx.prefix) == ("itemKey", "nodes", "")


def test_blank_line_after_link_type_continues_as_item_key():
    ctx = get_context("links:\n  - from: A\n    to: B\n    type: directed\n    ", 5, 5)
    assert (ctx.kind, ctx.section, ctx.prefix) == ("itemKey", "links", "")


def test_blank_line_after_non_terminal_key_is_plain_key():
    ctx = get_context("nodes:\n  - name: A\n    ", 3, 5)
    assert ctx.kind == "key"


def test_value_with_spaces_is_none():
    assert get_context("nodes:\n  - name: A\n    name: x y", 3, 14).kind == "none"


def test_out_of_range_positions_are_clamped():
    assert get_context("nodes:", 10, 99).kind == "rootItemKey"
    assert get_context("nodes:", 1, -5).kind in CONTEXT_KINDS
    assert get_context("nodes:", 0, 0).kind in CONTEXT_KINDS


@pytest.mark.parametrize("text", [
    "nodes:\n  - name: A\n    type: router\nlinks:\n  - from: A:eth0\n    to: A\n    label: x\n",
    "nodes:\n  - name: [broken\n  -\n\tlinks:\n - from",
    "",
    "\n\n",
])
def test_classification_is_total(text):
    lines = text.split("\n")
    for line_no in range(1, len(lines) + 2):
        width = len(lines[line_no - 1]) if line_no <= len(lines) else 0
        for col in range(1, width + 2):
            assert get_context(text, line_no, col).kind in CONTEXT_KINDS
