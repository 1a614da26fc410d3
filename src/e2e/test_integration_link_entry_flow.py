import pytest
from graph_autocomplete import Engine

NODES = "nodes:\n  - name: A\n  - name: B\n"


@pytest.mark.e2e
def test_exact_node_name_offers_port_separator():
    eng = Engine()
    try:
        text = "nodes:\n  - name: A\nlinks:\n  - from: A"
        runtime = eng.context_at(text, 4, 12)
        assert (runtime.context.kind, runtime.context.endpoint) == ("endpointValue", "from")

        items = eng.complete(text, 4, 12)
        assert [i.label for i in items] == [":"]
        assert (items[0].insert_text, items[0].start_column) == (":", 12)
        assert items[0].kind == "value"
        assert items[0].command is None
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_to_endpoint_offers_port_separator_too():
    eng = Engine()
    try:
        text = "nodes:\n  - name: A\nlinks:\n  - from: A\n    to: A"
        assert eng.suggestions_at(text, 5, 10) == [":"]
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_partial_endpoint_lists_matching_nodes():
    eng = Engine()
    try:
        text = NODES + "links:\n  - from: "
        assert eng.suggestions_at(text, 5, 11) == ["A", "B"]
        items = eng.complete(text, 5, 11)
        assert items[0].command is not None and items[0].command.key_token == "from"
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_enter_walks_through_a_link_entry():
    eng = Engine()
    try:
        text = NODES + "links:\n  - from: A:eth0"
        action = eng.plan_key("enter", text, 5, 17)
        assert action.should_handle and action.insert_text == "\n    to: "

        text = text + action.insert_text + "B"
        action = eng.plan_key("enter", text, 6, 10)
        assert action.should_handle and action.insert_text == "\n  "

        text = text + action.insert_text
        assert eng.suggestions_at(text, 7, 3) == ["- from", "  label", "  type"]

        items = eng.complete(text, 7, 3)
        label = [i for i in items if i.label == "  label"][0]
        assert (label.insert_text, label.start_column) == ("    label: ", 1)
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_enter_after_label_then_remaining_keys():
    eng = Engine()
    try:
        text = "links:\n  - from: A\n    to: B\n    label: my_link_label"
        action = eng.plan_enter(text, 4, 25)
        assert (action.should_handle, action.edit_id) == (True, "label-enter")
        text = text + action.insert_text
        assert eng.suggestions_at(text, 5, 3) == ["- from", "  type"]
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_link_type_value_snippet():
    eng = Engine()
    try:
        text = "links:\n  - from: A\n    to: B\n    type: di"
        items = eng.complete(text, 4, 13)
        assert [i.label for i in items] == ["directed"]
        assert items[0].insert_text == "directed\n    $0"
        assert items[0].insert_as_snippet is True
        assert items[0].command is not None and items[0].command.key_token == "type"
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_blank_line_after_link_type_keeps_remaining_keys():
    eng = Engine()
    try:
        text = "links:\n  - from: A\n    to: B\n    type: directed\n    "
        runtime = eng.context_at(text, 5, 5)
        assert (runtime.context.kind, runtime.context.section) == ("itemKey", "links")
        assert runtime.item_context_keys == ("from", "to", "type")
        assert eng.suggestions_at(text, 5, 5) == ["- from", "  label"]
    finally:
        eng.shutdown()
