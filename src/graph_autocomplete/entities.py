from __future__ import annotations
import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

import yaml

from .lines import split_lines
from .models import AutocompleteMeta, Entities
from .sections import SECTION_HEADER, canonical_section

log = logging.getLogger(__name__)

_ROOT_SECTIONS = ("nodes", "links")


def parse_document(text: str) -> Tuple[Any, Optional[Exception]]:
    """
    (parsed, None) on success, (None, error) when the text does not load.

    Besides syntax errors, constructors raise ValueError on impossible scalars
    (`2024-02-30`) and deep flow nesting overflows the composer.
    """
    try:
        return yaml.safe_load(text), None
    except (yaml.YAMLError, ValueError, RecursionError) as exc:
        log.debug("YAML parse failed, falling back to line scan: %s", exc)
        return None, exc


def _parse_endpoint(endpoint: Any) -> Optional[Tuple[str, str]]:
    if not isinstance(endpoint, str):
        return None
    node, _, port = endpoint.partition(":")
    if not node:
        return None
    return node, port


def entities_from_parsed(parsed: Any) -> Entities:
    """
    Walk the parsed graph (and every nested node that carries its own
    nodes/links) collecting node names and node:port endpoints.
    """
    node_names: Set[str] = set()
    pending: List[Tuple[str, str]] = []
    seen: Set[int] = set()

    # /* ~~~ explicit stack + identity guard: YAML aliases can build cycles ~~~ */
    stack = [parsed]
    while stack:
        graph = stack.pop()
        if not isinstance(graph, dict) or id(graph) in seen:
            continue
        seen.add(id(graph))

        nodes = graph.get("nodes")
        links = graph.get("links")
        if not isinstance(links, list):
            links = graph.get("edges")

        for node in nodes if isinstance(nodes, list) else ():
            if isinstance(node, str):
                node_names.add(node)
                continue
            if not isinstance(node, dict):
                continue
            if isinstance(node.get("name"), str):
                node_names.add(node["name"])
            stack.append(node)

        for link in links if isinstance(links, list) else ():
            if not isinstance(link, dict):
                continue
            for endpoint in (link.get("from"), link.get("to")):
                parsed_endpoint = _parse_endpoint(endpoint)
                if parsed_endpoint:
                    pending.append(parsed_endpoint)

    ports: Dict[str, Set[str]] = {}
    for node, port in pending:
        # orphaned ports (unknown node) are dropped
        if not port or node not in node_names:
            continue
        ports.setdefault(node, set()).add(port)

    return Entities(
        node_names=tuple(sorted(node_names)),
        ports_by_node={k: frozenset(v) for k, v in ports.items()},
    )


def extract_entities(text: str) -> Entities:
    parsed, error = parse_document(text)
    if error is not None:
        return Entities()
    return entities_from_parsed(parsed)


def collect_root_section_presence(lines: Sequence[str], parsed: Any = None) -> FrozenSet[str]:
    """Root sections present in the document; parsed keys first, then a textual scan."""
    present: Set[str] = set()
    if isinstance(parsed, dict):
        for key in parsed:
            if not isinstance(key, str):
                continue
            normalized = canonical_section(key)
            if normalized in _ROOT_SECTIONS:
                present.add(normalized)
    if present:
        return frozenset(present)

    for line in lines:
        m = SECTION_HEADER.match(line or "")
        if not m or m.group(1):
            continue
        normalized = canonical_section(m.group(2))
        if normalized in _ROOT_SECTIONS:
            present.add(normalized)
    return frozenset(present)


def build_metadata(text: str) -> AutocompleteMeta:
    lines = split_lines(text)
    parsed, error = parse_document(text)
    if error is not None:
        return AutocompleteMeta(
            lines=tuple(lines),
            entities=Entities(),
            root_section_presence=collect_root_section_presence(lines, None),
        )
    return AutocompleteMeta(
        lines=tuple(lines),
        entities=entities_from_parsed(parsed),
        root_section_presence=collect_root_section_presence(lines, parsed),
    )
