INDENT_SIZE: int = 2

# /* ~~~ keys never offered, even when an AutocompleteSpec lists them ~~~ */
FORBIDDEN_AUTOCOMPLETE_KEYS = frozenset({"id"})

# textual alias -> canonical root section
ROOT_SECTION_ALIASES = {"edges": "links"}

# keys whose value is itself a list of entries (cascade on insert)
COLLECTION_KEYS = ("nodes", "links")

# keys whose values have their own suggestion list
VALUE_SUGGEST_KEYS = frozenset({"type", "from", "to"})

NEXT_STEP_TITLE = "Trigger Next Step Suggestions"

NODE_TYPE_SUGGESTIONS: tuple[str, ...] = (
    "router", "switch", "mpls", "vpn", "firewall", "cloud", "datacenter",
    "azure", "internet", "cpe", "database", "server", "host", "ran", "radio",
    "splitter", "devices", "satelliteuplink", "satellite", "broadcast", "lan",
    "diagnostics", "analytics", "monitor", "logging", "iam", "idea", "tools",
    "cctv", "process", "cooling", "security", "console", "gis", "city",
    "settlement", "sdu", "mdu", "company", "farm", "airport", "mine",
    "fieldservice", "facility", "energy", "transmission", "ip", "mobilecore",
    "access", "operation", "controller", "product", "consumer", "fortinet",
    "juniper", "ericsson", "huawei", "cisco", "mikrotik",
)

LINK_TYPE_SUGGESTIONS: tuple[str, ...] = (
    "directed", "undirected", "association", "dependency", "generalization", "none",
)

# Plain-data default spec; AutocompleteSpec.from_mapping() reads this shape.
DEFAULT_AUTOCOMPLETE_SPEC = {
    "rootSections": ["nodes", "links"],
    "node": {
        "orderedKeys": ["name", "type", "ports", "nodes", "links"],
        "requiredKeys": ["name"],
        "entryStartKey": "name",
    },
    "link": {
        "orderedKeys": ["from", "to", "label", "type"],
        "requiredKeys": ["from", "to"],
        "entryStartKey": "from",
    },
}

KEY_DOCUMENTATION = {
    "nodes": "Collection of graph nodes. Supports nested nodes and nested links.",
    "links": "Collection of graph links/edges. Use from/to as node[:port] references.",
    "name": "Display name for a node. Also used as a default endpoint identifier.",
    "type": "Domain node/link type. Node types are schema-driven plus built-in defaults.",
    "from": "Link source endpoint in node or node:port format.",
    "to": "Link destination endpoint in node or node:port format.",
    "label": "Optional display label for links.",
    "ports": "Port definitions for node endpoints.",
}
