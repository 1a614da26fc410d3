from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ProfileCatalog:
    """Node/link type vocabulary published for one schema profile."""
    schema_version: str = ""
    profile_id: str = ""
    profile_version: Optional[int] = None
    checksum: str = ""
    node_types: Tuple[str, ...] = ()
    link_types: Tuple[str, ...] = ()


EMPTY_PROFILE_CATALOG = ProfileCatalog()


def _types(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        item = item.strip()
        if item and item not in out:
            out.append(item)
    return tuple(out)


def _version(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        v = int(value)
    except (TypeError, ValueError):
        return None
    return v if v > 0 else None


def create_profile_catalog(payload: Any) -> ProfileCatalog:
    """Normalize a catalog payload (camelCase or snake_case); junk becomes defaults."""
    if isinstance(payload, ProfileCatalog):
        return payload
    if not isinstance(payload, Mapping):
        return EMPTY_PROFILE_CATALOG

    def get(*names: str) -> Any:
        for n in names:
            if n in payload:
                return payload[n]
        return None

    return ProfileCatalog(
        schema_version=str(get("schemaVersion", "schema_version") or "").strip(),
        profile_id=str(get("profileId", "profile_id", "graphTypeId", "graph_type_id") or "").strip(),
        profile_version=_version(get("profileVersion", "profile_version", "graphTypeVersion", "graph_type_version")),
        checksum=str(get("checksum") or "").strip(),
        node_types=_types(get("nodeTypes", "node_types")),
        link_types=_types(get("linkTypes", "link_types")),
    )


def catalog_cache_key(
    base_url: str = "",
    profile_id: str = "",
    stage: str = "published",
    version: Any = None,
    checksum: str = "",
) -> str:
    return "|".join((
        str(base_url or "").rstrip("/"),
        str(profile_id or ""),
        str(stage or "published"),
        "" if version is None else str(version),
        str(checksum or ""),
    ))
