"""Intermediate representation of untyped snapshot payloads.

Parsing happens per stage: the envelope is read once, and individual
entries are parsed only when their hydration stage runs, so a single
malformed entry can be skipped without rejecting the whole snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from core.constants import DEFAULT_CONTEXT_TYPE, DEFAULT_EDGE_TYPE, DEFAULT_NODE_TYPE
from core.errors import EntityHydrationError, InputShapeError, SceneStageFatalError


@dataclass(frozen=True)
class SnapshotEnvelope:
    """Top-level snapshot structure.

    Attributes:
        declared_version: ``schema.version`` when present.
        scene: Raw scene mapping, or None when absent or not an object.
        node_entries: Raw node entries in snapshot order.
        edge_entries: Raw edge entries in snapshot order.
        context_entries: Raw context entries in snapshot order.
    """

    declared_version: str | None
    scene: Mapping[str, Any] | None
    node_entries: tuple[object, ...]
    edge_entries: tuple[object, ...]
    context_entries: tuple[object, ...]


@dataclass(frozen=True)
class RawScene:
    """Scene identity fields with nested values left unnormalized."""

    guid: str
    name: str | None
    slug: str | None
    description: str | None
    scene_type: str | None
    tenant_id: str | None
    created_at: str | None
    updated_at: str | None
    config: object
    meta: object
    theme: object


@dataclass(frozen=True)
class RawNode:
    """Node entry with a validated identity and type."""

    guid: str
    node_type: str
    core_ref: str | None
    position: object
    dimensions: object
    meta: object
    style: object
    transform: object
    z_index: object
    is_visible: object
    is_locked: object
    created_at: str | None
    updated_at: str | None


@dataclass(frozen=True)
class RawEdge:
    """Edge entry with a validated identity and type."""

    guid: str
    edge_type: str
    source: str | None
    target: str | None
    core_ref: str | None
    path: object
    meta: object
    style: object
    transform: object
    is_visible: object
    is_locked: object
    created_at: str | None
    updated_at: str | None


@dataclass(frozen=True)
class RawContext:
    """Context entry; only its object shape is required."""

    guid: str
    context_type: str
    name: str
    config: object
    meta: object
    coordinates: object
    extra: Mapping[str, object]


_CONTEXT_FIELDS = ("id", "type", "name", "config", "meta", "coordinates")


def parse_snapshot_envelope(payload: object) -> SnapshotEnvelope:
    """Read the version and raw entity lists from a snapshot payload.

    Raises:
        InputShapeError: If the payload is not an object, or declares a
            malformed 'schema' or 'schema.version'.
    """
    if not isinstance(payload, Mapping):
        raise InputShapeError(
            f"Invalid snapshot data: expected an object, got {type(payload).__name__}."
        )
    declared_version = _declared_version(payload.get("schema"))
    scene = payload.get("scene")
    scene_mapping = scene if isinstance(scene, Mapping) else None
    return SnapshotEnvelope(
        declared_version=declared_version,
        scene=scene_mapping,
        node_entries=_entries(scene_mapping, "nodes"),
        edge_entries=_entries(scene_mapping, "edges"),
        context_entries=_entries(scene_mapping, "contexts"),
    )


def parse_raw_scene(scene: Mapping[str, Any] | None) -> RawScene:
    """Parse scene identity fields.

    Raises:
        SceneStageFatalError: If the snapshot carries no scene object.
    """
    if scene is None:
        raise SceneStageFatalError(
            "Failed to hydrate scene metadata: snapshot has no 'scene' object."
        )
    ids = _mapping(scene.get("ids"))
    timestamps = _mapping(scene.get("timestamps"))
    return RawScene(
        guid=_identifier(ids.get("scene")) or "",
        name=optional_text(scene.get("name")),
        slug=optional_text(scene.get("slug")),
        description=optional_text(scene.get("description")),
        scene_type=optional_text(scene.get("type")),
        tenant_id=_identifier(scene.get("tenant_id")),
        created_at=_timestamp(timestamps.get("created")),
        updated_at=_timestamp(timestamps.get("updated")),
        config=scene.get("config"),
        meta=scene.get("meta"),
        theme=scene.get("theme"),
    )


def parse_raw_node(entry: object, index: int) -> RawNode:
    """Parse one node entry.

    Raises:
        EntityHydrationError: If the entry is not an object, has no id,
            or declares an empty type.
    """
    mapping = _entity_mapping(entry, "Node", index)
    guid = _required_identifier(mapping, "Node", index)
    timestamps = _mapping(mapping.get("timestamps"))
    return RawNode(
        guid=guid,
        node_type=_declared_type(mapping, "Node", guid, DEFAULT_NODE_TYPE),
        core_ref=_identifier(mapping.get("core_ref")),
        position=mapping.get("position"),
        dimensions=mapping.get("dimensions"),
        meta=mapping.get("meta"),
        style=mapping.get("style"),
        transform=mapping.get("transform"),
        z_index=mapping.get("z_index"),
        is_visible=mapping.get("is_visible"),
        is_locked=mapping.get("is_locked"),
        created_at=_timestamp(timestamps.get("created")),
        updated_at=_timestamp(timestamps.get("updated")),
    )


def parse_raw_edge(entry: object, index: int) -> RawEdge:
    """Parse one edge entry; endpoints are resolved by the edge stage."""
    mapping = _entity_mapping(entry, "Edge", index)
    guid = _required_identifier(mapping, "Edge", index)
    timestamps = _mapping(mapping.get("timestamps"))
    return RawEdge(
        guid=guid,
        edge_type=_declared_type(mapping, "Edge", guid, DEFAULT_EDGE_TYPE),
        source=_identifier(mapping.get("source")),
        target=_identifier(mapping.get("target")),
        core_ref=_identifier(mapping.get("core_ref")),
        path=mapping.get("path"),
        meta=mapping.get("meta"),
        style=mapping.get("style"),
        transform=mapping.get("transform"),
        is_visible=mapping.get("is_visible"),
        is_locked=mapping.get("is_locked"),
        created_at=_timestamp(timestamps.get("created")),
        updated_at=_timestamp(timestamps.get("updated")),
    )


def parse_raw_context(entry: object, index: int) -> RawContext:
    """Parse one context entry, defaulting every field."""
    mapping = _entity_mapping(entry, "Context", index)
    return RawContext(
        guid=_identifier(mapping.get("id")) or "",
        context_type=optional_text(mapping.get("type")) or DEFAULT_CONTEXT_TYPE,
        name=optional_text(mapping.get("name")) or "",
        config=mapping.get("config"),
        meta=mapping.get("meta"),
        coordinates=mapping.get("coordinates"),
        extra={key: value for key, value in mapping.items() if key not in _CONTEXT_FIELDS},
    )


def optional_text(value: object) -> str | None:
    """Return a stripped non-empty string, or None."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return None


def _declared_version(schema: object) -> str | None:
    if schema is None:
        return None
    if not isinstance(schema, Mapping):
        raise InputShapeError(
            f"Invalid snapshot data: 'schema' must be an object, got {type(schema).__name__}."
        )
    version = schema.get("version")
    if version is None:
        return None
    if isinstance(version, (int, float)) and not isinstance(version, bool):
        return str(version)
    declared = optional_text(version)
    if declared is None:
        raise InputShapeError(
            "Invalid snapshot data: 'schema.version' must be a non-empty string, "
            f"got {version!r}. Quote the version in the export."
        )
    return declared


def _timestamp(value: object) -> str | None:
    # YAML loads unquoted ISO timestamps as date or datetime objects.
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return optional_text(value)


def _entries(scene: Mapping[str, Any] | None, field_name: str) -> tuple[object, ...]:
    if scene is None:
        return ()
    value = scene.get(field_name)
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return ()


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _identifier(value: object) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    return optional_text(value)


def _entity_mapping(entry: object, label: str, index: int) -> Mapping[str, Any]:
    if isinstance(entry, Mapping):
        return entry
    raise EntityHydrationError(
        f"{label} #{index + 1} is not an object (got {type(entry).__name__})."
    )


def _required_identifier(mapping: Mapping[str, Any], label: str, index: int) -> str:
    guid = _identifier(mapping.get("id"))
    if guid is None:
        raise EntityHydrationError(f"{label} #{index + 1} is missing its required 'id'.")
    return guid


def _declared_type(
    mapping: Mapping[str, Any],
    label: str,
    guid: str,
    default_type: str,
) -> str:
    if "type" not in mapping:
        return default_type
    declared = optional_text(mapping.get("type"))
    if declared is None:
        raise EntityHydrationError(
            f"{label} {guid} is missing its required type: 'type' must be a non-empty string."
        )
    return declared
