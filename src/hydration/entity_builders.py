"""Entity construction from parsed snapshot entries.

Builders combine identity fields from the intermediate representation
with normalized nested values. They never assign durable ids.
"""

from __future__ import annotations

from core.constants import DEFAULT_SCENE_NAME, DEFAULT_SCENE_TYPE
from core.scene_types import Scene, SceneContext, SceneEdge, SceneNode
from hydration.normalizers import (
    normalize_edge_metadata,
    normalize_edge_path,
    normalize_edge_style,
    normalize_edge_transform,
    normalize_flag,
    normalize_integer,
    normalize_mapping,
    normalize_node_dimensions,
    normalize_node_metadata,
    normalize_node_position,
    normalize_node_style,
    normalize_node_transform,
    normalize_scene_config,
    normalize_scene_meta,
    normalize_scene_style,
)
from hydration.raw_snapshot import RawContext, RawEdge, RawNode, RawScene


def build_scene(raw: RawScene) -> Scene:
    """Build a scene without linked nodes, edges, or contexts."""
    return Scene(
        guid=raw.guid,
        name=raw.name or DEFAULT_SCENE_NAME,
        slug=raw.slug or "",
        description=raw.description or "",
        scene_type=raw.scene_type or DEFAULT_SCENE_TYPE,
        config=normalize_scene_config(raw.config),
        meta=normalize_scene_meta(raw.meta),
        style=normalize_scene_style(raw.theme),
        tenant_id=raw.tenant_id,
        created_at=raw.created_at,
        updated_at=raw.updated_at,
    )


def build_node(raw: RawNode) -> SceneNode:
    return SceneNode(
        guid=raw.guid,
        node_type=raw.node_type,
        position=normalize_node_position(raw.position),
        dimensions=normalize_node_dimensions(raw.dimensions),
        meta=normalize_node_metadata(raw.meta),
        style=normalize_node_style(raw.style),
        transform=normalize_node_transform(raw.transform),
        z_index=normalize_integer(raw.z_index, 0),
        is_visible=normalize_flag(raw.is_visible, True),
        is_locked=normalize_flag(raw.is_locked, False),
        core_node_guid=raw.core_ref,
        created_at=raw.created_at,
        updated_at=raw.updated_at,
    )


def build_edge(raw: RawEdge, source_guid: str, target_guid: str) -> SceneEdge:
    """Build an edge whose endpoints were already resolved."""
    return SceneEdge(
        guid=raw.guid,
        edge_type=raw.edge_type,
        source_node_guid=source_guid,
        target_node_guid=target_guid,
        path=normalize_edge_path(raw.path),
        meta=normalize_edge_metadata(raw.meta),
        style=normalize_edge_style(raw.style),
        transform=normalize_edge_transform(raw.transform),
        is_visible=normalize_flag(raw.is_visible, True),
        is_locked=normalize_flag(raw.is_locked, False),
        core_edge_guid=raw.core_ref,
        created_at=raw.created_at,
        updated_at=raw.updated_at,
    )


def build_context(raw: RawContext) -> SceneContext:
    return SceneContext(
        guid=raw.guid,
        context_type=raw.context_type,
        name=raw.name,
        config=normalize_mapping(raw.config),
        meta=normalize_mapping(raw.meta),
        coordinates=normalize_mapping(raw.coordinates),
        extra=dict(raw.extra),
    )
