"""Typed models for hydrated scene entities.

This module defines the immutable scene, node, edge, and context
objects produced by progressive hydration, plus their nested values.
Durable numeric ids stay unset; the persistence layer assigns them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class Vector2:
    """Two-component vector."""

    x: float
    y: float


@dataclass(frozen=True)
class Vector3:
    """Three-component vector."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class NodePosition:
    """Node placement in scene coordinates."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class NodeDimensions:
    """Node bounding box size."""

    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class NodeMetadata:
    """Descriptive node fields.

    Attributes:
        label: Display label.
        description: Free-form description.
        tags: Ordered tag list.
        priority: Sort priority.
        status: Lifecycle status string.
        extra: Undocumented keys carried over from the snapshot.
    """

    label: str
    description: str
    tags: tuple[str, ...]
    priority: int
    status: str
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class NodeStyle:
    """Unresolved node presentation style."""

    background_color: str
    border_color: str
    border_width: float
    border_radius: float
    text_color: str
    font_size: float
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class NodeTransform:
    """Node scale, rotation, and skew."""

    scale: Vector3
    rotation: Vector3
    skew: Vector2


@dataclass(frozen=True)
class EdgePath:
    """Edge routing geometry."""

    path_type: str
    points: tuple[object, ...]
    curvature: float
    offset: float


@dataclass(frozen=True)
class EdgeMetadata:
    """Descriptive edge fields."""

    label: str
    weight: float
    direction: str
    tags: tuple[str, ...]
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class EdgeStyle:
    """Unresolved edge presentation style."""

    color: str
    width: float
    line_style: str
    opacity: float
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class EdgeTransform:
    """Edge scale, rotation, and offset."""

    scale: Vector2
    rotation: float
    offset: Vector2


@dataclass(frozen=True)
class SceneConfig:
    """Scene layout and interaction configuration."""

    layout: Mapping[str, object]
    animation: Mapping[str, object]
    interactions: Mapping[str, object]
    constraints: Mapping[str, object]
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class SceneMeta:
    """Descriptive scene fields."""

    tags: tuple[str, ...]
    category: str
    version: str
    author: str
    license: str
    source: str
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class SceneStyle:
    """Unresolved scene theme selection."""

    theme: str
    color_scheme: str
    node_styles: Mapping[str, object]
    edge_styles: Mapping[str, object]
    background: Mapping[str, object]
    fonts: Mapping[str, object]
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class SceneNode:
    """Hydrated scene node.

    Attributes:
        guid: Snapshot-provided node identifier.
        node_type: Node type name.
        position: Normalized position.
        dimensions: Normalized dimensions.
        meta: Normalized metadata.
        style: Normalized style.
        transform: Normalized transform.
        z_index: Stacking order.
        is_visible: Visibility flag.
        is_locked: Edit lock flag.
        core_node_guid: Optional reference to a core graph node.
        created_at: Snapshot creation timestamp, if recorded.
        updated_at: Snapshot update timestamp, if recorded.
        id: Durable id assigned by persistence, unset here.
        scene_id: Durable scene id assigned by persistence, unset here.
    """

    guid: str
    node_type: str
    position: NodePosition
    dimensions: NodeDimensions
    meta: NodeMetadata
    style: NodeStyle
    transform: NodeTransform
    z_index: int = 0
    is_visible: bool = True
    is_locked: bool = False
    core_node_guid: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    id: int | None = None
    scene_id: int | None = None


@dataclass(frozen=True)
class SceneEdge:
    """Hydrated scene edge referencing nodes by guid."""

    guid: str
    edge_type: str
    source_node_guid: str
    target_node_guid: str
    path: EdgePath
    meta: EdgeMetadata
    style: EdgeStyle
    transform: EdgeTransform
    is_visible: bool = True
    is_locked: bool = False
    core_edge_guid: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    id: int | None = None
    scene_id: int | None = None


@dataclass(frozen=True)
class SceneContext:
    """Hydrated navigation or presentation context."""

    guid: str
    context_type: str
    name: str
    config: Mapping[str, object]
    meta: Mapping[str, object]
    coordinates: Mapping[str, object]
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Scene:
    """Hydrated scene root.

    Attributes:
        guid: Snapshot-provided scene identifier, possibly empty.
        name: Scene display name.
        slug: URL slug.
        description: Free-form description.
        scene_type: Scene type name.
        config: Normalized configuration.
        meta: Normalized metadata.
        style: Normalized style.
        tenant_id: Optional owning tenant identifier.
        created_at: Snapshot creation timestamp, if recorded.
        updated_at: Snapshot update timestamp, if recorded.
        is_active: Activation flag.
        is_public: Public visibility flag.
        nodes: Linked nodes, attached only by final validation.
        edges: Linked edges, attached only by final validation.
        contexts: Linked contexts, attached only by final validation.
        id: Durable id assigned by persistence, unset here.
    """

    guid: str
    name: str
    slug: str
    description: str
    scene_type: str
    config: SceneConfig
    meta: SceneMeta
    style: SceneStyle
    tenant_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    is_active: bool = True
    is_public: bool = False
    nodes: tuple[SceneNode, ...] = ()
    edges: tuple[SceneEdge, ...] = ()
    contexts: tuple[SceneContext, ...] = ()
    id: int | None = None
