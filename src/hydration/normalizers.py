"""Per-field defaulting for hydrated entities.

Every normalizer accepts a possibly partial, absent, or wrongly typed
value and returns a fully populated object. Missing or mistyped fields
take the documented default; explicit zero values are preserved.
Normalizers never raise.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import (
    DEFAULT_EDGE_COLOR,
    DEFAULT_EDGE_DIRECTION,
    DEFAULT_EDGE_LINE_STYLE,
    DEFAULT_EDGE_OPACITY,
    DEFAULT_EDGE_PATH_TYPE,
    DEFAULT_EDGE_WEIGHT,
    DEFAULT_EDGE_WIDTH,
    DEFAULT_NODE_BACKGROUND_COLOR,
    DEFAULT_NODE_BORDER_COLOR,
    DEFAULT_NODE_BORDER_RADIUS,
    DEFAULT_NODE_BORDER_WIDTH,
    DEFAULT_NODE_FONT_SIZE,
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_STATUS,
    DEFAULT_NODE_TEXT_COLOR,
    DEFAULT_NODE_WIDTH,
    DEFAULT_SCENE_COLOR_SCHEME,
    DEFAULT_SCENE_LAYOUT_TYPE,
    DEFAULT_SCENE_META_VERSION,
    DEFAULT_SCENE_THEME,
)
from core.scene_types import (
    EdgeMetadata,
    EdgePath,
    EdgeStyle,
    EdgeTransform,
    NodeDimensions,
    NodeMetadata,
    NodePosition,
    NodeStyle,
    NodeTransform,
    SceneConfig,
    SceneMeta,
    SceneStyle,
    Vector2,
    Vector3,
)


def normalize_node_position(raw: object) -> NodePosition:
    """Default a node position to the origin."""
    values = _mapping(raw)
    return NodePosition(
        x=_number(values.get("x"), 0.0),
        y=_number(values.get("y"), 0.0),
        z=_number(values.get("z"), 0.0),
    )


def normalize_node_dimensions(raw: object) -> NodeDimensions:
    """Default node dimensions to a flat 100x100 box."""
    values = _mapping(raw)
    return NodeDimensions(
        width=_number(values.get("width"), DEFAULT_NODE_WIDTH),
        height=_number(values.get("height"), DEFAULT_NODE_HEIGHT),
        depth=_number(values.get("depth"), 0.0),
    )


def normalize_node_metadata(raw: object) -> NodeMetadata:
    values = _mapping(raw)
    return NodeMetadata(
        label=_text(values.get("label"), ""),
        description=_text(values.get("description"), ""),
        tags=_tags(values.get("tags")),
        priority=_integer(values.get("priority"), 0),
        status=_text(values.get("status"), DEFAULT_NODE_STATUS),
        extra=_extra(values, ("label", "description", "tags", "priority", "status")),
    )


def normalize_node_style(raw: object) -> NodeStyle:
    values = _mapping(raw)
    documented = (
        "backgroundColor",
        "borderColor",
        "borderWidth",
        "borderRadius",
        "textColor",
        "fontSize",
    )
    return NodeStyle(
        background_color=_text(values.get("backgroundColor"), DEFAULT_NODE_BACKGROUND_COLOR),
        border_color=_text(values.get("borderColor"), DEFAULT_NODE_BORDER_COLOR),
        border_width=_number(values.get("borderWidth"), DEFAULT_NODE_BORDER_WIDTH),
        border_radius=_number(values.get("borderRadius"), DEFAULT_NODE_BORDER_RADIUS),
        text_color=_text(values.get("textColor"), DEFAULT_NODE_TEXT_COLOR),
        font_size=_number(values.get("fontSize"), DEFAULT_NODE_FONT_SIZE),
        extra=_extra(values, documented),
    )


def normalize_node_transform(raw: object) -> NodeTransform:
    """Default a node transform to identity scale with no rotation or skew."""
    values = _mapping(raw)
    return NodeTransform(
        scale=_vector3(values.get("scale"), 1.0),
        rotation=_vector3(values.get("rotation"), 0.0),
        skew=_vector2(values.get("skew"), 0.0),
    )


def normalize_edge_path(raw: object) -> EdgePath:
    values = _mapping(raw)
    points = values.get("points")
    return EdgePath(
        path_type=_text(values.get("type"), DEFAULT_EDGE_PATH_TYPE),
        points=tuple(points) if isinstance(points, (list, tuple)) else (),
        curvature=_number(values.get("curvature"), 0.0),
        offset=_number(values.get("offset"), 0.0),
    )


def normalize_edge_metadata(raw: object) -> EdgeMetadata:
    values = _mapping(raw)
    return EdgeMetadata(
        label=_text(values.get("label"), ""),
        weight=_number(values.get("weight"), DEFAULT_EDGE_WEIGHT),
        direction=_text(values.get("direction"), DEFAULT_EDGE_DIRECTION),
        tags=_tags(values.get("tags")),
        extra=_extra(values, ("label", "weight", "direction", "tags")),
    )


def normalize_edge_style(raw: object) -> EdgeStyle:
    values = _mapping(raw)
    return EdgeStyle(
        color=_text(values.get("color"), DEFAULT_EDGE_COLOR),
        width=_number(values.get("width"), DEFAULT_EDGE_WIDTH),
        line_style=_text(values.get("style"), DEFAULT_EDGE_LINE_STYLE),
        opacity=_number(values.get("opacity"), DEFAULT_EDGE_OPACITY),
        extra=_extra(values, ("color", "width", "style", "opacity")),
    )


def normalize_edge_transform(raw: object) -> EdgeTransform:
    values = _mapping(raw)
    return EdgeTransform(
        scale=_vector2(values.get("scale"), 1.0),
        rotation=_number(values.get("rotation"), 0.0),
        offset=_vector2(values.get("offset"), 0.0),
    )


def normalize_scene_config(raw: object) -> SceneConfig:
    """Default scene config to a force layout with animation disabled."""
    values = _mapping(raw)
    return SceneConfig(
        layout=normalize_mapping(values.get("layout"), {"type": DEFAULT_SCENE_LAYOUT_TYPE}),
        animation=normalize_mapping(values.get("animation"), {"enabled": False}),
        interactions=normalize_mapping(values.get("interactions")),
        constraints=normalize_mapping(values.get("constraints")),
        extra=_extra(values, ("layout", "animation", "interactions", "constraints")),
    )


def normalize_scene_meta(raw: object) -> SceneMeta:
    values = _mapping(raw)
    documented = ("tags", "category", "version", "author", "license", "source")
    return SceneMeta(
        tags=_tags(values.get("tags")),
        category=_text(values.get("category"), ""),
        version=_text(values.get("version"), DEFAULT_SCENE_META_VERSION),
        author=_text(values.get("author"), ""),
        license=_text(values.get("license"), ""),
        source=_text(values.get("source"), ""),
        extra=_extra(values, documented),
    )


def normalize_scene_style(raw: object) -> SceneStyle:
    """Default the scene theme selection; resolution happens downstream."""
    values = _mapping(raw)
    documented = ("theme", "colorScheme", "nodeStyles", "edgeStyles", "background", "fonts")
    return SceneStyle(
        theme=_text(values.get("theme"), DEFAULT_SCENE_THEME),
        color_scheme=_text(values.get("colorScheme"), DEFAULT_SCENE_COLOR_SCHEME),
        node_styles=normalize_mapping(values.get("nodeStyles")),
        edge_styles=normalize_mapping(values.get("edgeStyles")),
        background=normalize_mapping(values.get("background")),
        fonts=normalize_mapping(values.get("fonts")),
        extra=_extra(values, documented),
    )


def normalize_mapping(
    raw: object,
    default: Mapping[str, object] | None = None,
) -> dict[str, object]:
    """Copy a mapping value, or the default when absent or not a mapping."""
    if isinstance(raw, Mapping):
        return dict(raw)
    return dict(default or {})


def normalize_flag(raw: object, default: bool) -> bool:
    """Read a boolean flag, keeping the default for non-booleans."""
    return raw if isinstance(raw, bool) else default


def normalize_integer(raw: object, default: int) -> int:
    return _integer(raw, default)


def _mapping(raw: object) -> Mapping[str, Any]:
    return raw if isinstance(raw, Mapping) else {}


def _number(raw: object, default: float) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return default
    return float(raw)


def _integer(raw: object, default: int) -> int:
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return default


def _text(raw: object, default: str) -> str:
    if isinstance(raw, str) and raw:
        return raw
    return default


def _tags(raw: object) -> tuple[str, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(tag for tag in raw if isinstance(tag, str))


def _vector2(raw: object, default: float) -> Vector2:
    values = _mapping(raw)
    return Vector2(x=_number(values.get("x"), default), y=_number(values.get("y"), default))


def _vector3(raw: object, default: float) -> Vector3:
    values = _mapping(raw)
    return Vector3(
        x=_number(values.get("x"), default),
        y=_number(values.get("y"), default),
        z=_number(values.get("z"), default),
    )


def _extra(values: Mapping[str, Any], documented: tuple[str, ...]) -> dict[str, object]:
    return {key: value for key, value in values.items() if key not in documented}
