"""Unit tests for per-field normalizers."""

from __future__ import annotations

import pytest

from core.scene_types import Vector2, Vector3
from hydration.normalizers import (
    normalize_edge_metadata,
    normalize_edge_path,
    normalize_edge_style,
    normalize_edge_transform,
    normalize_node_dimensions,
    normalize_node_metadata,
    normalize_node_position,
    normalize_node_style,
    normalize_node_transform,
    normalize_scene_config,
    normalize_scene_meta,
    normalize_scene_style,
)

_ALL_NORMALIZERS = (
    normalize_node_position,
    normalize_node_dimensions,
    normalize_node_metadata,
    normalize_node_style,
    normalize_node_transform,
    normalize_edge_path,
    normalize_edge_metadata,
    normalize_edge_style,
    normalize_edge_transform,
    normalize_scene_config,
    normalize_scene_meta,
    normalize_scene_style,
)


@pytest.mark.parametrize("normalizer", _ALL_NORMALIZERS)
@pytest.mark.parametrize("raw_value", [None, {}, "garbage", 42, ["x"]])
def test_normalizers_never_raise(normalizer, raw_value) -> None:
    """Every normalizer should accept absent or mistyped input."""
    assert normalizer(raw_value) is not None


def test_node_dimensions_defaults_and_explicit_zero() -> None:
    """Missing dimensions default while explicit zeros are preserved."""
    dimensions = normalize_node_dimensions({"width": 0, "depth": "deep"})

    assert (dimensions.width, dimensions.height, dimensions.depth) == (0.0, 100.0, 0.0)


def test_node_position_ignores_booleans() -> None:
    """Booleans are not valid coordinates."""
    position = normalize_node_position({"x": True, "y": 3})

    assert (position.x, position.y, position.z) == (0.0, 3.0, 0.0)


def test_node_metadata_keeps_extra_keys() -> None:
    """Undocumented metadata keys should survive normalization."""
    meta = normalize_node_metadata({"label": "Sun", "tags": ["a", 1, "b"], "mass": 5})

    assert meta.label == "Sun"
    assert meta.tags == ("a", "b")
    assert meta.status == "active"
    assert meta.extra == {"mass": 5}


def test_node_style_reads_camel_case_fields() -> None:
    style = normalize_node_style({"backgroundColor": "#000", "fontSize": 20, "shadow": True})

    assert style.background_color == "#000"
    assert style.border_color == "#cccccc"
    assert style.font_size == 20.0
    assert style.extra == {"shadow": True}


def test_node_transform_fills_partial_vectors() -> None:
    """Partial vectors should take per-component defaults."""
    transform = normalize_node_transform({"scale": {"x": 2}})

    assert transform.scale == Vector3(x=2.0, y=1.0, z=1.0)
    assert transform.rotation == Vector3(x=0.0, y=0.0, z=0.0)
    assert transform.skew == Vector2(x=0.0, y=0.0)


def test_edge_defaults() -> None:
    """Edge normalizers should apply documented defaults."""
    path = normalize_edge_path(None)
    meta = normalize_edge_metadata(None)
    style = normalize_edge_style({"style": "dashed"})
    transform = normalize_edge_transform(None)

    assert (path.path_type, path.points, path.curvature) == ("straight", (), 0.0)
    assert (meta.weight, meta.direction) == (1.0, "forward")
    assert (style.color, style.width, style.line_style, style.opacity) == (
        "#666666",
        2.0,
        "dashed",
        1.0,
    )
    assert transform.scale == Vector2(x=1.0, y=1.0) and transform.rotation == 0.0


def test_scene_defaults() -> None:
    """Scene normalizers should default layout, version, and theme."""
    config = normalize_scene_config({"layout": "grid", "zoom": 2})
    meta = normalize_scene_meta({})
    style = normalize_scene_style({"colorScheme": "dark"})

    assert config.layout == {"type": "force"}
    assert config.animation == {"enabled": False}
    assert config.extra == {"zoom": 2}
    assert meta.version == "1.0.0"
    assert (style.theme, style.color_scheme) == ("default", "dark")
