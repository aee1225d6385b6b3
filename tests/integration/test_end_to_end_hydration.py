"""Integration tests for file-to-scene hydration workflows."""

from __future__ import annotations

from cli.snapshot_file import load_snapshot_file
from core.types import SnapshotHydrationOptions
from scene_snapshot import build_default_hydrator
from tests.fixture_paths import fixture_path


def test_legacy_snapshot_round_trip_to_current_schema() -> None:
    """Legacy exports should migrate and hydrate with defaults filled in."""
    hydrator = build_default_hydrator()
    payload = load_snapshot_file(str(fixture_path("snapshots/legacy_demo.json")))

    result = hydrator.hydrate_snapshot(payload, SnapshotHydrationOptions(validate=True))

    assert result.success is True
    assert len(result.nodes) == 1
    assert result.metadata["migrated"] is True
    assert any("0.9.0->1.0.0" in warning for warning in result.warnings)
    node = result.nodes[0]
    assert node.guid == "n1" and node.node_type == "default"
    assert node.dimensions.width == 100.0 and node.is_visible is True
    assert result.scene is not None and result.scene.nodes == result.nodes


def test_full_yaml_snapshot_hydrates_every_entity() -> None:
    hydrator = build_default_hydrator()
    payload = load_snapshot_file(str(fixture_path("snapshots/full_scene.yaml")))

    result = hydrator.hydrate_snapshot(payload)

    assert result.success is True and result.errors == ()
    assert result.metadata["migrated"] is False
    scene = result.scene
    assert scene is not None
    assert (scene.guid, scene.name, scene.scene_type) == ("scene-42", "Solar System", "graph")
    assert scene.style.theme == "dark"
    assert [node.guid for node in scene.nodes] == ["sun", "earth"]
    assert scene.nodes[0].meta.extra == {"kind": "g-type"}
    assert scene.nodes[1].style.background_color == "#2255ff"
    edge = scene.edges[0]
    assert (edge.source_node_guid, edge.target_node_guid) == ("earth", "sun")
    assert scene.contexts[0].context_type == "camera"
    assert result.to_dict()["metadata"]["completed_stages"][-1] == "validation"


def test_yaml_timestamps_survive_hydration() -> None:
    """Unquoted YAML timestamps should reach the hydrated entities as ISO text."""
    hydrator = build_default_hydrator()
    payload = load_snapshot_file(str(fixture_path("snapshots/timestamped_scene.yaml")))

    result = hydrator.hydrate_snapshot(payload)

    assert result.success is True
    scene = result.scene
    assert scene is not None
    assert scene.created_at is not None and scene.created_at.startswith("2024-01-02T03:04:05")
    assert scene.updated_at == "2024-01-03"
    assert result.nodes[0].created_at is not None
    assert result.nodes[0].created_at.startswith("2024-02-01T10:00:00")
    assert result.nodes[1].created_at is None
    assert result.edges[0].updated_at == "2024-02-02"
