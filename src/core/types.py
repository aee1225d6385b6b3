"""Shared typed models.

This module defines immutable option and result models used by the
migration engine, the hydration pipeline, the SDK, and the CLI.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from core.constants import DEFAULT_HYDRATION_TIMEOUT_MS
from core.scene_types import Scene, SceneContext, SceneEdge, SceneNode


@dataclass(frozen=True)
class SnapshotHydrationOptions:
    """Hydration and migration options.

    Attributes:
        validate: Run final required-field validation.
        strict: Abort on the first malformed entity instead of skipping it.
        fallback: Assume the legacy schema when a snapshot declares no version.
        cache: Reuse memoised migration paths from the registry.
        timeout_ms: Advisory timeout, accepted but not enforced.
    """

    validate: bool = True
    strict: bool = False
    fallback: bool = True
    cache: bool = False
    timeout_ms: int = DEFAULT_HYDRATION_TIMEOUT_MS


@dataclass(frozen=True)
class HydrationPerformance:
    """Per-call timings in milliseconds and sampled memory in bytes.

    Attributes:
        load_time: Time spent migrating the payload to the target schema.
        parse_time: Time spent in the scene, node, edge, and context stages.
        validation_time: Time spent in final validation and linking.
        total_time: Wall time of the whole call.
        memory_usage: Resident memory of the process when the call finished.
    """

    load_time: float = 0.0
    parse_time: float = 0.0
    validation_time: float = 0.0
    total_time: float = 0.0
    memory_usage: int = 0


@dataclass(frozen=True)
class HydrationResult:
    """Immutable outcome of one hydration call.

    Attributes:
        success: Whether every fatal check passed.
        scene: Hydrated scene, or None when scene hydration never completed.
        nodes: Nodes produced by the node stage.
        edges: Edges produced by the edge stage.
        contexts: Contexts produced by the context stage.
        warnings: Non-fatal notes, including applied migrations.
        errors: Fatal and skipped-entity error messages.
        performance: Timing and memory sample.
        metadata: Versioning and per-stage details.
    """

    success: bool
    scene: Scene | None
    nodes: tuple[SceneNode, ...]
    edges: tuple[SceneEdge, ...]
    contexts: tuple[SceneContext, ...]
    warnings: tuple[str, ...]
    errors: tuple[str, ...]
    performance: HydrationPerformance
    metadata: Mapping[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """Serialize result into a stable JSON-friendly mapping."""
        payload = asdict(self)
        payload["metadata"] = dict(self.metadata)
        return payload


@dataclass(frozen=True)
class MigrationResult:
    """Immutable outcome of one migrate-snapshot call.

    Attributes:
        success: Whether every migration on the path committed.
        data: Migrated payload, or None when the call failed.
        warnings: One entry per applied migration.
        errors: Failure messages.
        total_time: Wall time in milliseconds.
        metadata: Source and target versions plus the path taken.
    """

    success: bool
    data: dict[str, Any] | None
    warnings: tuple[str, ...]
    errors: tuple[str, ...]
    total_time: float
    metadata: Mapping[str, object] = field(default_factory=dict)

    @property
    def scene(self) -> Mapping[str, Any] | None:
        """Raw scene mapping of the migrated payload."""
        if self.data is None:
            return None
        scene = self.data.get("scene")
        return scene if isinstance(scene, Mapping) else None

    @property
    def nodes(self) -> list[Any]:
        """Raw node entries of the migrated payload."""
        return _scene_entries(self.scene, "nodes")

    @property
    def edges(self) -> list[Any]:
        """Raw edge entries of the migrated payload."""
        return _scene_entries(self.scene, "edges")


def _scene_entries(scene: Mapping[str, Any] | None, field_name: str) -> list[Any]:
    if scene is None:
        return []
    entries = scene.get(field_name)
    return list(entries) if isinstance(entries, list) else []
