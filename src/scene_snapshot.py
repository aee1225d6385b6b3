"""Public SDK surface for scene snapshot hydration.

This module provides a stable import path for host applications.
It re-exports the hydrator, the registry, and typed option models.
"""

from __future__ import annotations

from core.config import SnapshotConfig
from core.migration_types import Migration, MigrationStep
from core.scene_types import Scene, SceneContext, SceneEdge, SceneNode
from core.types import (
    HydrationPerformance,
    HydrationResult,
    MigrationResult,
    SnapshotHydrationOptions,
)
from hydration.service import SnapshotHydrator
from migration.builtin import build_default_registry
from migration.executor import MigrationExecutor
from migration.registry import MigrationRegistry
from migration.steps import add_field_step, remove_field_step, rename_field_step, set_field_step

__all__ = [
    "HydrationPerformance",
    "HydrationResult",
    "Migration",
    "MigrationExecutor",
    "MigrationRegistry",
    "MigrationResult",
    "MigrationStep",
    "Scene",
    "SceneContext",
    "SceneEdge",
    "SceneNode",
    "SnapshotConfig",
    "SnapshotHydrationOptions",
    "SnapshotHydrator",
    "add_field_step",
    "build_default_hydrator",
    "build_default_registry",
    "remove_field_step",
    "rename_field_step",
    "set_field_step",
]


def build_default_hydrator(config: SnapshotConfig | None = None) -> SnapshotHydrator:
    """Build a hydrator over the built-in migrations.

    Args:
        config: Optional runtime configuration, read from env when omitted.

    Returns:
        Hydrator targeting the configured schema version.
    """
    runtime_config = config or SnapshotConfig.from_env()
    return SnapshotHydrator(build_default_registry(), runtime_config.target_version)
