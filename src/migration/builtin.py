"""Built-in schema migrations.

This module defines the migrations shipped with the library and the
factory hosts use to build a populated registry at startup.
"""

from __future__ import annotations

from core.constants import DEFAULT_SNAPSHOT_CACHE_TTL_SECONDS, LEGACY_SCHEMA_VERSION
from core.migration_types import Migration
from migration.registry import MigrationRegistry
from migration.steps import add_field_step, remove_field_step, set_field_step

_AUTHOR = "scene-snapshot"


def legacy_to_v1_0_0() -> Migration:
    """Upgrade legacy 0.9.0 snapshots to the 1.0.0 layout."""
    return Migration(
        from_version=LEGACY_SCHEMA_VERSION,
        to_version="1.0.0",
        steps=(
            set_field_step("schema.version", "1.0.0", "Update schema version to 1.0.0"),
            add_field_step("integrity.hash", "", "Add integrity hash field"),
            add_field_step(
                "cache",
                {"ttl": DEFAULT_SNAPSHOT_CACHE_TTL_SECONDS, "immutable": True},
                "Add cache configuration",
            ),
        ),
        rollback_steps=(
            set_field_step("schema.version", LEGACY_SCHEMA_VERSION, "Revert schema version to 0.9.0"),
            remove_field_step("integrity.hash", "Remove integrity hash field"),
            remove_field_step("cache", "Remove cache configuration"),
        ),
        metadata={
            "description": "Migration from legacy 0.9.0 format to 1.0.0",
            "breaking": False,
            "author": _AUTHOR,
        },
    )


def v1_0_0_to_v1_1_0() -> Migration:
    """Add tenant awareness and context support to scene data."""
    return Migration(
        from_version="1.0.0",
        to_version="1.1.0",
        steps=(
            set_field_step("schema.version", "1.1.0", "Update schema version to 1.1.0"),
            add_field_step(
                "scene.tenant_id",
                None,
                "Add tenant awareness to scene data",
                create_parents=False,
            ),
            add_field_step(
                "scene.contexts",
                [],
                "Add context support to scene data",
                create_parents=False,
            ),
        ),
        rollback_steps=(
            set_field_step("schema.version", "1.0.0", "Revert schema version to 1.0.0"),
            remove_field_step("scene.tenant_id", "Remove tenant_id from scene data"),
            remove_field_step("scene.contexts", "Remove contexts from scene data"),
        ),
        metadata={
            "description": "Add multi-tenant and context support",
            "breaking": False,
            "author": _AUTHOR,
        },
    )


def builtin_migrations() -> tuple[Migration, ...]:
    """Return built-in migrations in registration order."""
    return (legacy_to_v1_0_0(), v1_0_0_to_v1_1_0())


def build_default_registry() -> MigrationRegistry:
    """Build a registry populated with the built-in migrations."""
    registry = MigrationRegistry()
    for migration in builtin_migrations():
        registry.register(migration)
    return registry
