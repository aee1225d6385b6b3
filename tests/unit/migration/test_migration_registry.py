"""Unit tests for migration registry and path resolution."""

from __future__ import annotations

import pytest

from core.errors import MigrationDefinitionError
from core.migration_types import Migration, MigrationStep
from migration.registry import MigrationRegistry


def _noop_migration(from_version: str, to_version: str, label: str = "") -> Migration:
    step = MigrationStep(kind="transform", description=f"noop {label}", forward=lambda data: data)
    return Migration(
        from_version=from_version,
        to_version=to_version,
        steps=(step,),
        metadata={"label": label},
    )


def _keys(path: tuple[Migration, ...]) -> list[str]:
    return [migration.key for migration in path]


def test_find_path_chains_adjacent_migrations() -> None:
    """Resolver should chain A->B and B->C in order."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("B", "C"))
    registry.register(_noop_migration("A", "B"))

    path = registry.find_path("A", "C")

    assert _keys(path) == ["A->B", "B->C"]


def test_find_path_prefers_fewest_hops() -> None:
    """A direct migration should beat a longer chain."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "B"))
    registry.register(_noop_migration("B", "C"))
    registry.register(_noop_migration("A", "C"))

    path = registry.find_path("A", "C")

    assert _keys(path) == ["A->C"]


def test_find_path_breaks_ties_by_registration_order() -> None:
    """Equal-length routes should resolve to the first registered branch."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "X"))
    registry.register(_noop_migration("A", "Y"))
    registry.register(_noop_migration("Y", "Z"))
    registry.register(_noop_migration("X", "Z"))

    path = registry.find_path("A", "Z")

    assert _keys(path) == ["A->X", "X->Z"]


def test_find_path_returns_empty_for_unreachable_version() -> None:
    """Unreachable targets should produce an empty path."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "B"))
    registry.register(_noop_migration("B", "A"))

    assert registry.find_path("A", "Z") == ()
    assert registry.has_migration("A", "Z") is False


def test_find_path_identity_is_empty() -> None:
    """Equal versions need no migrations."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "B"))

    assert registry.find_path("A", "A") == ()


def test_register_overwrites_same_pair() -> None:
    """Last registration for a version pair should win."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "B", label="first"))
    registry.register(_noop_migration("A", "B", label="second"))

    migration = registry.get("A", "B")

    assert migration is not None and migration.metadata["label"] == "second"
    assert len(registry.migrations()) == 1


def test_register_clears_cached_paths() -> None:
    """A new registration should invalidate memoised routes."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "B"))
    registry.register(_noop_migration("B", "C"))
    assert _keys(registry.find_path("A", "C", use_cache=True)) == ["A->B", "B->C"]

    registry.register(_noop_migration("A", "C"))

    assert _keys(registry.find_path("A", "C", use_cache=True)) == ["A->C"]


def test_available_migrations_and_versions() -> None:
    """Registry should list outgoing edges and every known version."""
    registry = MigrationRegistry()
    registry.register(_noop_migration("A", "B"))
    registry.register(_noop_migration("A", "C"))
    registry.register(_noop_migration("B", "C"))

    outgoing = registry.available_migrations("A")

    assert [migration.to_version for migration in outgoing] == ["B", "C"]
    assert registry.versions() == ["A", "B", "C"]


def test_register_rejects_unknown_step_kind() -> None:
    """Step kinds form a closed set."""
    step = MigrationStep(kind="explode", description="bad", forward=lambda data: data)  # type: ignore[arg-type]
    registry = MigrationRegistry()

    with pytest.raises(MigrationDefinitionError):
        registry.register(Migration(from_version="A", to_version="B", steps=(step,)))


def test_register_rejects_self_loop() -> None:
    """A migration must change the version."""
    registry = MigrationRegistry()

    with pytest.raises(MigrationDefinitionError):
        registry.register(_noop_migration("A", "A"))
