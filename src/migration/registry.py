"""Migration registry and path resolution.

The registry is an explicit instance owned by the host application.
It is read-mostly after startup and is not locked: callers must not
register migrations while a migration or hydration call is in flight.
"""

from __future__ import annotations

from collections import deque

from core.constants import SUPPORTED_STEP_KINDS
from core.errors import MigrationDefinitionError
from core.logging_config import get_logger
from core.migration_types import Migration, MigrationStep, migration_key

_LOGGER = get_logger(__name__)

MigrationPath = tuple[Migration, ...]


class MigrationRegistry:
    """Store of migrations keyed by ``"{from}->{to}"``.

    Each migration is a directed edge in the version graph. Path
    resolution is a breadth-first search with one hop per migration,
    exploring outgoing edges in registration order.
    """

    def __init__(self) -> None:
        self._migrations: dict[str, Migration] = {}
        self._path_cache: dict[tuple[str, str], MigrationPath] = {}

    def register(self, migration: Migration) -> None:
        """Insert or overwrite the migration for its version pair.

        Args:
            migration: Migration definition to store.

        Raises:
            MigrationDefinitionError: If the definition is malformed.
        """
        _validate_migration(migration)
        replaced = migration.key in self._migrations
        self._migrations[migration.key] = migration
        self._path_cache.clear()
        _LOGGER.info(
            "migration_registered",
            migration=migration.key,
            step_count=len(migration.steps),
            replaced=replaced,
        )

    def get(self, from_version: str, to_version: str) -> Migration | None:
        """Return the direct migration for a version pair, if any."""
        return self._migrations.get(migration_key(from_version, to_version))

    def migrations(self) -> list[Migration]:
        """Return all migrations in registration order."""
        return list(self._migrations.values())

    def available_migrations(self, from_version: str) -> list[Migration]:
        """Return migrations leaving one version, in registration order."""
        return [
            migration
            for migration in self._migrations.values()
            if migration.from_version == from_version
        ]

    def versions(self) -> list[str]:
        """Return every version named by a registered migration."""
        seen: dict[str, None] = {}
        for migration in self._migrations.values():
            seen.setdefault(migration.from_version, None)
            seen.setdefault(migration.to_version, None)
        return list(seen)

    def find_path(
        self,
        from_version: str,
        to_version: str,
        use_cache: bool = False,
    ) -> MigrationPath:
        """Resolve the shortest hop-count route between two versions.

        Args:
            from_version: Declared source version.
            to_version: Desired target version.
            use_cache: Reuse a previously resolved path for this pair.

        Returns:
            Ordered migrations, or an empty tuple when the versions are
            equal or the target is unreachable.
        """
        pair = (from_version, to_version)
        if use_cache and pair in self._path_cache:
            return self._path_cache[pair]
        path = self._search(from_version, to_version)
        if use_cache:
            self._path_cache[pair] = path
        return path

    def has_migration(self, from_version: str, to_version: str) -> bool:
        """Return whether any route leads from one version to another."""
        return len(self.find_path(from_version, to_version)) > 0

    def _search(self, from_version: str, to_version: str) -> MigrationPath:
        visited: set[str] = set()
        queue: deque[tuple[str, MigrationPath]] = deque([(from_version, ())])
        while queue:
            version, path = queue.popleft()
            if version == to_version:
                return path
            if version in visited:
                continue
            visited.add(version)
            for migration in self.available_migrations(version):
                queue.append((migration.to_version, path + (migration,)))
        return ()


def _validate_migration(migration: Migration) -> None:
    if not migration.from_version or not migration.to_version:
        raise MigrationDefinitionError(
            "Migration must declare non-empty from_version and to_version."
        )
    if migration.from_version == migration.to_version:
        raise MigrationDefinitionError(
            f"Migration {migration.key} maps a version onto itself. Register a real version change."
        )
    for index, step in enumerate(migration.steps + migration.rollback_steps):
        _validate_step(migration.key, index, step)


def _validate_step(key: str, index: int, step: MigrationStep) -> None:
    if step.kind not in SUPPORTED_STEP_KINDS:
        supported_rows = ", ".join(SUPPORTED_STEP_KINDS)
        raise MigrationDefinitionError(
            f"Migration {key} step #{index + 1} has unsupported kind '{step.kind}'. "
            f"Use one of: {supported_rows}."
        )
    if not callable(step.forward):
        raise MigrationDefinitionError(
            f"Migration {key} step #{index + 1} ('{step.description}') has no callable forward action."
        )
