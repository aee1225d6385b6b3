"""Migration execution with all-or-nothing commit semantics.

This module applies resolved migration paths step by step, guarding
each step with its pre/post checks. Work happens on a private deep
copy, so a failed call never exposes partially migrated data.
"""

from __future__ import annotations

import copy
import time
from typing import Any, Mapping

from core.errors import InputShapeError, MigrationPathError, MigrationStepError, SnapshotError
from core.logging_config import get_logger
from core.migration_types import Migration, MigrationStep, SnapshotData
from core.types import MigrationResult, SnapshotHydrationOptions
from migration.registry import MigrationRegistry

_LOGGER = get_logger(__name__)

IDENTITY_WARNING = "No migration needed - versions are the same"


class MigrationExecutor:
    """Apply registered migrations to snapshot payloads."""

    def __init__(self, registry: MigrationRegistry) -> None:
        self._registry = registry

    def apply_migration(self, data: Mapping[str, Any], migration: Migration) -> SnapshotData:
        """Apply every step of one migration in declared order.

        Args:
            data: Snapshot payload, left untouched.
            migration: Migration to apply.

        Returns:
            New payload produced by the last step.

        Raises:
            MigrationStepError: If a step check fails or a step raises.
        """
        current = copy.deepcopy(dict(data))
        for index, step in enumerate(migration.steps):
            current = _run_step(current, migration, index, step)
        return current

    def migrate_snapshot(
        self,
        data: object,
        from_version: str,
        to_version: str,
        options: SnapshotHydrationOptions | None = None,
    ) -> MigrationResult:
        """Migrate a payload across the shortest registered route.

        Args:
            data: Snapshot payload, never mutated.
            from_version: Version the payload declares.
            to_version: Version the caller needs.
            options: Hydration options; only ``cache`` affects migration.

        Returns:
            Successful result with the migrated payload, or a failed
            result carrying the error and no data.
        """
        opts = options or SnapshotHydrationOptions()
        started_at = time.perf_counter()
        warnings: list[str] = []
        try:
            if not isinstance(data, Mapping):
                raise InputShapeError(
                    f"Invalid snapshot data: expected an object, got {type(data).__name__}."
                )
            if from_version == to_version:
                return MigrationResult(
                    success=True,
                    data=copy.deepcopy(dict(data)),
                    warnings=(IDENTITY_WARNING,),
                    errors=(),
                    total_time=_elapsed_ms(started_at),
                    metadata={
                        "from_version": from_version,
                        "to_version": to_version,
                        "migrated": False,
                    },
                )
            path = self._registry.find_path(from_version, to_version, use_cache=opts.cache)
            if not path:
                raise MigrationPathError(
                    f"No migration path found from {from_version} to {to_version}. "
                    "Register a migration chain connecting these versions."
                )
            current: SnapshotData = dict(data)
            for migration in path:
                current = self.apply_migration(current, migration)
                warnings.append(f"Applied migration {migration.key}")
                _LOGGER.info("migration_applied", migration=migration.key)
        except SnapshotError as error:
            return _failed_result(error, from_version, to_version, started_at)
        except Exception as error:
            wrapped = MigrationStepError(f"Unexpected migration failure: {error}")
            return _failed_result(wrapped, from_version, to_version, started_at)
        total_time = _elapsed_ms(started_at)
        migration_path = [migration.key for migration in path]
        _LOGGER.info(
            "snapshot_migrated",
            from_version=from_version,
            to_version=to_version,
            migration_path=migration_path,
            total_time_ms=round(total_time, 3),
        )
        return MigrationResult(
            success=True,
            data=current,
            warnings=tuple(warnings),
            errors=(),
            total_time=total_time,
            metadata={
                "from_version": from_version,
                "to_version": to_version,
                "migrated": True,
                "migration_path": migration_path,
            },
        )

    def revert_migration(self, data: Mapping[str, Any], migration: Migration) -> SnapshotData:
        """Manually reverse one migration.

        Never invoked automatically. Uses ``rollback_steps`` when the
        migration defines them, otherwise each step's own rollback in
        reverse order.

        Raises:
            MigrationStepError: If the migration is not reversible or a
                rollback step fails.
        """
        rollback_steps = migration.rollback_steps or _inverse_steps(migration)
        current = copy.deepcopy(dict(data))
        for index, step in enumerate(rollback_steps):
            current = _run_step(current, migration, index, step)
        _LOGGER.info("migration_reverted", migration=migration.key)
        return current


def _inverse_steps(migration: Migration) -> tuple[MigrationStep, ...]:
    inverse: list[MigrationStep] = []
    for step in reversed(migration.steps):
        if step.rollback is None:
            raise MigrationStepError(
                f"Migration {migration.key} cannot be reverted: step '{step.description}' "
                "has no rollback and the migration defines no rollback steps."
            )
        inverse.append(
            MigrationStep(
                kind=step.kind,
                description=f"Revert: {step.description}",
                forward=step.rollback,
            )
        )
    return tuple(inverse)


def _run_step(
    data: SnapshotData,
    migration: Migration,
    index: int,
    step: MigrationStep,
) -> SnapshotData:
    context = f"Migration {migration.key} step #{index + 1} '{step.description}'"
    try:
        if step.precondition is not None and not step.precondition(data):
            raise MigrationStepError(f"{context} failed precondition check.")
        result = step.forward(data)
        if not isinstance(result, dict):
            raise MigrationStepError(
                f"{context} returned {type(result).__name__}; forward actions must return the data object."
            )
        if step.postcondition is not None and not step.postcondition(result):
            raise MigrationStepError(f"{context} failed postcondition check.")
    except MigrationStepError:
        raise
    except Exception as error:
        raise MigrationStepError(f"{context} raised: {error}") from error
    return result


def _failed_result(
    error: Exception,
    from_version: str,
    to_version: str,
    started_at: float,
) -> MigrationResult:
    message = str(error)
    _LOGGER.error(
        "snapshot_migration_failed",
        from_version=from_version,
        to_version=to_version,
        error_type=type(error).__name__,
        error=message,
    )
    return MigrationResult(
        success=False,
        data=None,
        warnings=(),
        errors=(message,),
        total_time=_elapsed_ms(started_at),
        metadata={
            "from_version": from_version,
            "to_version": to_version,
            "migrated": False,
            "error": message,
            "error_type": type(error).__name__,
        },
    )


def _elapsed_ms(started_at: float) -> float:
    return (time.perf_counter() - started_at) * 1000.0
