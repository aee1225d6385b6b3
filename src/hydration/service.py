"""Top-level snapshot hydration entry point.

This module checks the payload shape, migrates older snapshots to the
target schema, runs progressive hydration, and converts every failure
into a failed ``HydrationResult``. Nothing raises past this boundary.
"""

from __future__ import annotations

import copy
import time

from core.constants import DEFAULT_TARGET_SCHEMA_VERSION, LEGACY_SCHEMA_VERSION
from core.errors import InputShapeError, SnapshotError
from core.logging_config import get_logger
from core.types import HydrationResult, SnapshotHydrationOptions
from hydration.pipeline import hydrate_progressively
from hydration.raw_snapshot import SnapshotEnvelope, parse_snapshot_envelope
from hydration.result_builder import build_failed_result, build_hydration_result
from migration.executor import MigrationExecutor
from migration.registry import MigrationRegistry

_LOGGER = get_logger(__name__)


class SnapshotHydrator:
    """Hydrate snapshot payloads against one target schema version.

    The hydrator keeps no per-call state; one instance may serve many
    independent calls. The injected registry must not be modified while
    a call is running.
    """

    def __init__(
        self,
        registry: MigrationRegistry,
        target_version: str = DEFAULT_TARGET_SCHEMA_VERSION,
    ) -> None:
        """Create a hydrator.

        Args:
            registry: Migration registry owned by the host application.
            target_version: Schema version hydrated entities conform to.
        """
        self._registry = registry
        self._executor = MigrationExecutor(registry)
        self._target_version = target_version

    @property
    def target_version(self) -> str:
        """Schema version snapshots are migrated to before hydration."""
        return self._target_version

    @property
    def registry(self) -> MigrationRegistry:
        return self._registry

    def with_target_version(self, target_version: str) -> "SnapshotHydrator":
        """Return a hydrator sharing this registry with another target."""
        return SnapshotHydrator(self._registry, target_version)

    def hydrate_snapshot(
        self,
        payload: object,
        options: SnapshotHydrationOptions | None = None,
    ) -> HydrationResult:
        """Rebuild scene entities from a snapshot payload.

        Args:
            payload: Untyped snapshot payload; never mutated.
            options: Hydration options, defaults when omitted.

        Returns:
            Hydration result. Failures are reported through ``success``
            and ``errors`` rather than raised.
        """
        opts = options or SnapshotHydrationOptions()
        started_at = time.perf_counter()
        warnings: list[str] = []
        try:
            snapshot = copy.deepcopy(payload)
            envelope = parse_snapshot_envelope(snapshot)
            source_version = self._resolve_source_version(envelope, opts, warnings)
            migration = None
            if source_version != self._target_version:
                migration = self._executor.migrate_snapshot(
                    snapshot, source_version, self._target_version, opts
                )
                if not migration.success or migration.data is None:
                    message = f"Migration failed: {', '.join(migration.errors)}"
                    return self._failed(
                        message,
                        warnings,
                        started_at,
                        {
                            "source_version": source_version,
                            "migration_error": migration.metadata.get("error_type"),
                        },
                        load_time=migration.total_time,
                    )
                envelope = parse_snapshot_envelope(migration.data)
            outcome = hydrate_progressively(envelope, opts)
        except SnapshotError as error:
            return self._failed(str(error), warnings, started_at, {"error_type": type(error).__name__})
        except Exception as error:
            return self._failed(
                f"Unexpected hydration failure: {error}",
                warnings,
                started_at,
                {"error_type": type(error).__name__},
            )
        result = build_hydration_result(
            outcome,
            target_version=self._target_version,
            source_version=source_version,
            migration=migration,
            leading_warnings=tuple(warnings),
            started_at=started_at,
        )
        _log_hydration(result)
        return result

    def _resolve_source_version(
        self,
        envelope: SnapshotEnvelope,
        options: SnapshotHydrationOptions,
        warnings: list[str],
    ) -> str:
        if envelope.declared_version is not None:
            return envelope.declared_version
        if not options.fallback:
            raise InputShapeError(
                "Snapshot does not declare 'schema.version'. "
                "Add a schema version or enable the fallback option."
            )
        warnings.append(
            f"Snapshot declares no schema version; assuming legacy {LEGACY_SCHEMA_VERSION}."
        )
        return LEGACY_SCHEMA_VERSION

    def _failed(
        self,
        message: str,
        warnings: list[str],
        started_at: float,
        metadata: dict[str, object],
        load_time: float = 0.0,
    ) -> HydrationResult:
        result = build_failed_result(
            message,
            self._target_version,
            tuple(warnings),
            started_at,
            metadata,
            load_time=load_time,
        )
        _LOGGER.error(
            "snapshot_hydration_failed",
            target_version=self._target_version,
            error=message,
            total_time_ms=round(result.performance.total_time, 3),
        )
        return result


def _log_hydration(result: HydrationResult) -> None:
    if not result.success:
        _LOGGER.error(
            "snapshot_hydration_failed",
            target_version=result.metadata.get("version"),
            failed_stage=result.metadata.get("failed_stage"),
            error=result.metadata.get("error"),
            node_count=len(result.nodes),
            edge_count=len(result.edges),
        )
        return
    _LOGGER.info(
        "snapshot_hydrated",
        target_version=result.metadata.get("version"),
        source_version=result.metadata.get("source_version"),
        migrated=result.metadata.get("migrated"),
        node_count=len(result.nodes),
        edge_count=len(result.edges),
        context_count=len(result.contexts),
        skipped_count=len(result.errors),
        total_time_ms=round(result.performance.total_time, 3),
    )
