"""Hydration result assembly.

This module folds migration and pipeline outcomes into one immutable
``HydrationResult``, splitting timings into load, parse, and validation
buckets and sampling resident process memory with psutil.
"""

from __future__ import annotations

import time

import psutil

from core.constants import PROGRESSIVE_STAGES
from core.types import HydrationPerformance, HydrationResult, MigrationResult
from hydration.pipeline import PipelineOutcome

_PARSE_STAGES = ("scene", "nodes", "edges", "contexts")


def build_hydration_result(
    outcome: PipelineOutcome,
    target_version: str,
    source_version: str,
    migration: MigrationResult | None,
    leading_warnings: tuple[str, ...],
    started_at: float,
) -> HydrationResult:
    """Assemble the result of a call that reached the hydration pipeline.

    Args:
        outcome: Pipeline stage outcome.
        target_version: Schema version the hydrator targets.
        source_version: Version the snapshot declared or was assumed to have.
        migration: Migration outcome, or None when no migration ran.
        leading_warnings: Warnings raised before the pipeline started.
        started_at: ``time.perf_counter()`` value at call start.

    Returns:
        Immutable hydration result.
    """
    migration_warnings = migration.warnings if migration is not None else ()
    migration_errors = migration.errors if migration is not None else ()
    parse_time = sum(outcome.stage_times.get(stage, 0.0) for stage in _PARSE_STAGES)
    performance = HydrationPerformance(
        load_time=migration.total_time if migration is not None else 0.0,
        parse_time=parse_time,
        validation_time=outcome.stage_times.get("validation", 0.0),
        total_time=elapsed_ms(started_at),
        memory_usage=sample_memory_usage(),
    )
    metadata: dict[str, object] = {
        "version": target_version,
        "source_version": source_version,
        "migrated": migration is not None and bool(migration.metadata.get("migrated")),
        "migration_path": list(_migration_path(migration)),
        "hydrated": outcome.success,
        "progressive": True,
        "progressive_steps": list(PROGRESSIVE_STAGES),
        "completed_stages": list(outcome.completed_stages),
        "failed_stage": outcome.failed_stage,
        "stage_times": dict(outcome.stage_times),
    }
    if not outcome.success and outcome.errors:
        metadata["error"] = outcome.errors[-1]
    return HydrationResult(
        success=outcome.success,
        scene=outcome.scene,
        nodes=outcome.nodes,
        edges=outcome.edges,
        contexts=outcome.contexts,
        warnings=leading_warnings + tuple(migration_warnings) + outcome.warnings,
        errors=tuple(migration_errors) + outcome.errors,
        performance=performance,
        metadata=metadata,
    )


def build_failed_result(
    error_message: str,
    target_version: str,
    warnings: tuple[str, ...],
    started_at: float,
    metadata: dict[str, object] | None = None,
    load_time: float = 0.0,
) -> HydrationResult:
    """Assemble an empty failed result for errors raised before hydration."""
    failure_metadata: dict[str, object] = {
        "version": target_version,
        "migrated": False,
        "hydrated": False,
    }
    failure_metadata.update(metadata or {})
    failure_metadata["error"] = error_message
    return HydrationResult(
        success=False,
        scene=None,
        nodes=(),
        edges=(),
        contexts=(),
        warnings=warnings,
        errors=(error_message,),
        performance=HydrationPerformance(
            load_time=load_time,
            total_time=elapsed_ms(started_at),
            memory_usage=sample_memory_usage(),
        ),
        metadata=failure_metadata,
    )


def sample_memory_usage() -> int:
    """Return the current resident set size of this process in bytes."""
    return int(psutil.Process().memory_info().rss)


def elapsed_ms(started_at: float) -> float:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return (time.perf_counter() - started_at) * 1000.0


def _migration_path(migration: MigrationResult | None) -> tuple[str, ...]:
    if migration is None:
        return ()
    path = migration.metadata.get("migration_path")
    return tuple(path) if isinstance(path, list) else ()
