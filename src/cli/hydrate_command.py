"""Hydrate command wiring for the scene snapshot CLI."""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from typing import Any

from core.errors import SnapshotFileError
from core.types import HydrationResult, SnapshotHydrationOptions
from cli.snapshot_file import load_snapshot_file
from hydration.service import SnapshotHydrator


def add_hydrate_command(subparsers: Any) -> None:
    """Register hydrate subcommand."""
    parser = subparsers.add_parser(
        "hydrate",
        help="Migrate and hydrate a snapshot file",
    )
    parser.add_argument("snapshot", help="Snapshot file path (.json, .yaml, .yml)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first malformed node, edge, or context",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip final required-field validation",
    )
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Reject snapshots that declare no schema version",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full hydration result as JSON",
    )


def run_hydrate_command(
    hydrator: SnapshotHydrator,
    base_options: SnapshotHydrationOptions,
    args: argparse.Namespace,
) -> int:
    """Hydrate one snapshot file and print the outcome."""
    try:
        payload = load_snapshot_file(args.snapshot)
    except SnapshotFileError as error:
        print(f"snapshot_error={error}")
        return 1
    options = _apply_flags(base_options, args)
    result = hydrator.hydrate_snapshot(payload, options)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, sort_keys=True, default=str))
    else:
        print(render_hydration_summary(result))
    return 0 if result.success else 1


def render_hydration_summary(result: HydrationResult) -> str:
    """Render a result into stable multi-line text for CLI output."""
    lines = [
        f"success={str(result.success).lower()}",
        f"version={result.metadata.get('version')}",
        f"source_version={result.metadata.get('source_version', '-')}",
        f"migrated={str(bool(result.metadata.get('migrated'))).lower()}",
        f"scene={result.scene.name if result.scene is not None else '-'}",
        f"nodes={len(result.nodes)}",
        f"edges={len(result.edges)}",
        f"contexts={len(result.contexts)}",
        f"total_time_ms={result.performance.total_time:.3f}",
    ]
    lines.extend(f"[WARNING] {warning}" for warning in result.warnings)
    lines.extend(f"[ERROR] {error}" for error in result.errors)
    return "\n".join(lines)


def _apply_flags(
    base_options: SnapshotHydrationOptions,
    args: argparse.Namespace,
) -> SnapshotHydrationOptions:
    options = base_options
    if args.strict:
        options = replace(options, strict=True)
    if args.no_validate:
        options = replace(options, validate=False)
    if args.no_fallback:
        options = replace(options, fallback=False)
    return options
