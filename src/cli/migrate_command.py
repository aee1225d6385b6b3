"""Migration command wiring for the scene snapshot CLI."""

from __future__ import annotations

import argparse
import json
from typing import Any

from core.errors import InputShapeError, SnapshotFileError
from core.types import SnapshotHydrationOptions
from cli.snapshot_file import load_snapshot_file
from hydration.raw_snapshot import parse_snapshot_envelope
from hydration.service import SnapshotHydrator
from migration.executor import MigrationExecutor
from migration.steps import describe_step


def add_migration_commands(subparsers: Any) -> None:
    """Register migrate, migrations, and path subcommands."""
    migrate_parser = subparsers.add_parser(
        "migrate",
        help="Migrate a snapshot file and print the migrated payload",
    )
    migrate_parser.add_argument("snapshot", help="Snapshot file path (.json, .yaml, .yml)")
    migrate_parser.add_argument(
        "--to",
        dest="to_version",
        help="Target schema version (defaults to the hydration target)",
    )
    migrate_parser.add_argument(
        "--from",
        dest="from_version",
        help="Source schema version (defaults to the declared schema.version)",
    )
    migrations_parser = subparsers.add_parser(
        "migrations",
        help="List registered migrations",
    )
    migrations_parser.add_argument(
        "--steps",
        action="store_true",
        help="Include step descriptions",
    )
    path_parser = subparsers.add_parser(
        "path",
        help="Show the migration route between two versions",
    )
    path_parser.add_argument("from_version", help="Source schema version")
    path_parser.add_argument("to_version", help="Target schema version")


def run_migrate_command(
    hydrator: SnapshotHydrator,
    options: SnapshotHydrationOptions,
    args: argparse.Namespace,
) -> int:
    """Migrate one snapshot file and print the payload as JSON."""
    try:
        payload = load_snapshot_file(args.snapshot)
    except SnapshotFileError as error:
        print(f"snapshot_error={error}")
        return 1
    try:
        from_version = args.from_version or _declared_version(payload)
    except InputShapeError as error:
        print(f"migration_error={error}")
        return 1
    if from_version is None:
        print("migration_error=Snapshot declares no schema.version; pass --from.")
        return 1
    to_version = args.to_version or hydrator.target_version
    executor = MigrationExecutor(hydrator.registry)
    result = executor.migrate_snapshot(payload, from_version, to_version, options)
    if not result.success:
        for error in result.errors:
            print(f"migration_error={error}")
        return 1
    print(json.dumps(result.data, indent=2, sort_keys=True, default=str))
    return 0


def run_migrations_command(hydrator: SnapshotHydrator, args: argparse.Namespace) -> int:
    """Print registered migrations in registration order."""
    for migration in hydrator.registry.migrations():
        description = migration.metadata.get("description", "")
        print(f"{migration.key}\t{len(migration.steps)}\t{description}")
        if args.steps:
            for step in migration.steps:
                row = describe_step(step)
                print(f"  - [{row['kind']}] {row['description']}")
    return 0


def run_path_command(hydrator: SnapshotHydrator, args: argparse.Namespace) -> int:
    """Print the migration route between two versions."""
    if args.from_version == args.to_version:
        print("path=identity")
        return 0
    path = hydrator.registry.find_path(args.from_version, args.to_version)
    if not path:
        print(f"path_error=No migration path found from {args.from_version} to {args.to_version}")
        return 1
    print("path=" + ",".join(migration.key for migration in path))
    return 0


def _declared_version(payload: object) -> str | None:
    return parse_snapshot_envelope(payload).declared_version
