"""Scene snapshot CLI entry points.
This module exposes hydrate and migration commands for snapshot files.
It maps argparse commands onto hydrator and registry calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from cli.hydrate_command import add_hydrate_command, run_hydrate_command
from cli.migrate_command import (
    add_migration_commands,
    run_migrate_command,
    run_migrations_command,
    run_path_command,
)
from core.config import SnapshotConfig
from core.errors import SnapshotConfigError
from hydration.service import SnapshotHydrator
from migration.builtin import build_default_registry


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="scene-snapshot",
        description="Scene snapshot migration and hydration CLI",
    )
    parser.add_argument(
        "--target-version",
        help="Override SCENE_SNAPSHOT_TARGET_VERSION for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_hydrate_command(subparsers)
    add_migration_commands(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the scene snapshot CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.target_version)
    except SnapshotConfigError as error:
        print(f"config_error={error}")
        return 2
    hydrator = SnapshotHydrator(build_default_registry(), config.target_version)
    options = config.to_options()
    if args.command == "hydrate":
        return run_hydrate_command(hydrator, options, args)
    if args.command == "migrate":
        return run_migrate_command(hydrator, options, args)
    if args.command == "migrations":
        return run_migrations_command(hydrator, args)
    if args.command == "path":
        return run_path_command(hydrator, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(target_version: str | None) -> SnapshotConfig:
    """Build config with optional target-version override.

    Args:
        target_version: Optional override version.

    Returns:
        Validated configuration.
    """
    config = SnapshotConfig.from_env()
    if target_version:
        config = replace(config, target_version=target_version.strip())
    return config
