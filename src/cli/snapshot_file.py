"""Snapshot file loading for CLI workflows.

The hydration core performs no I/O; this module is the only place that
reads snapshot payloads from disk. JSON and YAML files are supported.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import cast

import yaml

from core.constants import SNAPSHOT_JSON_EXTENSIONS, SNAPSHOT_YAML_EXTENSIONS
from core.errors import SnapshotFileError


def load_snapshot_file(snapshot_path: str) -> object:
    """Load a snapshot payload from a JSON or YAML file.

    Args:
        snapshot_path: File path to the snapshot export.

    Returns:
        Parsed payload, not yet validated.

    Raises:
        SnapshotFileError: If the file is missing, unreadable, or invalid.
    """
    snapshot_file = Path(snapshot_path).expanduser().resolve()
    if not snapshot_file.exists():
        raise SnapshotFileError(
            f"Snapshot file does not exist at {snapshot_file}. Provide a valid file path."
        )
    suffix = snapshot_file.suffix.lower()
    supported_suffixes = SNAPSHOT_JSON_EXTENSIONS + SNAPSHOT_YAML_EXTENSIONS
    if suffix not in supported_suffixes:
        raise SnapshotFileError(
            f"Unsupported snapshot file extension '{suffix}'. "
            f"Use one of: {', '.join(supported_suffixes)}."
        )
    try:
        raw_text = snapshot_file.read_text(encoding="utf-8")
    except OSError as error:
        raise SnapshotFileError(
            f"Failed to read snapshot at {snapshot_file}: {error}. Check file permissions and retry."
        ) from error
    if suffix in SNAPSHOT_JSON_EXTENSIONS:
        return _parse_json(raw_text, snapshot_file)
    return _parse_yaml(raw_text, snapshot_file)


def _parse_json(raw_text: str, snapshot_file: Path) -> object:
    try:
        return cast(object, json.loads(raw_text))
    except json.JSONDecodeError as error:
        raise SnapshotFileError(
            f"Failed to parse JSON snapshot at {snapshot_file}: {error}. Fix JSON syntax and retry."
        ) from error


def _parse_yaml(raw_text: str, snapshot_file: Path) -> object:
    try:
        payload = cast(object, yaml.safe_load(raw_text))
    except yaml.YAMLError as error:
        raise SnapshotFileError(
            f"Failed to parse YAML snapshot at {snapshot_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise SnapshotFileError(f"Snapshot at {snapshot_file} is empty. Define 'schema' and 'scene'.")
    return payload
