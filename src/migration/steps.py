"""Declarative migration step builders.

Each builder returns a ``MigrationStep`` that edits one dotted field path,
for example ``scene.tenant_id``. The touched paths are recorded in step
metadata so tooling can describe a migration without executing it.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from core.migration_types import MigrationStep, SnapshotData

_MISSING = object()


def get_field(data: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Read a dotted field path, returning ``default`` when absent."""
    value = _lookup(data, path)
    return default if value is _MISSING else value


def has_field(data: Mapping[str, Any], path: str) -> bool:
    """Return whether a dotted field path is present."""
    return _lookup(data, path) is not _MISSING


def add_field_step(
    path: str,
    default: Any,
    description: str | None = None,
    create_parents: bool = True,
) -> MigrationStep:
    """Build a step that fills a field when it is absent.

    Args:
        path: Dotted field path.
        default: Value written when the field is missing.
        description: Optional summary, derived from the path when omitted.
        create_parents: Create missing parent objects; when False the step
            leaves data without the parent untouched.

    Returns:
        Step of kind ``add`` whose rollback removes the field.
    """

    def forward(data: SnapshotData) -> SnapshotData:
        parent = _parent(data, path, create_parents)
        if parent is not None and _leaf(path) not in parent:
            parent[_leaf(path)] = copy.deepcopy(default)
        return data

    def postcondition(data: SnapshotData) -> bool:
        if not create_parents and _parent(data, path, False) is None:
            return True
        return has_field(data, path)

    remove_step = remove_field_step(path)
    return MigrationStep(
        kind="add",
        description=description or f"Add field '{path}'",
        forward=forward,
        rollback=remove_step.forward,
        postcondition=postcondition,
        metadata={"path": path, "default": default},
    )


def set_field_step(path: str, value: Any, description: str | None = None) -> MigrationStep:
    """Build a step that overwrites a field, creating parents as needed."""

    def forward(data: SnapshotData) -> SnapshotData:
        parent = _parent(data, path, True)
        if parent is not None:
            parent[_leaf(path)] = copy.deepcopy(value)
        return data

    return MigrationStep(
        kind="transform",
        description=description or f"Set field '{path}'",
        forward=forward,
        postcondition=lambda data: get_field(data, path, _MISSING) == value,
        metadata={"path": path, "value": value},
    )


def remove_field_step(path: str, description: str | None = None) -> MigrationStep:
    """Build a step that deletes a field when present."""

    def forward(data: SnapshotData) -> SnapshotData:
        parent = _parent(data, path, False)
        if parent is not None:
            parent.pop(_leaf(path), None)
        return data

    return MigrationStep(
        kind="remove",
        description=description or f"Remove field '{path}'",
        forward=forward,
        postcondition=lambda data: not has_field(data, path),
        metadata={"path": path},
    )


def rename_field_step(
    old_path: str,
    new_path: str,
    description: str | None = None,
) -> MigrationStep:
    """Build a step that moves a field to a new dotted path.

    Data without the old field is left unchanged. The rollback moves the
    field back.
    """

    def move(source_path: str, target_path: str, data: SnapshotData) -> SnapshotData:
        source_parent = _parent(data, source_path, False)
        if source_parent is None or _leaf(source_path) not in source_parent:
            return data
        value = source_parent.pop(_leaf(source_path))
        target_parent = _parent(data, target_path, True)
        if target_parent is not None:
            target_parent[_leaf(target_path)] = value
        return data

    return MigrationStep(
        kind="rename",
        description=description or f"Rename field '{old_path}' to '{new_path}'",
        forward=lambda data: move(old_path, new_path, data),
        rollback=lambda data: move(new_path, old_path, data),
        postcondition=lambda data: not has_field(data, old_path),
        metadata={"path": old_path, "new_path": new_path},
    )


def describe_step(step: MigrationStep) -> dict[str, object]:
    """Render a step as a JSON-friendly description."""
    return {
        "kind": step.kind,
        "description": step.description,
        "reversible": step.rollback is not None,
        "has_precondition": step.precondition is not None,
        "has_postcondition": step.postcondition is not None,
        "metadata": dict(step.metadata),
    }


def _lookup(data: Mapping[str, Any], path: str) -> Any:
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _parent(data: SnapshotData, path: str, create: bool) -> dict[str, Any] | None:
    current: Any = data
    for part in path.split(".")[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            if not create or child is not None:
                return None
            child = {}
            current[part] = child
        current = child
    return current


def _leaf(path: str) -> str:
    return path.split(".")[-1]
