"""Typed models for schema migrations.

Steps are a closed tagged variant: the ``kind`` names the operation and
the callables are explicit fields, so tooling can list and describe a
migration without running it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping

from core.constants import MIGRATION_KEY_SEPARATOR

StepKind = Literal["transform", "add", "remove", "rename", "custom"]
SnapshotData = dict[str, Any]
StepAction = Callable[[SnapshotData], SnapshotData]
StepPredicate = Callable[[SnapshotData], bool]


@dataclass(frozen=True)
class MigrationStep:
    """One atomic snapshot transformation.

    Attributes:
        kind: Operation category.
        description: Human-readable step summary used in errors.
        forward: Action returning the authoritative new data.
        rollback: Optional inverse action for manual reversal.
        precondition: Optional check evaluated before ``forward``.
        postcondition: Optional check evaluated after ``forward``.
        metadata: Tooling-facing details such as the touched field path.
    """

    kind: StepKind
    description: str
    forward: StepAction
    rollback: StepAction | None = None
    precondition: StepPredicate | None = None
    postcondition: StepPredicate | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Migration:
    """Directed edge between two schema versions.

    Attributes:
        from_version: Source schema version.
        to_version: Target schema version.
        steps: Ordered forward steps.
        rollback_steps: Ordered steps reversing this migration.
        metadata: Description, authorship, and breaking-change flags.
    """

    from_version: str
    to_version: str
    steps: tuple[MigrationStep, ...]
    rollback_steps: tuple[MigrationStep, ...] = ()
    metadata: Mapping[str, object] = field(default_factory=dict)

    @property
    def key(self) -> str:
        """Registry key for this migration."""
        return migration_key(self.from_version, self.to_version)


def migration_key(from_version: str, to_version: str) -> str:
    """Build the registry key for a version pair."""
    return f"{from_version}{MIGRATION_KEY_SEPARATOR}{to_version}"
