"""Scene snapshot exception hierarchy.

Migration, hydration, configuration, and file loading each raise
their own error family so callers can tell failure sources apart.
"""

from __future__ import annotations


class SnapshotError(Exception):
    """Base exception for all scene snapshot failures."""


class SnapshotConfigError(SnapshotError):
    """Raised for invalid runtime configuration."""


class SnapshotFileError(SnapshotError):
    """Raised when a snapshot file cannot be read or parsed."""


class InputShapeError(SnapshotError):
    """Raised when a snapshot payload is not a usable object."""


class MigrationError(SnapshotError):
    """Base exception for schema migration failures."""


class MigrationDefinitionError(MigrationError):
    """Raised when a migration definition is malformed."""


class MigrationPathError(MigrationError):
    """Raised when no migration route connects two schema versions."""


class MigrationStepError(MigrationError):
    """Raised when a migration step fails validation or raises."""


class HydrationError(SnapshotError):
    """Base exception for progressive hydration failures."""


class SceneStageFatalError(HydrationError):
    """Raised when scene-level hydration cannot produce a scene."""


class EntityHydrationError(HydrationError):
    """Raised when a single node, edge, or context cannot be hydrated."""


class FinalValidationError(HydrationError):
    """Raised when hydrated entities violate required-field invariants."""
