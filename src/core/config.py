"""Runtime configuration model for scene snapshot hydration.

This module owns all environment variable parsing and validation.
The CLI and SDK turn the parsed config into hydration options.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_HYDRATION_TIMEOUT_MS, DEFAULT_TARGET_SCHEMA_VERSION
from core.errors import SnapshotConfigError
from core.types import SnapshotHydrationOptions

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class SnapshotConfig:
    """Validated runtime configuration.

    Attributes:
        target_version: Schema version hydrated snapshots are migrated to.
        strict: Abort hydration on the first malformed entity.
        validate: Run final required-field validation.
        fallback: Assume the legacy schema when a snapshot declares none.
        cache: Memoise resolved migration paths.
        timeout_ms: Advisory hydration timeout in milliseconds.
    """

    target_version: str
    strict: bool
    validate: bool
    fallback: bool
    cache: bool
    timeout_ms: int

    @classmethod
    def from_env(cls) -> "SnapshotConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SnapshotConfigError: If environment values are invalid.
        """
        target_version = os.getenv(
            "SCENE_SNAPSHOT_TARGET_VERSION", DEFAULT_TARGET_SCHEMA_VERSION
        ).strip()
        if not target_version:
            raise SnapshotConfigError(
                "Invalid SCENE_SNAPSHOT_TARGET_VERSION value: expected a version string. "
                "Unset it or set a value like '1.0.0'."
            )
        return cls(
            target_version=target_version,
            strict=_parse_bool("SCENE_SNAPSHOT_STRICT", False),
            validate=_parse_bool("SCENE_SNAPSHOT_VALIDATE", True),
            fallback=_parse_bool("SCENE_SNAPSHOT_FALLBACK", True),
            cache=_parse_bool("SCENE_SNAPSHOT_CACHE", False),
            timeout_ms=_parse_timeout(
                os.getenv("SCENE_SNAPSHOT_TIMEOUT_MS", str(DEFAULT_HYDRATION_TIMEOUT_MS))
            ),
        )

    def to_options(self) -> SnapshotHydrationOptions:
        """Build hydration options from this configuration."""
        return SnapshotHydrationOptions(
            validate=self.validate,
            strict=self.strict,
            fallback=self.fallback,
            cache=self.cache,
            timeout_ms=self.timeout_ms,
        )


def _parse_bool(variable_name: str, default_value: bool) -> bool:
    """Parse one boolean environment variable.

    Args:
        variable_name: Environment variable name.
        default_value: Value used when the variable is unset.

    Returns:
        Parsed boolean.

    Raises:
        SnapshotConfigError: If the value is not a recognised boolean.
    """
    raw_value = os.getenv(variable_name)
    if raw_value is None:
        return default_value
    normalized_value = raw_value.strip().lower()
    if normalized_value in _TRUE_VALUES:
        return True
    if normalized_value in _FALSE_VALUES:
        return False
    raise SnapshotConfigError(
        f"Invalid {variable_name} value: expected true/false, got '{raw_value}'. "
        f"Set {variable_name} to one of: {', '.join(_TRUE_VALUES + _FALSE_VALUES)}."
    )


def _parse_timeout(raw_value: str) -> int:
    """Parse the timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer timeout.

    Raises:
        SnapshotConfigError: If value is not a positive integer.
    """
    try:
        timeout_ms = int(raw_value)
    except ValueError as error:
        raise SnapshotConfigError(
            "Invalid SCENE_SNAPSHOT_TIMEOUT_MS value: "
            f"expected integer, got '{raw_value}'. "
            "Set SCENE_SNAPSHOT_TIMEOUT_MS to a number of milliseconds."
        ) from error
    if timeout_ms <= 0:
        raise SnapshotConfigError(
            f"Invalid SCENE_SNAPSHOT_TIMEOUT_MS value: expected a positive integer, got {timeout_ms}."
        )
    return timeout_ms
