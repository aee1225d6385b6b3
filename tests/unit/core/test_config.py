"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import SnapshotConfig
from core.errors import SnapshotConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to documented defaults when env is unset."""
    for name in (
        "SCENE_SNAPSHOT_TARGET_VERSION",
        "SCENE_SNAPSHOT_STRICT",
        "SCENE_SNAPSHOT_VALIDATE",
        "SCENE_SNAPSHOT_FALLBACK",
        "SCENE_SNAPSHOT_CACHE",
        "SCENE_SNAPSHOT_TIMEOUT_MS",
    ):
        monkeypatch.delenv(name, raising=False)

    config = SnapshotConfig.from_env()

    assert (config.target_version, config.strict, config.validate, config.timeout_ms) == (
        "1.0.0",
        False,
        True,
        30000,
    )


def test_from_env_reads_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    """Boolean env values should accept common spellings."""
    monkeypatch.setenv("SCENE_SNAPSHOT_STRICT", "yes")
    monkeypatch.setenv("SCENE_SNAPSHOT_VALIDATE", "0")
    monkeypatch.setenv("SCENE_SNAPSHOT_TARGET_VERSION", "1.1.0")

    options = SnapshotConfig.from_env().to_options()

    assert options.strict is True and options.validate is False


def test_from_env_raises_for_invalid_bool(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unrecognised boolean values."""
    monkeypatch.setenv("SCENE_SNAPSHOT_STRICT", "sometimes")

    with pytest.raises(SnapshotConfigError):
        SnapshotConfig.from_env()


@pytest.mark.parametrize("raw_value", ["soon", "0", "-5"])
def test_from_env_raises_for_invalid_timeout(
    monkeypatch: pytest.MonkeyPatch,
    raw_value: str,
) -> None:
    """Config should fail for non-numeric or non-positive timeouts."""
    monkeypatch.setenv("SCENE_SNAPSHOT_TIMEOUT_MS", raw_value)

    with pytest.raises(SnapshotConfigError):
        SnapshotConfig.from_env()
