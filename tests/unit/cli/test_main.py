"""Unit tests for CLI command handling."""

from __future__ import annotations

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path

_ENV_NAMES = (
    "SCENE_SNAPSHOT_TARGET_VERSION",
    "SCENE_SNAPSHOT_STRICT",
    "SCENE_SNAPSHOT_VALIDATE",
    "SCENE_SNAPSHOT_FALLBACK",
    "SCENE_SNAPSHOT_CACHE",
    "SCENE_SNAPSHOT_TIMEOUT_MS",
)


@pytest.fixture(autouse=True)
def _clear_snapshot_env(monkeypatch) -> None:
    for env_name in _ENV_NAMES:
        monkeypatch.delenv(env_name, raising=False)


def test_cli_hydrate_prints_summary(capsys) -> None:
    """Hydrating a legacy snapshot should print counts and the applied migration."""
    exit_code = main(["hydrate", str(fixture_path("snapshots/legacy_demo.json"))])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert "success=true" in lines
    assert "migrated=true" in lines
    assert "nodes=1" in lines
    assert "[WARNING] Applied migration 0.9.0->1.0.0" in lines


def test_cli_hydrate_strict_fails_on_dangling_edge(capsys) -> None:
    exit_code = main(["hydrate", str(fixture_path("snapshots/broken_edge.yaml")), "--strict"])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 1
    assert "success=false" in lines
    assert any(line.startswith("[ERROR] Edge dangling") for line in lines)


def test_cli_hydrate_lenient_skips_dangling_edge(capsys) -> None:
    exit_code = main(["hydrate", str(fixture_path("snapshots/broken_edge.yaml"))])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert "edges=0" in lines


def test_cli_hydrate_reports_missing_file(tmp_path, capsys) -> None:
    exit_code = main(["hydrate", str(tmp_path / "missing.json")])
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "snapshot_error=Snapshot file does not exist" in output


def test_cli_rejects_invalid_env_config(monkeypatch, capsys) -> None:
    """Invalid environment values should exit with the config error code."""
    monkeypatch.setenv("SCENE_SNAPSHOT_STRICT", "sometimes")

    exit_code = main(["migrations"])
    output = capsys.readouterr().out

    assert exit_code == 2
    assert "config_error=" in output


def test_cli_migrations_lists_builtin_chain(capsys) -> None:
    exit_code = main(["migrations", "--steps"])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert any(line.startswith("0.9.0->1.0.0\t3\t") for line in lines)
    assert any(line.startswith("1.0.0->1.1.0\t3\t") for line in lines)
    assert "  - [add] Add integrity hash field" in lines


def test_cli_path_prints_route(capsys) -> None:
    exit_code = main(["path", "0.9.0", "1.1.0"])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert "path=0.9.0->1.0.0,1.0.0->1.1.0" in lines


def test_cli_path_reports_unreachable_version(capsys) -> None:
    exit_code = main(["path", "1.1.0", "0.9.0"])
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "path_error=No migration path found from 1.1.0 to 0.9.0" in output


def test_cli_migrate_honours_target_override(capsys) -> None:
    """The global target override should steer migrate's default target."""
    exit_code = main(
        [
            "--target-version",
            "1.1.0",
            "migrate",
            str(fixture_path("snapshots/legacy_demo.json")),
        ]
    )
    output = capsys.readouterr().out

    assert exit_code == 0
    assert '"version": "1.1.0"' in output
    assert '"tenant_id": null' in output


def test_cli_migrate_reports_failures(capsys) -> None:
    exit_code = main(
        ["migrate", str(fixture_path("snapshots/full_scene.yaml")), "--to", "0.9.0"]
    )
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "migration_error=No migration path found from 1.0.0 to 0.9.0" in output


def test_cli_migrate_reports_malformed_schema(tmp_path, capsys) -> None:
    snapshot_file = tmp_path / "bad_schema.json"
    snapshot_file.write_text('{"schema": "1.0.0", "scene": {}}', encoding="utf-8")

    exit_code = main(["migrate", str(snapshot_file)])
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "migration_error=Invalid snapshot data: 'schema' must be an object" in output
