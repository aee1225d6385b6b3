"""Unit tests for declarative migration step builders."""

from __future__ import annotations

from migration.steps import (
    add_field_step,
    describe_step,
    get_field,
    has_field,
    remove_field_step,
    rename_field_step,
    set_field_step,
)


def test_add_field_step_keeps_existing_value() -> None:
    """Add steps should only fill missing fields."""
    step = add_field_step("scene.tenant_id", None)

    data = step.forward({"scene": {"tenant_id": "acme"}})

    assert data["scene"]["tenant_id"] == "acme"


def test_add_field_step_creates_parents() -> None:
    """Add steps should create missing parent objects by default."""
    step = add_field_step("integrity.hash", "")

    data = step.forward({})

    assert data == {"integrity": {"hash": ""}}
    assert step.postcondition is not None and step.postcondition(data)


def test_add_field_step_without_parent_creation_skips_missing_parent() -> None:
    """Add steps limited to existing parents should leave data untouched."""
    step = add_field_step("scene.contexts", [], create_parents=False)

    data = step.forward({"schema": {}})

    assert data == {"schema": {}}
    assert step.postcondition is not None and step.postcondition(data)


def test_add_field_step_copies_mutable_defaults() -> None:
    """Each application should receive its own default container."""
    step = add_field_step("scene.contexts", [])

    first = step.forward({"scene": {}})
    first["scene"]["contexts"].append("mutated")
    second = step.forward({"scene": {}})

    assert second["scene"]["contexts"] == []


def test_rename_field_step_moves_and_rolls_back() -> None:
    """Rename steps should move values and reverse the move."""
    step = rename_field_step("scene.theme", "scene.style")

    renamed = step.forward({"scene": {"theme": {"theme": "dark"}}})
    restored = step.rollback(renamed) if step.rollback is not None else None

    assert renamed == {"scene": {"style": {"theme": "dark"}}}
    assert restored == {"scene": {"theme": {"theme": "dark"}}}


def test_remove_and_set_field_steps() -> None:
    """Remove deletes a field and set overwrites one."""
    data = remove_field_step("cache").forward({"cache": {"ttl": 1}, "schema": {"version": "1"}})
    data = set_field_step("schema.version", "2").forward(data)

    assert not has_field(data, "cache") and get_field(data, "schema.version") == "2"


def test_describe_step_reports_kind_and_path() -> None:
    """Step descriptions should be inspectable without running the step."""
    description = describe_step(rename_field_step("a.b", "a.c"))

    assert description["kind"] == "rename"
    assert description["reversible"] is True
    assert description["metadata"] == {"path": "a.b", "new_path": "a.c"}
