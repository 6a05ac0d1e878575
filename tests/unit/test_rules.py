"""Tests for rule models and the rule registry."""

import pytest
from pydantic import ValidationError

from flight_permissions.errors import DuplicateRuleError
from flight_permissions.rules import (
    CallableRef,
    MethodRef,
    RuleRegistry,
    RuleSnapshot,
    to_resolver_ref,
)


def allow(role) -> bool:
    return True


def test_method_ref_parse_and_string() -> None:
    ref = MethodRef.parse("app.permissions:Orders->order")
    assert (ref.type_id, ref.method) == ("app.permissions:Orders", "order")
    assert str(ref) == "app.permissions:Orders->order"


@pytest.mark.parametrize("value", ["no_separator", "->method", "type->"])
def test_method_ref_parse_rejects_malformed(value) -> None:
    with pytest.raises(ValueError):
        MethodRef.parse(value)


def test_to_resolver_ref_variants() -> None:
    assert to_resolver_ref(allow) == CallableRef(func=allow)
    assert to_resolver_ref("mod:Cls->m") == MethodRef(type_id="mod:Cls", method="m")
    ref = MethodRef(type_id="mod:Cls", method="m")
    assert to_resolver_ref(ref) is ref
    with pytest.raises(TypeError):
        to_resolver_ref(42)


def test_snapshot_round_trips_through_json_data() -> None:
    snapshot = RuleSnapshot(
        type_id="mod:Cls",
        rules={"view": MethodRef(type_id="mod:Cls", method="view")},
    )
    data = snapshot.model_dump(mode="json")
    assert data["rules"]["view"] == {"kind": "method", "type_id": "mod:Cls", "method": "view"}
    assert RuleSnapshot.model_validate(data) == snapshot


def test_snapshot_rejects_callable_entries() -> None:
    with pytest.raises(ValidationError):
        RuleSnapshot.model_validate(
            {"type_id": "mod:Cls", "rules": {"view": {"kind": "callable"}}}
        )


def test_registry_define_and_duplicate() -> None:
    registry = RuleRegistry()
    registry.define("view", allow)
    assert "view" in registry
    assert len(registry) == 1
    with pytest.raises(DuplicateRuleError) as exc:
        registry.define("view", allow)
    assert exc.value.name == "view"

    registry.define("view", "mod:Cls->view", overwrite=True)
    assert registry.get("view") == MethodRef(type_id="mod:Cls", method="view")


def test_registry_merge_overwrites_and_replace_discards() -> None:
    registry = RuleRegistry()
    registry.define("view", allow)
    registry.define("edit", allow)

    registry.merge({"view": MethodRef(type_id="mod:Cls", method="view")})
    assert isinstance(registry.get("view"), MethodRef)
    assert isinstance(registry.get("edit"), CallableRef)

    registry.replace({"list": MethodRef(type_id="mod:Cls", method="list")})
    assert registry.get("edit") is None
    assert list(registry.snapshot()) == ["list"]


def test_registry_snapshot_is_a_copy() -> None:
    registry = RuleRegistry()
    rules = registry.snapshot()
    registry.define("view", allow)
    assert rules == {}
