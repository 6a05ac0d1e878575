"""End-to-end tests for the permission evaluator."""

import pytest

from flight_permissions import (
    DuplicateRuleError,
    InMemoryResolverCache,
    MethodRef,
    Permission,
    SQLiteResolverCache,
    UndefinedPermissionError,
)
from tests.fixtures.permission_classes import OrderPermissions

ORDER_TYPE_ID = "tests.fixtures.permission_classes:OrderPermissions"


def assert_order_scenario(permission: Permission) -> None:
    assert permission.can("order.create", 1, 1)
    assert permission.can("order.delete", 1, 1)
    assert not permission.can("order.update", 1, 1)
    assert permission.can("order.update", 1, 11)
    assert not permission.can("order.delete", 0, 11)
    assert not permission.can("order.admin", 0, 1)
    permission.set_current_role("admin")
    assert permission.has("order.admin", 1, 11)


def test_set_current_role():
    permission = Permission("admin")
    permission.set_current_role("user")
    assert permission.get_current_role() == "user"


def test_define_rule_with_method_reference_string():
    permission = Permission("admin")
    permission.define_rule("createOrder", "Some_Permissions_Class->createOrder")
    assert permission.get_rules() == {
        "createOrder": MethodRef(type_id="Some_Permissions_Class", method="createOrder")
    }


def test_define_duplicate_rule():
    permission = Permission("admin")
    permission.define_rule("createOrder", "Some_Permissions_Class->createOrder")
    with pytest.raises(DuplicateRuleError, match="Rule already defined: createOrder"):
        permission.define_rule("createOrder", "Some_Permissions_Class->createOrder")


def test_define_duplicate_rule_with_overwrite():
    permission = Permission("admin")
    permission.define_rule("canSmell", lambda role: False)
    permission.define_rule("canSmell", lambda role: True, overwrite=True)
    assert permission.can("canSmell")


def test_rules_from_class_methods_simple_boolean():
    permission = Permission("admin")
    permission.define_rules_from_class_methods(OrderPermissions)
    assert permission.can("create_order")
    assert permission.can("create_order.anything")


def test_rules_from_class_methods_action_list():
    permission = Permission("public")
    permission.define_rules_from_class_methods(OrderPermissions)
    assert_order_scenario(permission)


def test_rules_from_type_identifier_string():
    permission = Permission("public")
    permission.define_rules_from_class_methods(ORDER_TYPE_ID)
    assert permission.get_rules()["order"] == MethodRef(type_id=ORDER_TYPE_ID, method="order")
    assert_order_scenario(permission)


def test_rules_from_class_methods_with_memory_cache():
    permission = Permission("public", None, InMemoryResolverCache())
    permission.define_rules_from_class_methods(OrderPermissions, 60)
    assert_order_scenario(permission)


def test_rules_from_class_methods_with_sqlite_cache_touch_cache(tmp_path):
    cache = SQLiteResolverCache(tmp_path / "rules.db")
    permission = Permission("public", None, cache)
    permission.define_rules_from_class_methods(OrderPermissions, 60)
    assert permission.can("order.create", 1, 1)

    # a later request loads the same class and is served from the cache
    permission.define_rules_from_class_methods(OrderPermissions, 60)
    assert not permission.can("order.delete", 0, 11)

    other_request = Permission("public", None, SQLiteResolverCache(tmp_path / "rules.db"))
    other_request.define_rules_from_class_methods(OrderPermissions, 60)
    assert other_request.get_rules() == permission.get_rules()
    assert other_request.can("order.delete", 1, 1)


def test_can_undefined_permission():
    permission = Permission("admin")
    with pytest.raises(UndefinedPermissionError, match="Permission not defined: smell") as exc:
        permission.can("smell")
    assert exc.value.name == "smell"


def test_can_undefined_permission_with_action():
    permission = Permission("admin")
    with pytest.raises(UndefinedPermissionError, match="Permission not defined: smell$"):
        permission.has("smell.strongly")


def test_can_with_callable():
    permission = Permission("admin")
    permission.define_rule("canSmell", lambda current_role: current_role == "admin")
    assert permission.can("canSmell")
    permission.set_current_role("user")
    assert not permission.can("canSmell")


def test_is_role():
    permission = Permission("admin")
    assert permission.is_role("admin")
    assert not permission.is_role("user")
    assert not permission.is_role("Admin")
