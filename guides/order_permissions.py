"""Example showing rules derived from a resolver class and a cached rule table."""

import logging

from flight_permissions import InMemoryResolverCache, Permission


class OrderPermissions:
    """Resolver class: every public method becomes a permission."""

    def __init__(self, app=None):
        self.app = app

    def order(self, current_role, order_id, quantity):
        allowed = ["create"]
        if quantity > 10:
            allowed.append("update")
        if order_id > 0:
            allowed.append("delete")
        if current_role == "admin":
            allowed.append("admin")
        return allowed

    def dashboard(self, current_role):
        return current_role in ("admin", "manager")


def main():
    logging.basicConfig(level=logging.DEBUG)
    cache = InMemoryResolverCache()

    permission = Permission("public", app={"name": "shop"}, cache=cache)
    permission.define_rules_from_class_methods(OrderPermissions, ttl=300)
    permission.define_rule("report", lambda role, year: year >= 2020)

    print("order.create:", permission.can("order.create", 1, 1))
    print("order.update:", permission.can("order.update", 1, 1))
    print("dashboard:", permission.can("dashboard"))
    print("report:", permission.can("report", 2024))

    # A second request reuses the cached rule table
    next_request = Permission("admin", app={"name": "shop"}, cache=cache)
    next_request.define_rules_from_class_methods(OrderPermissions, ttl=300)
    print("admin order.admin:", next_request.has("order.admin", 1, 11))
    print("is admin:", next_request.is_role("admin"))


if __name__ == "__main__":
    main()
