"""Exceptions raised by the permission evaluator."""

from __future__ import annotations


class FlightPermissionsError(Exception):
    """Base class for all permission evaluator errors."""


class DuplicateRuleError(FlightPermissionsError):
    """Raised when a rule name is defined twice without ``overwrite``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Rule already defined: {name}")


class UndefinedPermissionError(FlightPermissionsError):
    """Raised when a permission is checked that has no registered resolver.

    This signals a configuration mistake rather than a denied permission, so
    it is never converted into a ``False`` decision.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Permission not defined: {name}")


class ReflectionError(FlightPermissionsError):
    """Raised when a resolver type cannot be located or inspected."""

    def __init__(self, type_id: str, reason: str) -> None:
        self.type_id = type_id
        super().__init__(f"Cannot inspect resolver type '{type_id}': {reason}")


__all__ = [
    "FlightPermissionsError",
    "DuplicateRuleError",
    "UndefinedPermissionError",
    "ReflectionError",
]
