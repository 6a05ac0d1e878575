"""flight-permissions: role-based permission checks with pluggable resolvers."""

from .cache import InMemoryResolverCache, ResolverCache, SQLiteResolverCache, get_cache
from .config import PermissionsConfig, load_config
from .errors import (
    DuplicateRuleError,
    FlightPermissionsError,
    ReflectionError,
    UndefinedPermissionError,
)
from .permission import Permission
from .rules import CallableRef, MethodRef, ResolverRef, RuleSnapshot

__version__ = "0.1.0"
__all__ = [
    "Permission",
    "CallableRef",
    "MethodRef",
    "ResolverRef",
    "RuleSnapshot",
    "ResolverCache",
    "InMemoryResolverCache",
    "SQLiteResolverCache",
    "get_cache",
    "PermissionsConfig",
    "load_config",
    "FlightPermissionsError",
    "DuplicateRuleError",
    "UndefinedPermissionError",
    "ReflectionError",
]
