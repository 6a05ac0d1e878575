"""Role-based permission evaluator."""

from __future__ import annotations

import logging
from typing import Any, Dict, Literal, Optional, Union

from pydantic import ValidationError

from .cache import ResolverCache, get_cache
from .config import PermissionsConfig, load_config
from .errors import ReflectionError, UndefinedPermissionError
from .instances import ResolverFactory, ResolverInstanceCache
from .reflection import public_method_names, resolve_type, type_identifier
from .rules import CallableRef, MethodRef, ResolverRef, RuleRegistry, RuleSnapshot

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "flight_permissions_class_methods_"

ACTION_SEPARATOR = "."

CacheHitMode = Literal["replace", "merge"]


class Permission:
    """Evaluates named permissions for the current role.

    Each permission name maps to a resolver: either a callable or a method on
    a resolver class. Resolvers are called with ``(current_role, *args)`` and
    return either a ``bool`` or a collection of allowed action names::

        permission = Permission("public")
        permission.define_rules_from_class_methods(OrderPermissions)
        permission.can("order.create", order_id, quantity)

    An evaluator is meant to live for one request and is not thread-safe.
    """

    def __init__(
        self,
        current_role: str = "",
        app: Any = None,
        cache: Optional[ResolverCache] = None,
        *,
        cache_hit: CacheHitMode = "replace",
        default_ttl: int = 0,
    ) -> None:
        self._current_role = current_role
        self._app = app
        self._cache = cache
        self._cache_hit = cache_hit
        self._default_ttl = default_ttl
        self._rules = RuleRegistry()
        self._instances = ResolverInstanceCache(app)

    @classmethod
    def from_config(
        cls,
        config: Optional[PermissionsConfig] = None,
        app: Any = None,
        current_role: Optional[str] = None,
    ) -> "Permission":
        """Build an evaluator using the configured cache backend."""

        config = config or load_config()
        return cls(
            current_role if current_role is not None else config.default_role,
            app,
            get_cache(config=config),
            cache_hit=config.cache_hit,
            default_ttl=config.cache.ttl,
        )

    # ------------------------------------------------------------------
    # Role
    # ------------------------------------------------------------------
    def set_current_role(self, current_role: str) -> None:
        self._current_role = current_role

    def get_current_role(self) -> str:
        return self._current_role

    def is_role(self, role: str) -> bool:
        """Return ``True`` if ``role`` is exactly the current role."""
        return self._current_role == role

    # ------------------------------------------------------------------
    # Rule definition
    # ------------------------------------------------------------------
    def get_rules(self) -> Dict[str, ResolverRef]:
        """Return a copy of the defined rules."""
        return self._rules.snapshot()

    def define_rule(self, name: str, resolver: Any, overwrite: bool = False) -> None:
        """Define the resolver for permission ``name``.

        Args:
            name: The permission name checked with :meth:`can`.
            resolver: A callable, a :class:`MethodRef` or a
                ``"type_id->method"`` string. It is called with the current
                role and any extra arguments passed to :meth:`can`, and
                returns ``True``/``False`` or the allowed actions, e.g.
                ``["create", "read"]``.
            overwrite: Replace an existing rule instead of raising
                :class:`DuplicateRuleError`.
        """

        self._rules.define(name, resolver, overwrite=overwrite)

    def register_resolver_factory(
        self, target: Union[str, type], factory: ResolverFactory
    ) -> None:
        """Build resolver instances of ``target`` with ``factory(app)``."""
        self._instances.register_factory(type_identifier(target), factory)

    def define_rules_from_class_methods(
        self, target: Union[str, type], ttl: Optional[int] = None
    ) -> None:
        """Define one rule per public method of a resolver class.

        When a cache is configured and ``ttl`` is positive, the derived rule
        table is cached under a key built from the type identifier. A cache
        hit skips reflection and, in the default ``replace`` mode, replaces
        every rule defined so far with the cached table. Without an explicit
        ``ttl`` the evaluator's ``default_ttl`` applies.
        """

        if ttl is None:
            ttl = self._default_ttl
        type_id = type_identifier(target)
        if isinstance(target, type):
            self._instances.register_class(type_id, target)
        use_cache = self._cache is not None and ttl > 0
        cache_key = CACHE_KEY_PREFIX + type_id

        if use_cache:
            cached = self._load_snapshot(cache_key)
            if cached is not None:
                if self._cache_hit == "merge":
                    self._rules.merge(cached.rules)
                else:
                    logger.info(
                        f"Replacing {len(self._rules)} rules with cached rules for {type_id}"
                    )
                    self._rules.replace(cached.rules)
                return

        cls = target if isinstance(target, type) else resolve_type(type_id)
        snapshot = RuleSnapshot(
            type_id=type_id,
            rules={
                name: MethodRef(type_id=type_id, method=name)
                for name in public_method_names(cls)
            },
        )
        logger.debug(f"Derived {len(snapshot.rules)} rules from {type_id}")

        if use_cache:
            self._store_snapshot(cache_key, snapshot, ttl)

        self._rules.merge(snapshot.rules)

    def _load_snapshot(self, cache_key: str) -> Optional[RuleSnapshot]:
        try:
            if not self._cache.is_cached(cache_key):
                logger.debug(f"Rule cache miss for {cache_key}")
                return None
            data = self._cache.retrieve(cache_key)
        except Exception as e:
            logger.warning(f"Rule cache read failed for {cache_key}: {e}")
            return None

        try:
            if isinstance(data, RuleSnapshot):
                return data
            return RuleSnapshot.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid cached rules for {cache_key}: {e}")
            return None

    def _store_snapshot(self, cache_key: str, snapshot: RuleSnapshot, ttl: int) -> None:
        try:
            self._cache.store(cache_key, snapshot.model_dump(mode="json"), ttl)
        except Exception as e:
            logger.warning(f"Rule cache write failed for {cache_key}: {e}")

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def can(self, permission: str, *args: Any) -> bool:
        """Return whether the current role holds ``permission``.

        Args:
            permission: A rule name such as ``"video"`` or a rule name and
                action such as ``"video.create"``.
            *args: Extra arguments passed through to the resolver.

        Only the first dot separates the rule name from the action, so
        ``"files.docs.read"`` checks action ``"docs.read"`` on ``"files"``.

        Raises:
            UndefinedPermissionError: If no rule is defined for the name.
        """

        name, _, action = permission.partition(ACTION_SEPARATOR)
        resolver = self._rules.get(name)
        if resolver is None:
            raise UndefinedPermissionError(name)

        result = self._invoke(resolver, args)

        if isinstance(result, bool):
            return result
        if isinstance(result, (list, tuple, set, frozenset)):
            return action != "" and action in result
        return False

    def has(self, permission: str, *args: Any) -> bool:
        """Alias for :meth:`can`."""
        return self.can(permission, *args)

    def _invoke(self, resolver: ResolverRef, args: tuple) -> Any:
        if isinstance(resolver, CallableRef):
            return resolver.func(self._current_role, *args)

        instance = self._instances.get_or_create(resolver.type_id)
        method = getattr(instance, resolver.method, None)
        if method is None or not callable(method):
            raise ReflectionError(
                resolver.type_id, f"no callable method '{resolver.method}'"
            )
        return method(self._current_role, *args)


__all__ = ["Permission", "CACHE_KEY_PREFIX"]
