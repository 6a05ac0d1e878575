"""Per-evaluator memo of constructed resolver objects."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from .reflection import resolve_type

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[Any], Any]


class ResolverInstanceCache:
    """Build resolver objects lazily and keep at most one per type identifier.

    Instances are constructed with the ambient application context. A factory
    registered for a type identifier takes precedence over importing the
    class by name. Nothing is ever evicted.
    """

    def __init__(self, app: Any = None) -> None:
        self._app = app
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[str, ResolverFactory] = {}
        self._classes: Dict[str, type] = {}

    def register_factory(self, type_id: str, factory: ResolverFactory) -> None:
        """Use ``factory(app)`` to build the resolver for ``type_id``."""
        self._factories[type_id] = factory

    def register_class(self, type_id: str, cls: type) -> None:
        """Remember the class object behind ``type_id``.

        Classes that cannot be imported by name, such as ones defined inside
        a function, are then still constructible. The first class recorded
        for an identifier wins.
        """
        self._classes.setdefault(type_id, cls)

    def get_or_create(self, type_id: str) -> Any:
        if type_id in self._instances:
            return self._instances[type_id]

        factory = (
            self._factories.get(type_id)
            or self._classes.get(type_id)
            or resolve_type(type_id)
        )
        logger.debug(f"Constructing resolver instance for {type_id}")
        instance = factory(self._app)
        self._instances[type_id] = instance
        return instance

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)


__all__ = ["ResolverInstanceCache", "ResolverFactory"]
