"""Rule models and the in-memory rule registry."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import DuplicateRuleError

logger = logging.getLogger(__name__)

METHOD_SEPARATOR = "->"


class CallableRef(BaseModel):
    """Resolver backed by a plain function or other callable."""

    kind: Literal["callable"] = "callable"
    func: Callable[..., Any]

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return getattr(self.func, "__qualname__", repr(self.func))


class MethodRef(BaseModel):
    """Resolver backed by a method on a lazily constructed class instance."""

    kind: Literal["method"] = "method"
    type_id: str = Field(..., description="Importable identifier of the resolver class")
    method: str = Field(..., description="Name of the method to invoke")

    model_config = ConfigDict(frozen=True)

    @field_validator("type_id", "method")
    @classmethod
    def _ensure_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("type_id and method must be non-empty strings")
        return v

    @classmethod
    def parse(cls, value: str) -> "MethodRef":
        """Parse a ``"type_id->method"`` reference string."""
        type_id, sep, method = value.rpartition(METHOD_SEPARATOR)
        if not sep:
            raise ValueError(
                f"Method reference must look like 'type{METHOD_SEPARATOR}method': {value}"
            )
        return cls(type_id=type_id, method=method)

    def __str__(self) -> str:
        return f"{self.type_id}{METHOD_SEPARATOR}{self.method}"


ResolverRef = Union[CallableRef, MethodRef]


class RuleSnapshot(BaseModel):
    """Rule table derived from one resolver class, as stored in a cache."""

    type_id: str
    rules: Dict[str, MethodRef] = Field(default_factory=dict)


def to_resolver_ref(resolver: Any) -> ResolverRef:
    """Normalize the accepted resolver spellings into a :data:`ResolverRef`."""

    if isinstance(resolver, (CallableRef, MethodRef)):
        return resolver
    if isinstance(resolver, str):
        return MethodRef.parse(resolver)
    if callable(resolver):
        return CallableRef(func=resolver)
    raise TypeError(
        f"Resolver must be a callable, a MethodRef or a 'type->method' string, "
        f"got {type(resolver).__name__}"
    )


class RuleRegistry:
    """Mapping of permission names to resolver references.

    Lives as long as its owning evaluator; rules are never deleted, only
    added, overwritten or replaced wholesale.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, ResolverRef] = {}

    def define(self, name: str, resolver: Any, overwrite: bool = False) -> None:
        if not overwrite and name in self._rules:
            raise DuplicateRuleError(name)
        self._rules[name] = to_resolver_ref(resolver)
        logger.debug(f"Defined rule {name!r} -> {self._rules[name]}")

    def merge(self, rules: Mapping[str, ResolverRef]) -> None:
        """Add ``rules``, overwriting existing names without complaint."""
        self._rules.update(rules)

    def replace(self, rules: Mapping[str, ResolverRef]) -> None:
        """Discard every current rule and install ``rules`` instead."""
        self._rules = dict(rules)

    def get(self, name: str) -> Optional[ResolverRef]:
        return self._rules.get(name)

    def snapshot(self) -> Dict[str, ResolverRef]:
        return dict(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)


__all__ = [
    "CallableRef",
    "MethodRef",
    "ResolverRef",
    "RuleSnapshot",
    "RuleRegistry",
    "to_resolver_ref",
    "METHOD_SEPARATOR",
]
