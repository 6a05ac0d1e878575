"""Locate resolver classes by identifier and enumerate their public methods."""

from __future__ import annotations

import importlib
import inspect
from typing import Any, Union

from .errors import ReflectionError

RESERVED_PREFIX = "_"


def type_identifier(target: Union[str, type]) -> str:
    """Return the identifier used to address ``target`` in rules and caches.

    Classes are addressed as ``"package.module:QualName"``; strings are taken
    as given so the same identifier is used for cache keys and lookups.
    """

    if isinstance(target, str):
        if not target:
            raise ReflectionError(target, "empty type identifier")
        return target
    if inspect.isclass(target):
        return f"{target.__module__}:{target.__qualname__}"
    raise ReflectionError(repr(target), "expected a class or a type identifier string")


def resolve_type(type_id: str) -> type:
    """Import and return the class named by ``type_id``.

    Accepts ``"package.module:Outer.Inner"`` as well as the dotted
    ``"package.module.Class"`` form.
    """

    if ":" in type_id:
        module_name, _, attr_path = type_id.partition(":")
    else:
        module_name, _, attr_path = type_id.rpartition(".")
    if not module_name or not attr_path:
        raise ReflectionError(type_id, "identifier must include a module and a class name")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ReflectionError(type_id, f"module '{module_name}' not importable ({e})") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ReflectionError(type_id, f"'{part}' not found") from e

    if not inspect.isclass(obj):
        raise ReflectionError(type_id, f"resolved to a {type(obj).__name__}, not a class")
    return obj


def public_method_names(cls: type) -> list[str]:
    """Return the sorted names of the public routines of ``cls``.

    Inherited methods, static methods and class methods are included.
    Anything starting with an underscore (magic hooks such as ``__init__``
    and private helpers) is not a permission and is skipped.
    """

    names = []
    for name, member in inspect.getmembers(cls):
        if name.startswith(RESERVED_PREFIX):
            continue
        if inspect.isroutine(member):
            names.append(name)
    return names


__all__ = ["type_identifier", "resolve_type", "public_method_names", "RESERVED_PREFIX"]
