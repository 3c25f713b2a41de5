"""
Name-based calls into framework objects whose types are only known at runtime.
"""

from __future__ import annotations

from typing import Any

from .exceptions import ReflectionError


def find_method(target: Any, name: str):
    """Return the bound callable ``target.name``."""
    try:
        member = getattr(target, name)
    except AttributeError as e:
        raise ReflectionError(f"{_describe(target)} has no member {name!r}") from e
    if not callable(member):
        raise ReflectionError(f"{_describe(target)}.{name} is not callable")
    return member


def invoke_method(target: Any, name: str, *args: Any) -> Any:
    """Invoke ``target.name(*args)``; works for instances and classes alike."""
    method = find_method(target, name)
    try:
        return method(*args)
    except Exception as e:
        raise ReflectionError(f"{_describe(target)}.{name} failed: {e}") from e


def instantiate(cls: Any, *args: Any) -> Any:
    if not callable(cls):
        raise ReflectionError(f"{_describe(cls)} cannot be instantiated")
    try:
        return cls(*args)
    except Exception as e:
        raise ReflectionError(f"cannot instantiate {_describe(cls)}: {e}") from e


def _describe(target: Any) -> str:
    if isinstance(target, type):
        return f"{target.__module__}.{target.__qualname__}"
    return f"{type(target).__module__}.{type(target).__qualname__} instance"
