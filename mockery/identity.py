"""Stable identities for function values.

A mock method is usually handed to the engine as a bound method
(``self.fetch_user``), which is a fresh object on every attribute access.
The resolver looks through bound methods, decorators and partials down to
the declared function and keys it by its code object, so every reference to
the same ``def`` maps to the same token.
"""

from __future__ import annotations

import functools
import inspect
import types
from enum import Enum

from mockery.errors import UnresolvableFunctionError
from mockery.models.identity import IdentityToken

FunctionRef = object
"""Anything ``identity()`` accepts: a callable, a str key, an Enum member or a token."""


def _builtin_member(method: object) -> object | None:
    """Static descriptor behind a bound built-in method such as ``items.append``.

    Built-in bound methods are rebuilt on every attribute access and carry no
    code object; the descriptor on the owning type is the stable declaration.
    Module-level built-ins (``len``) are already stable and return ``None``.
    """

    owner = getattr(method, "__self__", None)
    if owner is None or isinstance(owner, types.ModuleType):
        return None
    lookup = owner if isinstance(owner, type) else type(owner)
    return inspect.getattr_static(lookup, method.__name__, None)


def unwrap_function(function: object) -> object:
    """Strip bound-method, descriptor, partial and ``functools.wraps`` layers."""

    current = function
    while True:
        if isinstance(current, (staticmethod, classmethod, types.MethodType)):
            current = current.__func__
        elif isinstance(current, functools.partial):
            current = current.func
        elif isinstance(current, (types.BuiltinMethodType, types.MethodWrapperType)):
            member = _builtin_member(current)
            if member is None:
                return current
            current = member
        elif callable(current) and hasattr(current, "__wrapped__"):
            current = inspect.unwrap(current)
        else:
            return current


class IdentityResolver:
    """Maps function values and symbolic keys to ``IdentityToken`` values.

    Every object whose ``id()`` ends up in a token is kept alive here, so an
    address cannot be recycled by a different function while the owning mock
    is in use.
    """

    def __init__(self) -> None:
        self._anchors: dict[int, object] = {}

    def identity(self, function: FunctionRef) -> IdentityToken:
        if isinstance(function, IdentityToken):
            return function
        if isinstance(function, Enum):
            enum_type = type(function)
            return IdentityToken(
                module=f"<{enum_type.__module__}>",
                qualname=f"{enum_type.__qualname__}.{function.name}",
            )
        if isinstance(function, str):
            if not function:
                raise UnresolvableFunctionError(function)
            return IdentityToken(module="<key>", qualname=function)

        target = unwrap_function(function)
        if not callable(target):
            raise UnresolvableFunctionError(function)

        anchor = getattr(target, "__code__", None)
        if anchor is None:
            anchor = target
        address = id(anchor)
        self._anchors.setdefault(address, anchor)
        owner_type = getattr(target, "__objclass__", None)
        return IdentityToken(
            module=getattr(target, "__module__", None)
            or getattr(owner_type, "__module__", None)
            or "<unknown>",
            qualname=getattr(target, "__qualname__", None) or type(target).__qualname__,
            address=address,
        )

    def __len__(self) -> int:
        return len(self._anchors)


__all__ = ["FunctionRef", "IdentityResolver", "unwrap_function"]
