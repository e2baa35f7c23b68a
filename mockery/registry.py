"""Per-function registrations: canned behaviors and forced errors."""

from __future__ import annotations

import logging

from mockery.identity import FunctionRef, IdentityResolver
from mockery.models.identity import IdentityToken
from mockery.protocols.behavior import Behavior

logger = logging.getLogger(__name__)


class ResultRegistry:
    """Holds at most one behavior and one forced error per function identity.

    Re-registering replaces the previous entry wholesale. Registrations only
    affect invocations made after them.
    """

    def __init__(self, resolver: IdentityResolver) -> None:
        self._resolver = resolver
        self._behaviors: dict[IdentityToken, Behavior] = {}
        self._errors: dict[IdentityToken, BaseException] = {}

    def register(self, function: FunctionRef, behavior: Behavior) -> IdentityToken:
        if not callable(behavior):
            raise TypeError(f"behavior must be callable, got {type(behavior).__name__}")
        token = self._resolver.identity(function)
        if token in self._behaviors:
            logger.debug("Replacing registered result for %s", token)
        self._behaviors[token] = behavior
        return token

    def lookup(self, function: FunctionRef) -> Behavior | None:
        return self._behaviors.get(self._resolver.identity(function))

    def unregister(self, function: FunctionRef) -> bool:
        """Drop the behavior for ``function``. Returns True if one existed."""
        return self._behaviors.pop(self._resolver.identity(function), None) is not None

    def is_registered(self, function: FunctionRef) -> bool:
        return self._resolver.identity(function) in self._behaviors

    def register_error(self, function: FunctionRef, error: BaseException | None) -> IdentityToken:
        """Force every later call of ``function`` to raise ``error``.

        Passing ``None`` clears a previously forced error.
        """
        token = self._resolver.identity(function)
        if error is None:
            self._errors.pop(token, None)
            return token
        if not isinstance(error, BaseException):
            raise TypeError(f"error must be an exception instance, got {type(error).__name__}")
        self._errors[token] = error
        return token

    def error_for(self, function: FunctionRef) -> BaseException | None:
        return self._errors.get(self._resolver.identity(function))

    def __len__(self) -> int:
        return len(self._behaviors)


__all__ = ["ResultRegistry"]
