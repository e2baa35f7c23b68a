"""Exception types raised by the mock engine."""

from __future__ import annotations

from mockery.models.execution import CallSite
from mockery.models.identity import IdentityToken


class MockeryError(Exception):
    """Base class for misuse of the mock engine itself."""


class UnresolvableFunctionError(MockeryError, TypeError):
    def __init__(self, value: object) -> None:
        super().__init__(
            f"cannot derive a function identity from {type(value).__name__!s} value {value!r}; "
            "pass a callable, a str key or an Enum member"
        )
        self.value = value


class ConfigError(MockeryError):
    pass


class UnregisteredResultError(AssertionError):
    """A required-result call had no usable registered behavior.

    Subclasses ``AssertionError`` so test runners report a failed test
    rather than a crashed one.
    """

    def __init__(
        self,
        function: IdentityToken,
        call_site: CallSite | None = None,
        *,
        behavior_failed: bool = False,
    ) -> None:
        if behavior_failed:
            reason = f"'{function.qualname}' has a registered result, but it raised."
        else:
            reason = f"'{function.qualname}' has no registered result."
        lines = [
            reason,
            "You must register one with `register_result()` before calling this function.",
        ]
        if call_site is not None:
            lines.append(f"Called from {call_site}.")
        super().__init__("\n".join(lines))
        self.function = function
        self.call_site = call_site
        self.behavior_failed = behavior_failed


__all__ = [
    "ConfigError",
    "MockeryError",
    "UnregisteredResultError",
    "UnresolvableFunctionError",
]
