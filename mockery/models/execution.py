from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any, Generic, TypeVar

ArgsT = TypeVar("ArgsT")
ResultT = TypeVar("ResultT")


class ResultPolicy(StrEnum):
    """How the dispatcher treats a call, derived from its declared result."""

    void = "void"
    required = "required"
    optional = "optional"
    defaulted = "defaulted"


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing.MISSING


@dataclass(frozen=True, slots=True)
class Default(Generic[ResultT]):
    """Lazily evaluated fallback for defaulted calls."""

    factory: Callable[[], ResultT]

    def resolve(self) -> ResultT:
        return self.factory()


@dataclass(frozen=True, slots=True)
class CallSite:
    filename: str
    lineno: int
    function: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno} in {self.function}"


@dataclass(frozen=True, slots=True)
class Execution(Generic[ArgsT, ResultT]):
    """Immutable record of a single invocation.

    Void calls and optional calls without a value both record ``result=None``;
    ``policy`` keeps the two apart.
    """

    arguments: ArgsT
    result: ResultT | None
    policy: ResultPolicy = ResultPolicy.required
    error: BaseException | None = None
    call_site: CallSite | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


AnyExecution = Execution[Any, Any]


__all__ = [
    "MISSING",
    "AnyExecution",
    "CallSite",
    "Default",
    "Execution",
    "ResultPolicy",
]
