from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mockery.models.execution import AnyExecution


@runtime_checkable
class Behavior(Protocol):
    def __call__(self, arguments: Any, /) -> Any: ...


@runtime_checkable
class ExecutionSource(Protocol):
    def executions(self, *, of: object) -> list[AnyExecution]: ...


__all__ = ["Behavior", "ExecutionSource"]
