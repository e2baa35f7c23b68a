"""Append-only record of invocations, grouped by function identity."""

from __future__ import annotations

from mockery.identity import FunctionRef, IdentityResolver
from mockery.models.execution import AnyExecution
from mockery.models.identity import IdentityToken


class ExecutionLedger:
    def __init__(self, resolver: IdentityResolver) -> None:
        self._resolver = resolver
        self._executions: dict[IdentityToken, list[AnyExecution]] = {}

    def append(self, function: FunctionRef, execution: AnyExecution) -> IdentityToken:
        token = self._resolver.identity(function)
        self._executions.setdefault(token, []).append(execution)
        return token

    def query(self, function: FunctionRef) -> list[AnyExecution]:
        """Return every recorded call of ``function`` in call order.

        The returned list is a copy; mutating it never touches the ledger.
        """
        return list(self._executions.get(self._resolver.identity(function), ()))

    def count(self, function: FunctionRef) -> int:
        return len(self._executions.get(self._resolver.identity(function), ()))

    def last(self, function: FunctionRef) -> AnyExecution | None:
        executions = self._executions.get(self._resolver.identity(function))
        if not executions:
            return None
        return executions[-1]

    def tokens(self) -> list[IdentityToken]:
        return list(self._executions)

    def __len__(self) -> int:
        return sum(len(executions) for executions in self._executions.values())


__all__ = ["ExecutionLedger"]
