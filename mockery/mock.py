"""Base class for hand-written test doubles.

Subclass ``Mock`` and implement whatever protocol the code under test
expects. Each method body forwards to ``invoke`` with a reference to itself
and its arguments::

    class FakeUserService(Mock):
        def fetch_user(self, user_id: int) -> User:
            return self.invoke(self.fetch_user, args=user_id)

        def find_cached(self, key: str) -> User | None:
            return self.invoke(self.find_cached, args=key)

        def track(self, event: str, count: int) -> None:
            self.invoke(self.track, args=(event, count))

The declared return annotation decides how a call without a registered
result is handled: ``-> None`` is only recorded, ``-> X | None`` returns
``None``, and anything else fails the test with ``UnregisteredResultError``.
Passing ``default=`` makes the call fall back to that value instead.

Register results before exercising the code under test::

    service.register_result(service.fetch_user, lambda user_id: User(id=user_id))

and assert on ``executions(of=service.fetch_user)`` afterwards. Behaviors
receive the ``args`` value unchanged; use a tuple for several parameters.
The ledger keeps a deep copy of ``args`` taken when the call starts, so
mutating an argument afterwards does not rewrite recorded history.
"""

from __future__ import annotations

import copy
import inspect
import logging
import threading
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any

from mockery.config import MockerySettings
from mockery.core.logging import invocation_scope
from mockery.errors import UnregisteredResultError
from mockery.identity import FunctionRef, IdentityResolver
from mockery.ledger import ExecutionLedger
from mockery.models.execution import (
    MISSING,
    AnyExecution,
    CallSite,
    Default,
    Execution,
    ResultPolicy,
)
from mockery.models.identity import IdentityToken
from mockery.policy import infer_policy
from mockery.protocols.behavior import Behavior
from mockery.registry import ResultRegistry

logger = logging.getLogger(__name__)


def _is_internal_frame(module_name: str) -> bool:
    return module_name == "mockery" or module_name.startswith("mockery.")


def _caller_site() -> CallSite | None:
    """Return the innermost frame outside this package, i.e. the mock method body."""
    frame = inspect.currentframe()
    try:
        while frame is not None and _is_internal_frame(frame.f_globals.get("__name__", "")):
            frame = frame.f_back
        if frame is None:
            return None
        return CallSite(
            filename=frame.f_code.co_filename,
            lineno=frame.f_lineno,
            function=frame.f_code.co_name,
        )
    finally:
        del frame


def _normalize_arguments(args: object) -> object:
    if args is MISSING:
        return ()
    return args


def _snapshot(arguments: object) -> object:
    """Deep copy of ``arguments`` for the ledger, or the object itself if uncopyable."""
    try:
        return copy.deepcopy(arguments)
    except (copy.Error, TypeError, ValueError, AttributeError, RecursionError) as exc:
        logger.debug("Recording %s arguments by reference: %r", type(arguments).__name__, exc)
        return arguments


@dataclass(slots=True)
class _PreparedCall:
    token: IdentityToken
    policy: ResultPolicy
    arguments: object
    snapshot: object
    behavior: Behavior | None
    call_site: CallSite | None


class Mock:
    """Records calls and serves registered results for mocked functions.

    A single instance is meant to live for one test. Registrations and the
    execution ledger are guarded by one lock, but registered behaviors run
    outside it, so a behavior may call back into the same mock.
    """

    def __init__(self, *, settings: MockerySettings | None = None, name: str | None = None) -> None:
        # Shared failure slot for mock bodies that report errors out of band.
        self.error: BaseException | None = None
        self._mock_settings = settings or MockerySettings()
        self._mock_name = name or type(self).__name__
        self._mock_lock = threading.RLock()
        self._mock_resolver = IdentityResolver()
        self._mock_results = ResultRegistry(self._mock_resolver)
        self._mock_executions = ExecutionLedger(self._mock_resolver)
        self._mock_policies: dict[IdentityToken, ResultPolicy] = {}

    # -- registration -------------------------------------------------

    def register_result(self, function: FunctionRef, behavior: Behavior) -> None:
        """Serve ``behavior(args)`` for later calls of ``function``.

        The most recent registration wins.
        """
        with self._mock_lock:
            self._mock_results.register(function, behavior)

    def register_value(self, function: FunctionRef, value: object) -> None:
        self.register_result(function, lambda _arguments: value)

    def unregister_result(self, function: FunctionRef) -> bool:
        with self._mock_lock:
            return self._mock_results.unregister(function)

    def register_error(self, function: FunctionRef, error: BaseException | None) -> None:
        """Make every later call of ``function`` record and raise ``error``.

        ``None`` clears it again. Other functions are unaffected.
        """
        with self._mock_lock:
            self._mock_results.register_error(function, error)

    def error_for(self, function: FunctionRef) -> BaseException | None:
        """Forced error for ``function``, falling back to the shared ``error``."""
        with self._mock_lock:
            forced = self._mock_results.error_for(function)
        return forced if forced is not None else self.error

    # -- invocation ---------------------------------------------------

    def invoke(
        self,
        function: FunctionRef,
        args: object = MISSING,
        *,
        default: object = MISSING,
        policy: ResultPolicy | str | None = None,
    ) -> Any:
        call = self._prepare(function, args, default, policy)
        with self._scope(call):
            if call.policy is ResultPolicy.void:
                return self._record(call, None)
            if call.behavior is None:
                return self._record(call, self._fallback(call, default))
            try:
                result = call.behavior(call.arguments)
            except Exception as exc:
                logger.debug("Registered result for %s raised %r", call.token, exc)
                result = self._fallback(call, default, cause=exc)
            return self._record(call, result)

    async def ainvoke(
        self,
        function: FunctionRef,
        args: object = MISSING,
        *,
        default: object = MISSING,
        policy: ResultPolicy | str | None = None,
    ) -> Any:
        """Async counterpart of ``invoke`` for mocked coroutine methods.

        Behaviors may be plain callables or coroutine functions; an awaitable
        result is awaited before it is recorded.
        """
        call = self._prepare(function, args, default, policy)
        with self._scope(call):
            if call.policy is ResultPolicy.void:
                return self._record(call, None)
            if call.behavior is None:
                return self._record(call, self._fallback(call, default))
            try:
                result = call.behavior(call.arguments)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                logger.debug("Registered result for %s raised %r", call.token, exc)
                result = self._fallback(call, default, cause=exc)
            return self._record(call, result)

    # -- assertions ---------------------------------------------------

    def executions(self, of: FunctionRef) -> list[AnyExecution]:
        """All recorded calls of ``of`` in call order; empty if never called."""
        with self._mock_lock:
            return self._mock_executions.query(of)

    def call_count(self, of: FunctionRef) -> int:
        with self._mock_lock:
            return self._mock_executions.count(of)

    def last_execution(self, of: FunctionRef) -> AnyExecution | None:
        with self._mock_lock:
            return self._mock_executions.last(of)

    def __repr__(self) -> str:
        with self._mock_lock:
            called = ", ".join(
                f"{token.qualname}({self._mock_executions.count(token)})"
                for token in self._mock_executions.tokens()
            )
        return f"<{self._mock_name} calls=[{called}]>"

    # -- internals ----------------------------------------------------

    def _prepare(
        self,
        function: FunctionRef,
        args: object,
        default: object,
        policy: ResultPolicy | str | None,
    ) -> _PreparedCall:
        call_site = _caller_site() if self._mock_settings.capture_call_site else None
        arguments = _normalize_arguments(args)
        snapshot = _snapshot(arguments)
        with self._mock_lock:
            token = self._mock_resolver.identity(function)
            call = _PreparedCall(
                token=token,
                policy=self._resolve_policy(function, token, default, policy),
                arguments=arguments,
                snapshot=snapshot,
                behavior=None,
                call_site=call_site,
            )
            forced = self._mock_results.error_for(token)
            if forced is None and call.policy is not ResultPolicy.void:
                call.behavior = self._mock_results.lookup(token)
        if forced is not None:
            self._record(call, None, error=forced)
            raise forced
        return call

    def _scope(self, call: _PreparedCall) -> AbstractContextManager[None]:
        return invocation_scope(
            mock_name=self._mock_name,
            function=call.token.qualname,
            call_site=None if call.call_site is None else str(call.call_site),
        )

    def _resolve_policy(
        self,
        function: FunctionRef,
        token: IdentityToken,
        default: object,
        policy: ResultPolicy | str | None,
    ) -> ResultPolicy:
        if policy is not None:
            resolved = ResultPolicy(policy)
            if resolved is ResultPolicy.defaulted and default is MISSING:
                raise TypeError("the defaulted policy needs a default= value")
            return resolved
        if default is not MISSING:
            return ResultPolicy.defaulted
        if not self._mock_settings.infer_policy:
            return ResultPolicy.required
        cached = self._mock_policies.get(token)
        if cached is None:
            cached = infer_policy(function)
            self._mock_policies[token] = cached
        return cached

    def _fallback(
        self,
        call: _PreparedCall,
        default: object,
        cause: BaseException | None = None,
    ) -> object:
        if call.policy is ResultPolicy.optional:
            return None
        if call.policy is ResultPolicy.defaulted:
            if isinstance(default, Default):
                return default.resolve()
            return default
        logger.warning("No usable registered result for %s", call.token)
        raise UnregisteredResultError(
            call.token,
            call.call_site,
            behavior_failed=cause is not None,
        ) from cause

    def _record(
        self,
        call: _PreparedCall,
        result: object,
        error: BaseException | None = None,
    ) -> Any:
        execution = Execution(
            arguments=call.snapshot,
            result=result,
            policy=call.policy,
            error=error,
            call_site=call.call_site,
        )
        with self._mock_lock:
            self._mock_executions.append(call.token, execution)
        if self._mock_settings.log_invocations:
            logger.debug(
                "%s(%r) -> %r [%s]",
                call.token.qualname,
                call.arguments,
                result,
                call.policy.value,
            )
        return result


__all__ = ["Mock"]
