from __future__ import annotations

from mockery.identity import IdentityResolver
from mockery.ledger import ExecutionLedger
from mockery.models.execution import Execution, ResultPolicy
from tests.fakes import MockUserService


def _ledger() -> ExecutionLedger:
    return ExecutionLedger(IdentityResolver())


def test_query_unknown_function_is_empty() -> None:
    ledger = _ledger()
    assert ledger.query(MockUserService.greet) == []
    assert ledger.count(MockUserService.greet) == 0
    assert ledger.last(MockUserService.greet) is None


def test_records_kept_in_call_order() -> None:
    ledger = _ledger()
    for name in ("Ada", "Grace", "Linus"):
        ledger.append(MockUserService.greet, Execution(arguments=name, result=f"Hello, {name}"))

    records = ledger.query(MockUserService().greet)
    assert [record.arguments for record in records] == ["Ada", "Grace", "Linus"]
    assert [record.result for record in records] == ["Hello, Ada", "Hello, Grace", "Hello, Linus"]
    assert ledger.last(MockUserService.greet) == records[-1]
    assert len(ledger) == 3


def test_query_returns_a_copy() -> None:
    ledger = _ledger()
    ledger.append(MockUserService.greet, Execution(arguments="Ada", result="Hello, Ada"))
    snapshot = ledger.query(MockUserService.greet)
    snapshot.clear()
    assert ledger.count(MockUserService.greet) == 1


def test_functions_are_recorded_separately() -> None:
    ledger = _ledger()
    void = ResultPolicy.void
    ledger.append(MockUserService.track, Execution(arguments=("a", 1), result=None, policy=void))
    ledger.append(MockUserService.greet, Execution(arguments="Ada", result="Hello, Ada"))
    ledger.append(MockUserService.track, Execution(arguments=("b", 2), result=None, policy=void))

    assert ledger.count(MockUserService.track) == 2
    assert ledger.count(MockUserService.greet) == 1
    assert [token.qualname for token in ledger.tokens()] == [
        "MockUserService.track",
        "MockUserService.greet",
    ]


def test_append_accepts_resolved_token() -> None:
    resolver = IdentityResolver()
    ledger = ExecutionLedger(resolver)
    token = resolver.identity("send")
    ledger.append(token, Execution(arguments=b"x", result=1))
    assert ledger.count("send") == 1
