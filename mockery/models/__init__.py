from mockery.models.execution import (
    MISSING,
    AnyExecution,
    CallSite,
    Default,
    Execution,
    ResultPolicy,
)
from mockery.models.identity import IdentityToken

__all__ = [
    "MISSING",
    "AnyExecution",
    "CallSite",
    "Default",
    "Execution",
    "IdentityToken",
    "ResultPolicy",
]
