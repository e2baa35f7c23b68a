"""Generic test doubles: register canned results, record every call."""

from mockery.config import MockerySettings, load_config
from mockery.errors import (
    ConfigError,
    MockeryError,
    UnregisteredResultError,
    UnresolvableFunctionError,
)
from mockery.identity import IdentityResolver
from mockery.ledger import ExecutionLedger
from mockery.mock import Mock
from mockery.models import MISSING, CallSite, Default, Execution, IdentityToken, ResultPolicy
from mockery.policy import infer_policy
from mockery.registry import ResultRegistry

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "CallSite",
    "ConfigError",
    "Default",
    "Execution",
    "ExecutionLedger",
    "IdentityResolver",
    "IdentityToken",
    "Mock",
    "MockerySettings",
    "MockeryError",
    "ResultPolicy",
    "ResultRegistry",
    "UnregisteredResultError",
    "UnresolvableFunctionError",
    "infer_policy",
    "load_config",
]
