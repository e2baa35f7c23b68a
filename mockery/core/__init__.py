"""Core module: lightweight re-exports only."""

from mockery.core.logging import (
    InvocationContext,
    InvocationContextFilter,
    get_invocation_context,
    invocation_scope,
    setup_logging,
)

__all__ = [
    "InvocationContext",
    "InvocationContextFilter",
    "get_invocation_context",
    "invocation_scope",
    "setup_logging",
]
