"""Result policy inference from declared return annotations."""

from __future__ import annotations

import logging
import re
import types
import typing
from typing import Any, Union

from mockery.identity import unwrap_function
from mockery.models.execution import ResultPolicy

logger = logging.getLogger(__name__)

_NO_ANNOTATION = object()
_NONE_NAMES: frozenset[str] = frozenset({"None", "NoneType", "type(None)"})
_SUBSCRIPT_RE = re.compile(r"^(?:typing\.|t\.)?(Optional|Union)\[(.*)\]$", re.DOTALL)


def _return_annotation(function: object) -> Any:
    target = unwrap_function(function)
    try:
        hints = typing.get_type_hints(target)
    except (NameError, TypeError, AttributeError, SyntaxError):
        # Forward references that cannot be resolved here; judge the raw text.
        raw = getattr(target, "__annotations__", None) or {}
        return raw.get("return", _NO_ANNOTATION)
    return hints.get("return", _NO_ANNOTATION)


def _split_top_level(text: str, separator: str) -> list[str]:
    """Split on ``separator`` outside of any brackets."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:index].strip())
            start = index + 1
    parts.append(text[start:].strip())
    return parts


def _policy_from_text(annotation: str) -> ResultPolicy:
    text = annotation.strip().strip("'\"")
    if text in _NONE_NAMES:
        return ResultPolicy.void

    members = _split_top_level(text, "|")
    if len(members) == 1:
        subscript = _SUBSCRIPT_RE.match(text)
        if subscript is None:
            return ResultPolicy.required
        if subscript.group(1) == "Optional":
            return ResultPolicy.optional
        members = _split_top_level(subscript.group(2), ",")
        if len(members) == 1:
            return _policy_from_text(members[0])

    for member in members:
        if _policy_from_text(member) is not ResultPolicy.required:
            return ResultPolicy.optional
    return ResultPolicy.required


def policy_for_annotation(annotation: Any) -> ResultPolicy:
    """Classify one return annotation.

    ``None`` is a void result, a union containing ``None`` is optional and
    everything else, including a missing annotation, is required.
    """

    if annotation is _NO_ANNOTATION:
        return ResultPolicy.required
    if annotation is None or annotation is type(None):
        return ResultPolicy.void
    if isinstance(annotation, str):
        return _policy_from_text(annotation)
    if isinstance(annotation, typing.ForwardRef):
        return _policy_from_text(annotation.__forward_arg__)

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        if type(None) in typing.get_args(annotation):
            return ResultPolicy.optional
    return ResultPolicy.required


def infer_policy(function: object) -> ResultPolicy:
    """Derive the invocation policy of ``function`` from its return annotation.

    Symbolic keys (``str`` or ``Enum``) and callables without introspectable
    annotations are treated as required-result calls.
    """

    if isinstance(function, str) or not callable(function):
        return ResultPolicy.required
    policy = policy_for_annotation(_return_annotation(function))
    logger.debug("Inferred %s policy for %r", policy.value, function)
    return policy


__all__ = ["infer_policy", "policy_for_annotation"]
