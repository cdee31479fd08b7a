"""Resolve raw stage argument tokens into concrete strings."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .contracts import WorkflowInstance

LITERAL_PREFIX = ":"
VALUE_PREFIX = "!"


class TokenKind(str, Enum):
    LITERAL = "literal"
    VALUE = "value"
    PARAMETER = "parameter"


def classify_token(token: str) -> Tuple[TokenKind, str]:
    """Return the kind of ``token`` and the text left after its prefix."""
    if token.startswith(LITERAL_PREFIX):
        return TokenKind.LITERAL, token[len(LITERAL_PREFIX):]
    if token.startswith(VALUE_PREFIX):
        return TokenKind.VALUE, token[len(VALUE_PREFIX):]
    return TokenKind.PARAMETER, token


def resolve_token(token: str, instance: WorkflowInstance, default: str = "") -> str:
    kind, key = classify_token(token)
    if kind is TokenKind.LITERAL:
        return key
    if kind is TokenKind.VALUE:
        # missing values raise ValueReferenceError
        return instance.values.text(key)
    if instance.arguments is None:
        return default
    return instance.arguments.get(key, default)


def resolve_arguments(
    tokens: Optional[Sequence[str]],
    instance: WorkflowInstance,
    default: str = "",
) -> Optional[List[str]]:
    """Resolve every token of a stage against ``instance``.

    ``:text`` is passed as ``text``; ``!key`` reads the accumulated value
    ``key``; anything else is looked up in the invocation arguments, falling
    back to ``default``. A stage without declared arguments resolves to
    ``None``. The instance is only read.

    Raises:
        ValueReferenceError: A ``!key`` token names a value that is not set.
    """
    if tokens is None:
        return None
    return [resolve_token(token, instance, default) for token in tokens]
