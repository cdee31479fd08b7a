"""Parsers for workflow definition and invocation strings.

Definition grammar::

    definition := stage (';' stage)*
    stage      := NAME ['(' TOKEN (',' TOKEN)* ')']

Invocation grammar::

    invocation := NAME ['(' KEY '=' VALUE (',' KEY '=' VALUE)* ')']

There is no escaping, so ``,`` ``;`` ``(`` and ``)`` cannot appear inside a
name, token, key or value.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .contracts import Invocation, ParsedDefinition
from .errors import InvocationSyntaxError

logger = logging.getLogger(__name__)


def _split_call(text: str) -> Optional[Tuple[str, str]]:
    """Split ``name(body)`` into ``(name, body)``; ``None`` if not call-shaped."""
    if not (text.endswith(")") and "(" in text):
        return None
    name, _, body = text[:-1].partition("(")
    return name.strip(), body


def parse_stage(chunk: str) -> Tuple[str, Optional[List[str]]]:
    """Parse one stage chunk into its name and raw argument tokens.

    A chunk without parentheses has no declared arguments and yields ``None``
    rather than an empty list.
    """
    chunk = chunk.strip()
    call = _split_call(chunk)
    if call is None:
        return chunk, None

    name, body = call
    if not body.strip():
        return name, []
    return name, [token.strip() for token in body.split(",")]


def parse_definition(text: str) -> ParsedDefinition:
    """Parse a ``;``-separated definition into parallel stage/argument lists."""
    parsed = ParsedDefinition()
    for chunk in text.split(";"):
        if not chunk.strip():
            continue
        name, tokens = parse_stage(chunk)
        parsed.stages.append(name)
        parsed.arguments.append(tokens)

    logger.debug(f"Parsed definition {text!r} into stages {parsed.stages}")
    return parsed


def parse_bindings(body: str) -> Dict[str, str]:
    """Parse ``key=value, key=value`` pairs, splitting each on its first ``=``."""
    bindings: Dict[str, str] = {}
    for pair in body.split(","):
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        if not sep:
            raise InvocationSyntaxError(f"Expected key=value, got {pair.strip()!r}")
        key = key.strip()
        if not key:
            raise InvocationSyntaxError(f"Missing key in {pair.strip()!r}")
        bindings[key] = value.strip()
    return bindings


def parse_invocation(text: str) -> Invocation:
    """Parse ``name`` or ``name(key=value, ...)`` into an :class:`Invocation`."""
    text = text.strip()
    call = _split_call(text)
    if call is None:
        return Invocation(name=text)

    name, body = call
    return Invocation(name=name, arguments=parse_bindings(body))
