"""Argument resolution tests."""

import pytest

from stageflow.contracts import WorkflowInstance
from stageflow.errors import ValueReferenceError
from stageflow.resolver import TokenKind, classify_token, resolve_arguments


def _instance(arguments=None, values=None) -> WorkflowInstance:
    return WorkflowInstance(name="Demo", arguments=arguments, values=values or {})


def test_classify_token_prefixes():
    assert classify_token(":Title") == (TokenKind.LITERAL, "Title")
    assert classify_token("!age") == (TokenKind.VALUE, "age")
    assert classify_token("name") == (TokenKind.PARAMETER, "name")


def test_absent_tokens_resolve_to_none():
    assert resolve_arguments(None, _instance()) is None


def test_empty_token_list_resolves_to_empty_list():
    assert resolve_arguments([], _instance()) == []


def test_resolves_each_token_kind_in_order():
    instance = _instance(arguments={"name": "Bob"}, values={"age": 42, "ok": True})

    resolved = resolve_arguments([":Hello", "name", "!age", "!ok"], instance)

    assert resolved == ["Hello", "Bob", "42", "True"]


def test_missing_parameter_uses_default():
    assert resolve_arguments(["name"], _instance()) == [""]
    assert resolve_arguments(["name"], _instance(arguments={})) == [""]
    assert resolve_arguments(["name"], _instance(), default="?") == ["?"]


def test_literal_keeps_remainder_verbatim():
    assert resolve_arguments(["::x", ":"], _instance()) == [":x", ""]


def test_missing_value_reference_raises():
    with pytest.raises(ValueReferenceError) as exc_info:
        resolve_arguments(["!missing"], _instance())

    assert exc_info.value.key == "missing"
    assert isinstance(exc_info.value, LookupError)


def test_resolution_does_not_mutate_instance():
    instance = _instance(arguments={"name": "Bob"}, values={"age": 1})
    before = instance.model_copy(deep=True)

    resolve_arguments(["name", "other", "!age", ":x"], instance)

    assert instance.arguments == before.arguments
    assert instance.values == before.values
    assert instance.stage == before.stage
