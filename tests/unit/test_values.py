"""Accumulated value map tests."""

import pytest

from stageflow.errors import ValueReferenceError, ValueTypeError
from stageflow.values import ValueMap, coerce_text


def test_merge_overwrites_in_order():
    values = ValueMap({"a": 1, "b": "x"})
    values.merge({"b": "y", "c": True})

    assert values.to_dict() == {"a": 1, "b": "y", "c": True}
    assert values == {"a": 1, "b": "y", "c": True}


def test_merge_none_is_noop():
    values = ValueMap({"a": 1})
    values.merge(None)
    assert len(values) == 1


def test_typed_accessors():
    values = ValueMap({"name": "Bob", "ok": False, "age": 3, "ratio": 0.5})

    assert values.get_str("name") == "Bob"
    assert values.get_bool("ok") is False
    assert values.get_int("age") == 3
    assert values.get_float("ratio") == 0.5
    assert values.get_float("age") == 3.0


def test_typed_accessor_mismatch_raises():
    values = ValueMap({"name": "Bob", "ok": True})

    with pytest.raises(ValueTypeError):
        values.get_int("name")
    with pytest.raises(ValueTypeError):
        values.get_int("ok")


def test_typed_accessor_missing_key_raises():
    with pytest.raises(ValueReferenceError):
        ValueMap().get_str("missing")


def test_unsupported_kind_rejected():
    with pytest.raises(ValueTypeError):
        ValueMap()["when"] = object()


def test_check_equals():
    values = ValueMap({"continue": False, "count": 0})

    assert values.check_equals("continue", False)
    assert not values.check_equals("continue", True)
    assert not values.check_equals("missing", False)
    # kinds must match: 0 is not False
    assert not values.check_equals("count", False)


def test_text_form():
    values = ValueMap({"n": 7, "flag": True, "s": "x"})
    assert [values.text(k) for k in ("n", "flag", "s")] == ["7", "True", "x"]


def test_coerce_text():
    assert coerce_text("true") is True
    assert coerce_text("False") is False
    assert coerce_text("12") == 12
    assert coerce_text("1.5") == 1.5
    assert coerce_text("Bob") == "Bob"
