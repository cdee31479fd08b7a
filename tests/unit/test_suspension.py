"""Suspension stack tests."""

import pytest

from stageflow.contracts import WorkflowInstance
from stageflow.errors import SuspensionStackEmptyError
from stageflow.suspension import SuspensionStack


def test_lifo_order():
    stack = SuspensionStack()
    first = WorkflowInstance(name="First", stage=1)
    second = WorkflowInstance(name="Second")

    stack.push(first)
    stack.push(second)

    assert len(stack) == stack.depth == 2
    assert list(stack) == [second, first]
    assert stack.peek() is second
    assert stack.pop() is second
    assert stack.pop() is first
    assert not stack


def test_entries_are_pushed_verbatim():
    stack = SuspensionStack()
    instance = WorkflowInstance(name="Demo", stage=2, values={"a": 1})

    stack.push(instance)
    instance.values["b"] = 2

    assert stack.pop().values == {"a": 1, "b": 2}


def test_empty_stack_errors():
    stack = SuspensionStack()

    with pytest.raises(SuspensionStackEmptyError):
        stack.pop()
    with pytest.raises(SuspensionStackEmptyError):
        stack.peek()
    with pytest.raises(IndexError):
        stack.discard()


def test_discard_and_clear():
    stack = SuspensionStack()
    stack.push(WorkflowInstance(name="A"))
    stack.push(WorkflowInstance(name="B"))

    assert stack.discard().name == "B"
    stack.clear()
    assert stack.depth == 0
