"""Exception hierarchy for stageflow."""

from __future__ import annotations


class StageflowError(Exception):
    """Base class for all stageflow errors."""


class WorkflowConfigurationError(StageflowError, ValueError):
    """A workflow definition was rejected at registration time."""


class InvocationSyntaxError(StageflowError, ValueError):
    """A workflow invocation string could not be parsed."""


class UnknownWorkflowError(StageflowError, KeyError):
    """No workflow is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown workflow: {self.name!r}"


class InvalidOperationError(StageflowError, RuntimeError):
    """The controller cannot perform the operation in its current state."""


class WorkflowActiveError(InvalidOperationError):
    """A workflow was invoked while another one is still running."""


class ValueReferenceError(StageflowError, LookupError):
    """A ``!key`` argument referenced a value that was never accumulated."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No accumulated value named {self.key!r}"


class ValueTypeError(StageflowError, TypeError):
    """An accumulated value does not have the requested kind."""


class SuspensionStackEmptyError(StageflowError, IndexError):
    """Attempted to pop or inspect an empty suspension stack."""


class StageAlreadyFinishedError(StageflowError, RuntimeError):
    """A stage handle was finished more than once."""
