"""Core data contracts for stageflow workflows."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .values import ValueMap

ValidationResult = Union[bool, Tuple[bool, Optional[str]]]

# validator(output) -> (valid, error message)
WorkflowValidator = Callable[[Mapping[str, Any]], ValidationResult]

# acceptor(values) -> data to merge into the resumed workflow, or None
WorkflowAcceptor = Callable[[ValueMap], Optional[Mapping[str, Any]]]

# redirector(stage index, next stage name, valid, values) -> target invocation or None
WorkflowRedirector = Callable[[int, Optional[str], bool, ValueMap], Optional[str]]


def always_valid(output: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
    """Validator that accepts any output."""
    return True, ""


def identity_acceptor(values: ValueMap) -> Optional[Mapping[str, Any]]:
    """Acceptor that contributes nothing to the resumed workflow."""
    return None


class WorkflowState(str, Enum):
    """Lifecycle marker of a workflow instance.

    ``WAITING_FOR_REDIRECTS`` is reserved: no controller transition enters or
    leaves it.
    """

    RUNNING = "running"
    WAITING_FOR_REDIRECTS = "waiting_for_redirects"
    FINISHED = "finished"


class Invocation(BaseModel):
    """A parsed ``name(key=value, ...)`` workflow invocation."""

    name: str
    arguments: Optional[Dict[str, str]] = None

    def __str__(self) -> str:
        if self.arguments is None:
            return self.name
        pairs = ", ".join(f"{k}={v}" for k, v in self.arguments.items())
        return f"{self.name}({pairs})"


class ParsedDefinition(BaseModel):
    """Ordered stage names with their raw argument tokens."""

    stages: List[str] = Field(default_factory=list)
    arguments: List[Optional[List[str]]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.stages)


class WorkflowDefinition(BaseModel):
    """A registered workflow. Immutable once built by the registry."""

    model_config = ConfigDict(frozen=True)

    name: str
    stages: Tuple[str, ...]
    arguments: Tuple[Optional[Tuple[str, ...]], ...]
    validators: Tuple[WorkflowValidator, ...]
    acceptor: WorkflowAcceptor = Field(default=identity_acceptor)
    redirector: Optional[WorkflowRedirector] = None

    @property
    def stage_count(self) -> int:
        return len(self.stages)

    def stage_name(self, index: int) -> Optional[str]:
        """Name of the stage at ``index``, or ``None`` at the completion index."""
        if 0 <= index < len(self.stages):
            return self.stages[index]
        return None


class WorkflowInstance(BaseModel):
    """One live or suspended execution of a workflow."""

    name: str
    stage: int = 0
    state: WorkflowState = WorkflowState.RUNNING
    arguments: Optional[Dict[str, str]] = None
    values: ValueMap = Field(default_factory=ValueMap)

    def is_complete(self, definition: WorkflowDefinition) -> bool:
        """Return ``True`` once every stage of ``definition`` has finished."""
        return self.stage >= definition.stage_count

    def __str__(self) -> str:
        return f"{self.name}@{self.stage}"
