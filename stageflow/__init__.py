"""Stageflow: multi-stage interactive workflow controller."""

from .config import StageflowConfig, load_config
from .content import BaseContentDispatcher, InMemoryContentDispatcher, StageHandle, get_dispatcher
from .contracts import (
    Invocation,
    ParsedDefinition,
    WorkflowDefinition,
    WorkflowInstance,
    WorkflowState,
    always_valid,
    identity_acceptor,
)
from .controller import WorkflowController
from .errors import (
    InvalidOperationError,
    StageflowError,
    UnknownWorkflowError,
    ValueReferenceError,
    ValueTypeError,
    WorkflowActiveError,
    WorkflowConfigurationError,
)
from .parsing import parse_definition, parse_invocation
from .registry import WorkflowRegistry, load_registry
from .resolver import resolve_arguments
from .suspension import SuspensionStack
from .values import ValueMap

__version__ = "0.1.0"
__all__ = [
    "BaseContentDispatcher",
    "InMemoryContentDispatcher",
    "StageHandle",
    "get_dispatcher",
    "Invocation",
    "ParsedDefinition",
    "WorkflowDefinition",
    "WorkflowInstance",
    "WorkflowState",
    "always_valid",
    "identity_acceptor",
    "WorkflowController",
    "StageflowError",
    "WorkflowConfigurationError",
    "UnknownWorkflowError",
    "InvalidOperationError",
    "WorkflowActiveError",
    "ValueReferenceError",
    "ValueTypeError",
    "parse_definition",
    "parse_invocation",
    "WorkflowRegistry",
    "load_registry",
    "resolve_arguments",
    "SuspensionStack",
    "ValueMap",
    "StageflowConfig",
    "load_config",
]
