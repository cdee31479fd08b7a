"""Workflow controller: runs stages, validates output, suspends and resumes."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .config import StageflowConfig, load_config
from .constants import CANCEL_ERROR_ARGUMENT
from .content import BaseContentDispatcher, StageHandle
from .contracts import (
    Invocation,
    WorkflowAcceptor,
    WorkflowDefinition,
    WorkflowInstance,
    WorkflowRedirector,
    WorkflowState,
    WorkflowValidator,
)
from .errors import InvalidOperationError, ValueTypeError, WorkflowActiveError
from .parsing import parse_invocation
from .registry import WorkflowRegistry
from .resolver import resolve_arguments
from .suspension import SuspensionStack
from .values import ValueMap

logger = logging.getLogger(__name__)


class WorkflowController:
    """Drives one workflow at a time through a content dispatcher.

    The controller is Idle when it has no current instance and Active while a
    stage is dispatched and waiting for its completion notification. A stage
    whose output is rejected suspends the workflow and opens the built-in
    cancel-confirmation workflow; a redirect suspends it and opens the target.
    Suspended workflows resume in LIFO order as the interrupting ones exit.

    All state is touched only from the thread that delivers stage
    completions.
    """

    def __init__(
        self,
        dispatcher: BaseContentDispatcher,
        registry: Optional[WorkflowRegistry] = None,
        config: Optional[StageflowConfig] = None,
        cancel_content: Optional[str] = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._registry = registry if registry is not None else WorkflowRegistry()
        self._config = (config or load_config()).controller
        self._current: Optional[WorkflowInstance] = None
        self._held = SuspensionStack()
        self._handle: Optional[StageHandle] = None

        self._registry.register(
            self._config.cancel_workflow,
            cancel_content or self._config.cancel_content,
            self._on_cancel_request_finish,
        )

    # ------------------------------------------------------------------
    @property
    def registry(self) -> WorkflowRegistry:
        return self._registry

    @property
    def dispatcher(self) -> BaseContentDispatcher:
        return self._dispatcher

    @property
    def current(self) -> Optional[WorkflowInstance]:
        return self._current

    @property
    def is_active(self) -> bool:
        return self._current is not None

    @property
    def suspended(self) -> Tuple[WorkflowInstance, ...]:
        """Suspended instances, most recent first."""
        return tuple(self._held)

    @property
    def cancel_workflow(self) -> str:
        return self._config.cancel_workflow

    def register(
        self,
        name: str,
        definition: str,
        acceptor: Optional[WorkflowAcceptor] = None,
        redirector: Optional[WorkflowRedirector] = None,
        validators: Optional[Sequence[Optional[WorkflowValidator]]] = None,
    ) -> WorkflowDefinition:
        """Register a workflow on this controller's registry."""
        return self._registry.register(name, definition, acceptor, redirector, validators)

    # ------------------------------------------------------------------
    def invoke(
        self, invocation: Union[str, Invocation], force: bool = False
    ) -> WorkflowInstance:
        """Start a workflow from ``name`` or ``name(key=value, ...)``.

        Args:
            invocation: Invocation string or an already parsed invocation.
            force: Replace the running workflow instead of failing.

        Raises:
            WorkflowActiveError: A workflow is running and ``force`` is false.
            UnknownWorkflowError: No workflow has the invoked name.
        """
        if self._current is not None and not force:
            raise WorkflowActiveError(
                f"Cannot invoke workflow: {self._current} is already active"
            )

        if isinstance(invocation, str):
            invocation = parse_invocation(invocation)
        self._registry.get(invocation.name)

        self._detach()
        self._current = WorkflowInstance(
            name=invocation.name, arguments=invocation.arguments
        )
        logger.info(f"Invoking workflow '{invocation}'")
        self._start_stage()
        return self._current

    # ------------------------------------------------------------------
    def _definition(self, instance: WorkflowInstance) -> WorkflowDefinition:
        return self._registry.get(instance.name)

    def _start_stage(self) -> None:
        """Dispatch the current instance's recorded stage and wait for it."""
        instance = self._current
        definition = self._definition(instance)
        arguments = resolve_arguments(definition.arguments[instance.stage], instance)
        self._dispatcher.activate(definition.stages[instance.stage], arguments)
        self._attach()

    def _attach(self) -> None:
        handle = self._dispatcher.current
        if handle is None:
            raise InvalidOperationError("Dispatcher did not expose the activated stage")
        handle.subscribe(self._on_stage_finished)
        self._handle = handle

    def _detach(self) -> None:
        if self._handle is not None:
            self._handle.unsubscribe(self._on_stage_finished)
            self._handle = None

    def _hold(self) -> None:
        self._held.push(self._current)
        logger.info(f"Holding workflow '{self._current.name}'")

    @staticmethod
    def _run_validator(
        validator: WorkflowValidator, output: Mapping[str, Any]
    ) -> Tuple[bool, str]:
        result = validator(output)
        if isinstance(result, bool):
            return result, ""
        valid, error = result
        return bool(valid), error or ""

    def _on_stage_finished(self, output: Dict[str, Any]) -> None:
        """Validate a stage's output and move the workflow forward."""
        self._detach()

        instance = self._current
        definition = self._definition(instance)
        name = definition.stage_name(instance.stage)

        valid, error = self._run_validator(definition.validators[instance.stage], output)
        if valid:
            try:
                staged = ValueMap(output)
            except ValueTypeError as exc:
                valid, error = False, str(exc)
        if not valid:
            logger.info(f"Stage {name}/{instance.stage} has invalid output: {error}")
            self._hold()
            self.invoke(
                Invocation(
                    name=self._config.cancel_workflow,
                    arguments={CANCEL_ERROR_ARGUMENT: error},
                ),
                force=True,
            )
            return

        logger.info(f"Stage {name}/{instance.stage} has valid output")
        instance.values.merge(staged)
        instance.stage += 1

        next_name = definition.stage_name(instance.stage)
        if next_name is not None:
            self._start_stage()

        if definition.redirector is not None:
            target = definition.redirector(instance.stage, next_name, valid, instance.values)
            if target is not None:
                redirect = parse_invocation(target)
                self._registry.get(redirect.name)
                logger.info(f"Stage {name}/{instance.stage} is redirecting to {target}")
                self._hold()
                self.invoke(redirect, force=True)
                return

        if instance.is_complete(definition):
            self._exit()

    def _exit(self) -> None:
        """Finish the current workflow, then resume the next suspended one.

        The acceptor's result is merged into the resumed instance. A resumed
        instance that was suspended after its last stage exits immediately,
        so this loops until a stage is dispatched or the stack is empty.
        """
        while True:
            finishing = self._current
            definition = self._definition(finishing)
            finishing.state = WorkflowState.FINISHED
            logger.info(f"Workflow '{finishing.name}' is exiting at stage {finishing.stage}")

            merge = definition.acceptor(finishing.values)

            if not self._held:
                self._current = None
                self._dispatcher.deactivate()
                logger.info("No held workflows, controller is idle")
                return

            resumed = self._held.pop()
            self._current = resumed
            resumed.values.merge(merge)
            logger.info(f"Restoring workflow '{resumed.name}' at stage {resumed.stage}")

            if not resumed.is_complete(self._definition(resumed)):
                self._start_stage()
                return

    def _on_cancel_request_finish(self, values: ValueMap) -> Optional[Mapping[str, Any]]:
        """Abandon the interrupted workflow when the user chose not to continue."""
        if values.check_equals(self._config.continue_key, False) and self._held:
            self._held.discard()
        return None
