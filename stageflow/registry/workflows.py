"""In-memory table of registered workflow definitions."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from ..contracts import (
    WorkflowAcceptor,
    WorkflowDefinition,
    WorkflowRedirector,
    WorkflowValidator,
    always_valid,
    identity_acceptor,
)
from ..errors import UnknownWorkflowError, WorkflowConfigurationError
from ..parsing import parse_definition

logger = logging.getLogger(__name__)


class WorkflowRegistry:
    """Stores named workflow definitions.

    A registry is owned by whoever builds the controller; there is no
    process-wide instance.
    """

    def __init__(self) -> None:
        self._workflows: Dict[str, WorkflowDefinition] = {}

    def register(
        self,
        name: str,
        definition: str,
        acceptor: Optional[WorkflowAcceptor] = None,
        redirector: Optional[WorkflowRedirector] = None,
        validators: Optional[Sequence[Optional[WorkflowValidator]]] = None,
    ) -> WorkflowDefinition:
        """Parse ``definition`` and store it under ``name``.

        Args:
            name: Unique workflow name.
            definition: ``stage;stage(arg, :const, !value);...`` string.
            acceptor: Called with the accumulated values on completion.
            redirector: Consulted after every valid stage.
            validators: One validator per stage. ``None`` or an empty list
                accepts every stage; ``None`` entries are filled with
                :func:`always_valid`.

        Raises:
            WorkflowConfigurationError: Empty name, no stages, or a validator
                count that does not match the stage count.
        """
        if not name:
            raise WorkflowConfigurationError("Invalid workflow name")

        parsed = parse_definition(definition)
        if len(parsed) == 0:
            raise WorkflowConfigurationError(
                f"Workflow {name!r} must have at least one stage"
            )

        if not validators:
            validators = [None] * len(parsed)
        if len(validators) != len(parsed):
            raise WorkflowConfigurationError(
                f"Workflow {name!r} has {len(parsed)} stages but "
                f"{len(validators)} validators"
            )

        workflow = WorkflowDefinition(
            name=name,
            stages=tuple(parsed.stages),
            arguments=tuple(
                None if args is None else tuple(args) for args in parsed.arguments
            ),
            validators=tuple(v if v is not None else always_valid for v in validators),
            acceptor=acceptor or identity_acceptor,
            redirector=redirector,
        )

        if name in self._workflows:
            logger.warning(f"Replacing existing workflow '{name}'")
        self._workflows[name] = workflow
        logger.debug(f"Registered workflow '{name}' with stages {list(workflow.stages)}")
        return workflow

    def get(self, name: str) -> WorkflowDefinition:
        try:
            return self._workflows[name]
        except KeyError:
            raise UnknownWorkflowError(name) from None

    def names(self) -> List[str]:
        return list(self._workflows)

    def __contains__(self, name: object) -> bool:
        return name in self._workflows

    def __len__(self) -> int:
        return len(self._workflows)

    def __iter__(self) -> Iterator[WorkflowDefinition]:
        return iter(list(self._workflows.values()))
