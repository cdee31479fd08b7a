"""LIFO stack of interrupted workflow instances."""

from __future__ import annotations

import logging
from typing import Iterator, List

from .contracts import WorkflowInstance
from .errors import SuspensionStackEmptyError

logger = logging.getLogger(__name__)


class SuspensionStack:
    """Holds workflows that are in progress but not currently running.

    An instance is pushed when its stage output is rejected or a redirect
    diverts it, and popped when the interrupting workflow exits.
    """

    def __init__(self) -> None:
        self._entries: List[WorkflowInstance] = []

    def push(self, instance: WorkflowInstance) -> None:
        self._entries.append(instance)
        logger.debug(f"Suspended {instance} (depth {len(self._entries)})")

    def pop(self) -> WorkflowInstance:
        if not self._entries:
            raise SuspensionStackEmptyError("No suspended workflow to resume")
        instance = self._entries.pop()
        logger.debug(f"Popped {instance} (depth {len(self._entries)})")
        return instance

    def peek(self) -> WorkflowInstance:
        if not self._entries:
            raise SuspensionStackEmptyError("No suspended workflow")
        return self._entries[-1]

    def discard(self) -> WorkflowInstance:
        """Pop the top instance without resuming it."""
        instance = self.pop()
        logger.info(f"Abandoned suspended workflow '{instance.name}'")
        return instance

    def clear(self) -> None:
        self._entries.clear()

    @property
    def depth(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[WorkflowInstance]:
        """Iterate from the most recently suspended instance down."""
        return reversed(list(self._entries))
