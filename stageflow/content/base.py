"""Content dispatcher interface used by the workflow controller."""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..errors import StageAlreadyFinishedError

logger = logging.getLogger(__name__)

StageListener = Callable[[Dict[str, Any]], None]


class StageHandle:
    """One-shot completion notification for a dispatched stage."""

    def __init__(self, stage_name: str, arguments: Optional[Sequence[str]] = None) -> None:
        self.stage_name = stage_name
        self.arguments = None if arguments is None else list(arguments)
        self.finished = False
        self._listeners: List[StageListener] = []

    def subscribe(self, listener: StageListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: StageListener) -> None:
        """Remove ``listener``; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def finish(self, output: Optional[Mapping[str, Any]] = None) -> None:
        """Deliver the stage output to every current subscriber."""
        if self.finished:
            raise StageAlreadyFinishedError(f"Stage '{self.stage_name}' already finished")
        self.finished = True
        payload = dict(output or {})
        for listener in list(self._listeners):
            listener(payload)

    def __repr__(self) -> str:
        return f"StageHandle({self.stage_name!r}, {self.arguments!r})"


class BaseContentDispatcher(metaclass=abc.ABCMeta):
    """Abstract collaborator that shows stages to the user."""

    @abc.abstractmethod
    def activate(self, stage_name: str, arguments: Optional[List[str]] = None) -> None:
        """Begin the named stage with resolved arguments."""
        raise NotImplementedError

    @abc.abstractmethod
    def deactivate(self) -> None:
        """Clear whatever the last stage displayed."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def current(self) -> Optional[StageHandle]:
        """Handle of the most recently activated stage."""
        raise NotImplementedError
