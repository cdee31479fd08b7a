"""In-memory content dispatcher for tests and scripted runs."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

from ..errors import InvalidOperationError
from .base import BaseContentDispatcher, StageHandle

logger = logging.getLogger(__name__)


class InMemoryContentDispatcher(BaseContentDispatcher):
    """Records activations and lets the caller complete them."""

    def __init__(self) -> None:
        self.activations: List[Tuple[str, Optional[List[str]]]] = []
        self.deactivations = 0
        self._current: Optional[StageHandle] = None

    def activate(self, stage_name: str, arguments: Optional[List[str]] = None) -> None:
        self._current = StageHandle(stage_name, arguments)
        self.activations.append((stage_name, self._current.arguments))
        logger.debug(f"Activated stage '{stage_name}' with {arguments}")

    def deactivate(self) -> None:
        self._current = None
        self.deactivations += 1

    @property
    def current(self) -> Optional[StageHandle]:
        return self._current

    @property
    def last_activation(self) -> Optional[Tuple[str, Optional[List[str]]]]:
        return self.activations[-1] if self.activations else None

    def complete(self, output: Optional[Mapping[str, Any]] = None) -> None:
        """Finish the current stage with ``output``."""
        if self._current is None:
            raise InvalidOperationError("No active stage to complete")
        self._current.finish(output)
