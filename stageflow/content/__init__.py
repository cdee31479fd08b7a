"""Content dispatcher factory and implementations."""

from __future__ import annotations

import os
from typing import Optional

from ..config import StageflowConfig, load_config
from .base import BaseContentDispatcher, StageHandle
from .inmemory import InMemoryContentDispatcher


def get_dispatcher(
    backend: Optional[str] = None, config: Optional[StageflowConfig] = None
) -> BaseContentDispatcher:
    """Build the dispatcher named by ``backend``, ``STAGEFLOW_DISPATCHER`` or the config."""

    config = config or load_config()
    backend = (
        backend
        or os.getenv("STAGEFLOW_DISPATCHER")
        or config.dispatcher.backend
    ).lower()

    if backend == "inmemory":
        return InMemoryContentDispatcher()
    elif backend == "console":
        from .console import ConsoleContentDispatcher

        return ConsoleContentDispatcher()
    else:
        raise ValueError(f"Unsupported dispatcher backend: {backend}")


__all__ = [
    "BaseContentDispatcher",
    "InMemoryContentDispatcher",
    "StageHandle",
    "get_dispatcher",
]
