"""Settings for the workflow controller, read from YAML."""

from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

from .constants import (
    CANCEL_WORKFLOW_NAME,
    DEFAULT_CANCEL_CONTENT,
    DEFAULT_CONTINUE_KEY,
)


class ControllerConfig(BaseModel):
    """Settings for the built-in cancel-confirmation workflow."""

    cancel_workflow: str = CANCEL_WORKFLOW_NAME
    cancel_content: str = DEFAULT_CANCEL_CONTENT
    continue_key: str = DEFAULT_CONTINUE_KEY


class DispatcherConfig(BaseModel):
    """Content dispatcher selection."""

    backend: Literal["inmemory", "console"] = "inmemory"


class StageflowConfig(BaseModel):
    """Top-level configuration model."""

    controller: ControllerConfig = ControllerConfig()
    dispatcher: DispatcherConfig = DispatcherConfig()
    registry_file: Optional[str] = None
    log_level: str = "WARNING"


def load_config(path: Optional[str] = None) -> StageflowConfig:
    """Read controller and dispatcher settings.

    The YAML document comes from ``path``, then ``STAGEFLOW_CONFIG``, then
    ``stageflow.yaml`` in the working directory; defaults apply when none
    exists. ``STAGEFLOW_REGISTRY`` replaces ``registry_file``.
    """
    config_path = path or os.getenv("STAGEFLOW_CONFIG", "stageflow.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = StageflowConfig(**data)
    else:
        config = StageflowConfig()

    env_registry = os.getenv("STAGEFLOW_REGISTRY")
    if env_registry:
        config.registry_file = env_registry
    return config
