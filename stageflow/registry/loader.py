"""Load workflow registrations from a YAML file.

Example::

    workflows:
      - name: Signup
        definition: "Intro;Form(name, :Sign up);Confirm(!name)"
        acceptor: myapp.hooks:accept_signup
        validators: [null, "myapp.hooks:check_form", null]

Hooks are ``module:attribute`` import paths; ``null`` selects the default.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, Field

from ..errors import WorkflowConfigurationError
from .workflows import WorkflowRegistry

logger = logging.getLogger(__name__)


class WorkflowEntry(BaseModel):
    """One workflow as declared in a registry file."""

    name: str
    definition: str
    acceptor: Optional[str] = None
    redirector: Optional[str] = None
    validators: List[Optional[str]] = Field(default_factory=list)


class RegistryFile(BaseModel):
    """Root document of a registry file."""

    workflows: List[WorkflowEntry] = Field(default_factory=list)


def import_object(path: str) -> Any:
    """Import ``module:attribute`` (or ``module.attribute``) and return the attribute."""
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise WorkflowConfigurationError(f"Invalid hook path {path!r}")

    try:
        module = importlib.import_module(module_name)
        obj = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise WorkflowConfigurationError(f"Failed to import hook {path!r}: {e}") from e

    if not callable(obj):
        raise WorkflowConfigurationError(f"Hook {path!r} is not callable")
    return obj


def _optional_hook(path: Optional[str]) -> Any:
    return import_object(path) if path else None


def load_registry(
    path: Union[str, Path], registry: Optional[WorkflowRegistry] = None
) -> WorkflowRegistry:
    """Register every workflow declared in the YAML file at ``path``."""
    registry = registry if registry is not None else WorkflowRegistry()

    with open(path) as f:
        data = yaml.safe_load(f) or {}
    document = RegistryFile.model_validate(data)

    for entry in document.workflows:
        registry.register(
            entry.name,
            entry.definition,
            acceptor=_optional_hook(entry.acceptor),
            redirector=_optional_hook(entry.redirector),
            validators=[_optional_hook(v) for v in entry.validators],
        )

    logger.info(f"Loaded {len(document.workflows)} workflows from {path}")
    return registry
