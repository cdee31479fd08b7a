"""Workflow registry and registry-file loading."""

from __future__ import annotations

from .loader import RegistryFile, WorkflowEntry, import_object, load_registry
from .workflows import WorkflowRegistry

__all__ = [
    "WorkflowRegistry",
    "RegistryFile",
    "WorkflowEntry",
    "import_object",
    "load_registry",
]
