"""Shared constants."""

CANCEL_WORKFLOW_NAME = "__CancelRequest"
DEFAULT_CANCEL_CONTENT = "CancelRequest(error)"
DEFAULT_CONTINUE_KEY = "continue"
CANCEL_ERROR_ARGUMENT = "error"
