"""Shared error codes and user-facing messages."""

from __future__ import annotations

from typing import Any

CAPTURE_FAILED = "CAPTURE_FAILED"
CATALOG_LOAD_FAILED = "CATALOG_LOAD_FAILED"
NO_TEXT_AVAILABLE = "NO_TEXT_AVAILABLE"
TEXT_TOO_LONG = "TEXT_TOO_LONG"
ACTION_EXECUTION_FAILED = "ACTION_EXECUTION_FAILED"
AUTH_FAILED = "AUTH_FAILED"
NETWORK_ERROR = "NETWORK_ERROR"
PROVIDER_ERROR = "PROVIDER_ERROR"
UNSUPPORTED_ACTION = "UNSUPPORTED_ACTION"

ERROR_MESSAGES = {
    CAPTURE_FAILED: "Could not read the clipboard or selection.",
    CATALOG_LOAD_FAILED: "Could not load commands.",
    NO_TEXT_AVAILABLE: "No text selected. Please select text first.",
    TEXT_TOO_LONG: "Can't do more than 250 characters, open widget instead.",
    ACTION_EXECUTION_FAILED: "Action failed.",
    AUTH_FAILED: "API key is invalid.",
    NETWORK_ERROR: "Network failed, please retry.",
    PROVIDER_ERROR: "Provider response is invalid.",
    UNSUPPORTED_ACTION: "Unknown action type.",
}


class ProviderError(Exception):
    """Raised by the action executor when the backend fails."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def error_message(value: Any) -> str:
    """Pull a readable message out of a thrown value or error payload."""
    for name in ("message", "error"):
        if isinstance(value, dict):
            found = value.get(name)
        else:
            found = getattr(value, name, None)
        if found:
            return str(found)
    return str(value)
