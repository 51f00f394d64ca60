from __future__ import annotations

from typing import Any

from leadgrid.app.domain.errors import FetchFailure, MutationFailure, TableError, ValidationFailure

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class ErrorMapper:
    _CATEGORIES = (
        (ValidationFailure, "validation", "Fix the highlighted fields and submit again."),
        (FetchFailure, "fetch", "Reload the table to try again."),
        (MutationFailure, "mutation", "The table was reloaded; review the row and retry."),
    )

    _KNOWN_CODES = {
        "NETWORK_ERROR": "Cannot reach the CRM store. Check the connection and retry.",
        "NOT_FOUND": "The record no longer exists.",
        "EDIT_IN_FLIGHT": "This cell is still being saved.",
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict[str, Any]:
        if isinstance(error, TableError):
            category, suggestion = "internal", "Retry, and report the trace_id if it keeps failing."
            for kind, name, hint in cls._CATEGORIES:
                if isinstance(error, kind):
                    category, suggestion = name, hint
                    break
            return {
                "category": category,
                "code": error.code,
                "message": cls._KNOWN_CODES.get(error.code, error.message) or UNEXPECTED_ERROR_MESSAGE,
                "details": error.details,
                "trace_id": error.trace_id,
                "suggestion": suggestion,
            }
        message = getattr(error, "message", None)
        return {
            "category": "internal",
            "code": "INTERNAL_ERROR",
            "message": message if isinstance(message, str) and message else UNEXPECTED_ERROR_MESSAGE,
            "details": None,
            "trace_id": None,
            "suggestion": "Retry, and report the trace_id if it keeps failing.",
        }

    @classmethod
    def to_display_message(cls, error: Exception) -> str:
        payload = cls.to_payload(error)
        trace = f" (trace_id={payload['trace_id']})" if payload["trace_id"] else ""
        return f"[{payload['code']}] {payload['message']}{trace}"
