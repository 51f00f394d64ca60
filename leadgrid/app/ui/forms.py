from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FormStatus(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class DraftForm:
    """A create/edit form that stays open with its values until the store accepts it."""

    values: dict[str, Any] = field(default_factory=dict)
    status: FormStatus = FormStatus.IDLE
    field_errors: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None
    record_id: Any = None

    @property
    def is_open(self) -> bool:
        return self.status is not FormStatus.SUCCESS

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    def set_value(self, name: str, value: Any) -> None:
        self.values[name] = value
        self.field_errors.pop(name, None)
        self.status = FormStatus.DIRTY


LEAD_DEFAULTS: dict[str, Any] = {
    "name": "",
    "company": "",
    "email": "",
    "source": "",
    "score": 0,
    "status": "New",
}


def new_lead_draft() -> DraftForm:
    return DraftForm(values=dict(LEAD_DEFAULTS))


def lead_edit_draft(lead: dict[str, Any]) -> DraftForm:
    values = {key: lead.get(key, default) for key, default in LEAD_DEFAULTS.items()}
    return DraftForm(values=values, record_id=lead.get("id"))


def conversion_draft(lead: dict[str, Any]) -> DraftForm:
    """Prefill a new opportunity from the lead being converted."""
    return DraftForm(
        values={
            "name": f"{lead['name']} - Opportunity" if lead.get("name") else "",
            "stage": "Prospecting",
            "amount": None,
            "accountName": lead.get("company") or "",
        },
        record_id=lead.get("id"),
    )
