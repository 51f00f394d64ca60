from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from leadgrid.app.domain.models.lead import validation_failure

OPPORTUNITY_STAGES = (
    "Prospecting",
    "Qualification",
    "Proposal",
    "Negotiation",
    "Closed Won",
    "Closed Lost",
    "Converted Lead",
)
CONVERTED_LEAD_STAGE = "Converted Lead"


class OpportunityForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    stage: str = Field(min_length=1)
    amount: float | None = Field(default=None, ge=0)
    accountName: str = Field(min_length=1)

    @field_validator("stage")
    @classmethod
    def _known_stage(cls, value: str) -> str:
        if value not in OPPORTUNITY_STAGES:
            raise ValueError(f"Stage must be one of: {', '.join(OPPORTUNITY_STAGES)}")
        return value


def validate_opportunity(values: dict[str, Any]) -> dict[str, Any]:
    try:
        form = OpportunityForm.model_validate(values)
    except ValidationError as exc:
        raise validation_failure(exc) from exc
    payload = form.model_dump()
    if payload["amount"] is None:
        payload.pop("amount")
    return payload


def converted_lead_to_opportunity(lead: dict[str, Any]) -> dict[str, Any]:
    """Projection rule: show a converted lead as an opportunity row."""
    return {
        "id": lead.get("id"),
        "name": lead.get("name"),
        "stage": CONVERTED_LEAD_STAGE,
        "amount": None,
        "accountName": lead.get("company"),
    }
