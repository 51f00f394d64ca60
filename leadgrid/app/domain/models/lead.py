from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from leadgrid.app.domain.errors import ValidationFailure

LEAD_STATUSES = ("New", "Contacted", "Qualified", "Converted", "Lost")
CONVERTED_STATUS = "Converted"
LOST_STATUS = "Lost"


class LeadForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    company: str = Field(min_length=1)
    email: EmailStr
    source: str = Field(min_length=1)
    score: int = Field(ge=0, le=100)
    status: str = Field(default="New", min_length=1)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        if value not in LEAD_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(LEAD_STATUSES)}")
        return value


def validate_lead(values: dict[str, Any]) -> dict[str, Any]:
    try:
        return LeadForm.model_validate(values).model_dump()
    except ValidationError as exc:
        raise validation_failure(exc) from exc


def validate_lead_field(record: dict[str, Any], field: str, value: Any) -> Any:
    """Validate one inline-edited lead field in the context of its record.

    Only errors on the edited field are reported; problems already present in
    other fields of the stored record do not block the edit.
    """
    if field not in LeadForm.model_fields:
        raise ValidationFailure(code="VALIDATION_ERROR", message=f"Unknown lead field: {field}", details={field: "Unknown field"})
    candidate = {key: item for key, item in record.items() if key in LeadForm.model_fields}
    candidate[field] = value
    try:
        form = LeadForm.model_validate(candidate)
    except ValidationError as exc:
        failure = validation_failure(exc)
        message = failure.field_errors.get(field)
        if message is not None:
            raise ValidationFailure(
                code="VALIDATION_ERROR",
                message=f"{field}: {message}",
                details={field: message},
            ) from exc
        return value
    return getattr(form, field)


def validation_failure(exc: ValidationError) -> ValidationFailure:
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
        field_errors.setdefault(field, str(error.get("msg", "Invalid value")))
    first = next(iter(field_errors.items()), ("__root__", "Invalid value"))
    return ValidationFailure(
        code="VALIDATION_ERROR",
        message=f"{first[0]}: {first[1]}",
        details=field_errors,
    )
