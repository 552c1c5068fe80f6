from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

MISSING_FIELDS_MESSAGE = "All fields are required"
SUBMIT_ERROR_MESSAGE = "Error submitting form. Please try again later."
LIST_ERROR_MESSAGE = "Internal server error"


class FormPayload(BaseModel):
    """
    Base for submitted forms.

    Every field is optional at parse time so that a missing field yields the
    "All fields are required" response instead of a 422.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (bool, int, float)):
            return str(value)
        # Lists/objects are not valid answers for a text field.
        return None

    def missing_fields(self) -> List[str]:
        return [name for name, value in self if not value]

    def field_values(self) -> Dict[str, str]:
        return self.model_dump()


class SubmissionResponse(BaseModel):
    success: bool
    message: str
    id: Optional[int] = None
