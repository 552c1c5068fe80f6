from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from lunaris_api.models.common import FormPayload


class SponsorshipFormPayload(FormPayload):
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    comment: Optional[str] = None


class SponsorshipFormRecord(BaseModel):
    id: int
    name: str
    email: str
    phone_number: str
    comment: str
    created_at: datetime
