from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from lunaris_api.models.common import FormPayload


class InterestFormPayload(FormPayload):
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    program: Optional[str] = None


class InterestFormRecord(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    program: str
    created_at: datetime
