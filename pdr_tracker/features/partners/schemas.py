from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pdr_tracker.features.validation import InputModel, RequiredText


class PartnerCreateIn(InputModel):
    name: RequiredText = Field(..., examples=["Conseil Régional de l'Oriental"])
    type: RequiredText = Field(..., examples=["Collectivité territoriale"])


class PartnerUpdateIn(InputModel):
    name: Optional[RequiredText] = None
    type: Optional[RequiredText] = None


class PartnerOut(BaseModel):
    id: int
    name: str
    type: str
    created_at: datetime

    model_config = {"from_attributes": True}
