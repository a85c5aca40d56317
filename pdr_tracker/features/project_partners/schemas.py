from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pdr_tracker.features.validation import InputModel, Money, RequiredText
from pdr_tracker.features.partners.schemas import PartnerOut


class ProjectPartnerCreateIn(InputModel):
    # project_id vient du chemin /projects/{id}/partners
    partner_id: int = Field(..., ge=1)
    year: int = Field(..., ge=1900, le=2100, examples=[2024])
    planned_contribution: Money = Field(..., examples=["250000.00"])
    actual_contribution: Money = Decimal("0")
    status: RequiredText = "pending"


class ProjectPartnerUpdateIn(InputModel):
    partner_id: Optional[int] = Field(None, ge=1)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    planned_contribution: Optional[Money] = None
    actual_contribution: Optional[Money] = None
    status: Optional[RequiredText] = None


class ProjectPartnerOut(BaseModel):
    id: int
    project_id: int
    partner_id: int
    year: int
    planned_contribution: Decimal
    actual_contribution: Decimal
    status: str

    model_config = {"from_attributes": True}


class ProjectPartnerWithPartnerOut(BaseModel):
    project_partner: ProjectPartnerOut
    partner: PartnerOut
