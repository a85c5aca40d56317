from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pdr_tracker.features.validation import InputModel, Money


class FinancialAdvanceCreateIn(InputModel):
    # project_id vient du chemin /projects/{id}/financial-advances
    reference_date: date = Field(..., examples=["2024-06-30"])
    engagement: Money = Field(..., examples=["120000.00"])
    payment: Money = Field(..., examples=["80000.00"])


class FinancialAdvanceUpdateIn(InputModel):
    reference_date: Optional[date] = None
    engagement: Optional[Money] = None
    payment: Optional[Money] = None


class FinancialAdvanceOut(BaseModel):
    id: int
    project_id: int
    reference_date: date
    engagement: Decimal
    payment: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
