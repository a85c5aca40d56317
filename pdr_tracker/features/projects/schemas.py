"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

ProjectCreateIn → corps de requête POST (tous les champs obligatoires présents)

ProjectUpdateIn → corps PUT (tous les champs optionnels, validés de la même façon)

ProjectOut → réponse de l’API
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from pdr_tracker.features.validation import InputModel, Money, RequiredText

ProjectStatus = Literal["active", "inactive", "suspended", "cancelled"]
ProjectSortColumn = Literal["identifier", "title", "axis", "domain", "budget", "created_at"]
SortOrder = Literal["asc", "desc"]


class ProjectCreateIn(InputModel):
    identifier: RequiredText = Field(..., examples=["PDR-OR-2023-001"])
    title: RequiredText = Field(..., examples=["Aménagement de la route provinciale RP 6012"])
    axis: RequiredText
    domain: RequiredText
    region: RequiredText
    province: RequiredText
    commune: RequiredText
    budget: Money = Field(..., examples=["1500000.00"])
    engagements: Money = Decimal("0")
    payments: Money = Decimal("0")
    physical_progress: int = Field(0, ge=0, le=100)
    status: ProjectStatus = "active"


class ProjectUpdateIn(InputModel):
    # identifier n'est accepté que s'il est inchangé (vérifié par le service)
    identifier: Optional[RequiredText] = None
    title: Optional[RequiredText] = None
    axis: Optional[RequiredText] = None
    domain: Optional[RequiredText] = None
    region: Optional[RequiredText] = None
    province: Optional[RequiredText] = None
    commune: Optional[RequiredText] = None
    budget: Optional[Money] = None
    engagements: Optional[Money] = None
    payments: Optional[Money] = None
    physical_progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[ProjectStatus] = None


class ProjectOut(BaseModel):
    id: int
    identifier: str
    title: str
    axis: str
    domain: str
    region: str
    province: str
    commune: str
    budget: Decimal
    engagements: Decimal
    payments: Decimal
    physical_progress: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
