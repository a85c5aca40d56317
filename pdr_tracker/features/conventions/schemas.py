from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from pdr_tracker.features.validation import InputModel, RequiredText
from pdr_tracker.features.projects.schemas import ProjectOut

ConventionStatus = Literal["pending", "signed", "adoption", "partners", "visa"]

# Catalogue des programmes proposés à la saisie (le champ reste du texte libre)
PROGRAMMES: List[str] = [
    "Programme de Développement Régional Oriental 2022-2027",
    "Programme de Développement Régional Casablanca-Settat 2022-2027",
    "Programme de Développement Régional Rabat-Salé-Kénitra 2022-2027",
]


# ---------- IN / UPDATE ----------

class ConventionCreateIn(InputModel):
    title: RequiredText = Field(..., examples=["Convention de partenariat pour la mise à niveau urbaine"])
    date_visa: Optional[date] = None
    status: ConventionStatus = Field(..., examples=["pending"])
    programme: RequiredText = Field(..., examples=[PROGRAMMES[0]])
    document_url: Optional[str] = None


class ConventionUpdateIn(InputModel):
    title: Optional[RequiredText] = None
    date_visa: Optional[date] = None
    status: Optional[ConventionStatus] = None
    programme: Optional[RequiredText] = None
    document_url: Optional[str] = None


class ConventionProjectCreateIn(InputModel):
    project_id: int = Field(..., ge=1)


# ---------- OUT ----------

class ConventionOut(BaseModel):
    id: int
    title: str
    date_visa: Optional[date]
    status: str
    programme: str
    document_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ConventionProjectOut(BaseModel):
    id: int
    convention_id: int
    project_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class ConventionProjectWithProjectOut(BaseModel):
    convention_project: ConventionProjectOut
    project: ProjectOut


class ConventionProjectWithConventionOut(BaseModel):
    convention_project: ConventionProjectOut
    convention: ConventionOut


class ProgrammeCatalogOut(BaseModel):
    programmes: List[str]
