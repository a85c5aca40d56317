from decimal import Decimal

from sqlmodel import Field

from .base import IdModelDB, money_field


class ProjectPartner(IdModelDB, table=True):
    """
    Contribution d'un partenaire à un projet pour une année.
    Pas de contrainte d'unicité sur (project_id, partner_id, year) :
    plusieurs tranches la même année restent possibles.
    """
    __tablename__ = "project_partners"

    project_id: int = Field(index=True, foreign_key="projects.id")
    partner_id: int = Field(index=True, foreign_key="partners.id")
    year: int
    planned_contribution: Decimal = money_field()
    actual_contribution: Decimal = money_field(Decimal("0"))
    status: str = Field(default="pending")
