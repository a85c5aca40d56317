from datetime import date
from decimal import Decimal

from sqlmodel import Field

from .base import CreatedModelDB, money_field


class FinancialAdvance(CreatedModelDB, table=True):
    """Un décaissement (engagement + paiement) sur un projet à une date donnée."""
    __tablename__ = "financial_advances"

    project_id: int = Field(index=True, foreign_key="projects.id")
    reference_date: date
    engagement: Decimal = money_field()
    payment: Decimal = money_field()
