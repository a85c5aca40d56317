from decimal import Decimal

from sqlmodel import Field

from .base import BaseModelDB, money_field


class Project(BaseModelDB, table=True):
    __tablename__ = "projects"

    identifier: str = Field(index=True, unique=True)
    title: str = Field(index=True)
    axis: str
    domain: str
    region: str
    province: str
    commune: str
    budget: Decimal = money_field()
    engagements: Decimal = money_field(Decimal("0"))
    payments: Decimal = money_field(Decimal("0"))
    physical_progress: int = Field(default=0)
    status: str = Field(default="active")  # active | inactive | suspended | cancelled
