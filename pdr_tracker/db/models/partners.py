from sqlmodel import Field

from .base import CreatedModelDB


class Partner(CreatedModelDB, table=True):
    __tablename__ = "partners"

    name: str = Field(index=True)
    type: str
