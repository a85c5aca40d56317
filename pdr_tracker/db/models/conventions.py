from datetime import date
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class Convention(BaseModelDB, table=True):
    __tablename__ = "conventions"

    title: str
    date_visa: Optional[date] = None
    status: str  # pending | signed | adoption | partners | visa
    programme: str
    # URL du document stocké à l'extérieur (le stockage n'est pas géré ici)
    document_url: Optional[str] = Field(default=None)
