"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel. Ici on représente les propriétés
communes des tables : identifiant et horodatages.

Toutes les dates sont en UTC "naïf" : SQLite ne conserve pas le fuseau, on
compare donc toujours des datetimes sans tzinfo.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def datetime_field(**kwargs):
    """Colonne datetime sans fuseau : les valeurs sont en UTC naïf (cf. utcnow)."""
    return Field(sa_type=DateTime(timezone=False), **kwargs)


def money_field(default: Optional[Decimal] = None):
    """Colonne décimale (15, 2) pour les montants."""
    if default is None:
        return Field(max_digits=15, decimal_places=2)
    return Field(default=default, max_digits=15, decimal_places=2)


class IdModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)


class CreatedModelDB(IdModelDB, table=False):
    created_at: datetime = datetime_field(default_factory=utcnow)


class BaseModelDB(CreatedModelDB, table=False):
    updated_at: datetime = datetime_field(default_factory=utcnow)
