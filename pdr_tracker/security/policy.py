"""
➡️ But : Décrire QUI peut faire QUOI, sous forme de données.

La table POLICY associe chaque rôle à l'ensemble des classes d'opérations
qu'il peut effectuer. Une seule fonction, authorize(), la consulte.

Pur Python : pas d'import FastAPI, pas d'accès base.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"
    SUPERVISEUR = "superviseur"


class Operation(str, Enum):
    READ_RECORDS = "read_records"        # projets, conventions, partenaires, liaisons
    READ_FINANCIAL = "read_financial"    # avances financières
    WRITE_RECORDS = "write_records"      # create / update / delete des données métier
    MANAGE_USERS = "manage_users"        # comptes LocalUser


POLICY: Dict[Role, FrozenSet[Operation]] = {
    Role.ADMIN: frozenset({
        Operation.READ_RECORDS,
        Operation.READ_FINANCIAL,
        Operation.WRITE_RECORDS,
        Operation.MANAGE_USERS,
    }),
    Role.USER: frozenset({
        Operation.READ_RECORDS,
        Operation.READ_FINANCIAL,
        Operation.WRITE_RECORDS,
    }),
    Role.SUPERVISEUR: frozenset({
        Operation.READ_RECORDS,
        Operation.READ_FINANCIAL,
    }),
}


@dataclass(frozen=True)
class Principal:
    """Identité authentifiée rattachée à la requête courante."""
    user_id: int
    username: str
    role: str


def authorize(role: Optional[str], operation: Operation) -> bool:
    """True si le rôle figure dans la table pour cette opération. Rôle inconnu => rien."""
    try:
        allowed = POLICY[Role(role)]
    except ValueError:
        return False
    return operation in allowed
