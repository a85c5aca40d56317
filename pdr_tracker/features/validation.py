"""
Petits outils partagés par les schémas : types de champs communs et
extraction des changements d'un payload partiel (PUT).
"""

from decimal import Decimal
from typing import Annotated, Any, Dict, Iterable

from pydantic import AfterValidator, BaseModel, Field, StringConstraints

from pdr_tracker.core.errors import ValidationFailedError

# Montant décimal (15, 2) ; les chaînes numériques ("1500.50") sont converties
Money = Annotated[Decimal, Field(max_digits=15, decimal_places=2)]
# Texte obligatoire, non vide une fois les espaces retirés
RequiredText = Annotated[str, Field(min_length=1)]

# bcrypt ne prend en compte que les 72 premiers octets
BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password cannot be longer than {BCRYPT_MAX_BYTES} bytes")
    return value


# Secret saisi tel quel : jamais de retrait des espaces
RawSecret = Annotated[str, StringConstraints(strip_whitespace=False)]
# Mot de passe à hasher : secret brut, limité à ce que bcrypt accepte
Password = Annotated[RawSecret, AfterValidator(_fits_bcrypt)]


class InputModel(BaseModel):
    """Base des payloads entrants : champs inconnus ignorés, espaces retirés."""
    model_config = {"extra": "ignore", "str_strip_whitespace": True}


def changes_from(payload: BaseModel, *, nullable: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Champs réellement envoyés dans un payload partiel.
    Un `null` explicite sur un champ non nullable est refusé champ par champ.
    """
    changes = payload.model_dump(exclude_unset=True)
    allowed_null = set(nullable)
    errors = [
        (field, "Field cannot be null")
        for field, value in changes.items()
        if value is None and field not in allowed_null
    ]
    if errors:
        raise ValidationFailedError(errors, message="Invalid data")
    return changes
