"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

UserCreateIn → corps de requête POST

UserUpdateIn → corps PUT

UserOut → réponse de l’API

🔹 Le mot de passe (ou son hash) n'apparaît dans aucun schéma de sortie.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from pdr_tracker.features.validation import InputModel, Password

RoleName = Literal["admin", "user", "superviseur"]


class UserCreateIn(InputModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: Password = Field(..., min_length=1)
    role: RoleName = "user"


class UserUpdateIn(InputModel):
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    # absent ou vide => mot de passe inchangé
    password: Optional[Password] = None
    role: Optional[RoleName] = None


class UserOut(BaseModel):
    id: int
    username: str
    role: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
