"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les comptes locaux du back-office (admin, user, superviseur).

Le mot de passe n'est jamais stocké en clair : seul le hash bcrypt est persisté.
"""

from sqlmodel import Field

from .base import BaseModelDB


class LocalUser(BaseModelDB, table=True):
    __tablename__ = "local_users"

    username: str = Field(index=True, unique=True)
    hashed_password: str
    role: str = Field(default="user")  # admin | user | superviseur
