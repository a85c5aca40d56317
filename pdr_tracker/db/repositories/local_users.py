"""
➡️ But : Encapsuler toutes les opérations de base de données.

LocalUserRepository : CRUD (create, read, update, delete) sur la table local_users.

Ne contient aucune logique métier, juste de la persistance.
"""

from __future__ import annotations

from typing import Optional, Sequence
from sqlmodel import select

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.local_users import LocalUser

class LocalUserRepository(BaseRepository[LocalUser]):
    """
    Repository pour la table local_users.
    Hérite du CRUD générique de BaseRepository.
    Contient uniquement les requêtes spécifiques aux comptes.
    """
    model = LocalUser

    def get_by_username(self, username: str) -> Optional[LocalUser]:
        """Retourne un utilisateur par son nom d'utilisateur."""
        return self.session.exec(
            select(self.model).where(self.model.username == username)
        ).first()

    def list_by_username(self) -> Sequence[LocalUser]:
        return self.session.exec(select(self.model).order_by(self.model.username.asc())).all()
