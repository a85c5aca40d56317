"""
➡️ But : Contenir la logique métier des comptes locaux.

UserService : unicité du nom d'utilisateur, hash du mot de passe,
révocation des sessions quand le rôle ou le mot de passe change.
"""

import logging
from typing import Optional, Sequence

from pdr_tracker.core.errors import ConflictError, NotFoundError
from pdr_tracker.db.models.base import utcnow
from pdr_tracker.db.models.local_users import LocalUser
from pdr_tracker.db.repositories.local_users import LocalUserRepository
from pdr_tracker.db.repositories.sessions import AuthSessionRepository
from pdr_tracker.features.users.schemas import UserCreateIn, UserUpdateIn
from pdr_tracker.features.validation import changes_from
from pdr_tracker.security.passwords import hash_password, verify_password
from pdr_tracker.security.policy import Principal

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repo: LocalUserRepository, session_repo: AuthSessionRepository):
        self.repo = repo
        self.session_repo = session_repo

    def list(self) -> Sequence[LocalUser]:
        return self.repo.list_by_username()

    def get(self, user_id: int) -> LocalUser:
        user = self.repo.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def validate_credentials(self, username: str, password: str) -> Optional[LocalUser]:
        """Retourne l'utilisateur si le couple est valide, sinon None (sans dire lequel est faux)."""
        user = self.repo.get_by_username(username)
        if not user or not verify_password(password, user.hashed_password):
            return None
        return user

    def create(self, payload: UserCreateIn, *, principal: Optional[Principal] = None) -> LocalUser:
        if self.repo.get_by_username(payload.username):
            raise ConflictError("Username already exists")
        user = self.repo.create(
            username=payload.username,
            hashed_password=hash_password(payload.password),
            role=payload.role,
        )
        logger.info("User %s (%s) created by %s", user.username, user.role, principal.username if principal else "system")
        return user

    def update(self, user_id: int, payload: UserUpdateIn, *, principal: Principal) -> LocalUser:
        user = self.get(user_id)
        changes = changes_from(payload, nullable=("password",))

        password = changes.pop("password", None)
        if password:
            changes["hashed_password"] = hash_password(password)

        username = changes.get("username")
        if username is not None and username != user.username and self.repo.get_by_username(username):
            raise ConflictError("Username already exists")

        revoke = "hashed_password" in changes or changes.get("role", user.role) != user.role
        changes["updated_at"] = utcnow()
        user = self.repo.update(user, **changes)
        if revoke:
            # les sessions portent le rôle : on force une reconnexion
            self.session_repo.revoke_all_for_user(user.id)
        logger.info("User %s updated by %s", user.id, principal.username)
        return user

    def delete(self, user_id: int, *, principal: Principal) -> None:
        user = self.get(user_id)
        if user.id == principal.user_id:
            raise ConflictError("You cannot delete your own account")
        self.session_repo.delete_for_user(user.id)
        self.repo.delete(user)
        logger.info("User %s deleted by %s", user_id, principal.username)
