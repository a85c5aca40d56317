from typing import Optional, Sequence
from sqlmodel import select

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.base import utcnow
from pdr_tracker.db.models.sessions import AuthSession

class AuthSessionRepository(BaseRepository[AuthSession]):
    model = AuthSession

    def get_by_jti(self, jti: str) -> Optional[AuthSession]:
        return self.session.exec(
            select(self.model).where(self.model.jti == jti)
        ).first()

    def get_active(self, jti: str) -> Optional[AuthSession]:
        """Session existante, non révoquée et non expirée, sinon None."""
        rec = self.get_by_jti(jti)
        if not rec or rec.revoked_at is not None or rec.expires_at <= utcnow():
            return None
        return rec

    def list_active_for_user(self, user_id: int) -> Sequence[AuthSession]:
        return self.session.exec(
            select(self.model)
            .where(self.model.user_id == user_id)
            .where(self.model.revoked_at.is_(None))
            .where(self.model.expires_at > utcnow())
        ).all()

    def revoke(self, jti: str) -> None:
        rec = self.get_by_jti(jti)
        if not rec or rec.revoked_at:
            return
        rec.revoked_at = utcnow()
        self.session.add(rec)
        self._commit()

    def revoke_all_for_user(self, user_id: int, *, keep_jti: Optional[str] = None) -> int:
        """Révoque les sessions actives du compte, sauf éventuellement `keep_jti`."""
        active = [rec for rec in self.list_active_for_user(user_id) if rec.jti != keep_jti]
        if not active:
            return 0
        now = utcnow()
        for rec in active:
            rec.revoked_at = now
            self.session.add(rec)
        self._commit()
        return len(active)

    def delete_for_user(self, user_id: int) -> int:
        """Supprime toutes les sessions d'un compte (avant suppression du compte)."""
        rows = self.session.exec(select(self.model).where(self.model.user_id == user_id)).all()
        for rec in rows:
            self.session.delete(rec)
        self._commit()
        return len(rows)

    def delete_expired(self) -> int:
        expired = self.session.exec(
            select(self.model).where(self.model.expires_at <= utcnow())
        ).all()
        for rec in expired:
            self.session.delete(rec)
        self._commit()
        return len(expired)
