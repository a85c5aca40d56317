import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from jose import JWTError

from pdr_tracker.core.errors import UnauthenticatedError
from pdr_tracker.db.models.base import utcnow
from pdr_tracker.db.repositories.sessions import AuthSessionRepository
from pdr_tracker.features.authentication.schemas import ChangePasswordIn, LoginIn, PrincipalOut
from pdr_tracker.features.users.services import UserService
from pdr_tracker.security.passwords import hash_password, verify_password
from pdr_tracker.security.policy import Principal
from pdr_tracker.security.tokens import (
    SESSION_TOKEN_TYPE,
    SessionTokenSettings,
    create_session_token,
    decode_token,
    new_jti,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre comptes + sessions persistées.
    Le cookie ne contient qu'un jeton signé portant la clé de session (jti) ;
    l'identité et le rôle sont relus en base à chaque requête.
    """

    def __init__(
        self,
        *,
        user_svc: UserService,
        session_repo: AuthSessionRepository,
        token_settings: SessionTokenSettings,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.user_svc = user_svc
        self.session_repo = session_repo
        self.tokens = token_settings
        self.now_fn = now_fn

    # ---------- Login ----------
    def login(
        self, payload: LoginIn, *, ip: Optional[str] = None, user_agent: Optional[str] = None
    ) -> Tuple[PrincipalOut, str]:
        user = self.user_svc.validate_credentials(payload.username, payload.password)
        if not user:
            # Ne pas révéler si l'utilisateur existe
            logger.warning("Failed login for %r", payload.username)
            raise UnauthenticatedError("Invalid credentials")

        self.session_repo.delete_expired()
        jti = new_jti()
        self.session_repo.create(
            jti=jti,
            user_id=user.id,
            username=user.username,
            role=user.role,
            expires_at=self.now_fn() + self.tokens.ttl,
            user_agent=user_agent,
            ip=ip,
        )
        token = create_session_token(user_id=user.id, jti=jti, settings=self.tokens)
        logger.info("User %s logged in", user.username)
        return PrincipalOut(id=user.id, username=user.username, role=user.role), token

    # ---------- Logout ----------
    def logout(self, token: Optional[str]) -> None:
        jti = self._jti_or_none(token)
        if jti:
            self.session_repo.revoke(jti)

    # ---------- Principal depuis le cookie ----------
    def principal_from_token(self, token: Optional[str]) -> Principal:
        jti = self._jti_or_none(token)
        if not jti:
            raise UnauthenticatedError()
        rec = self.session_repo.get_active(jti)
        if not rec:
            raise UnauthenticatedError()
        return Principal(user_id=rec.user_id, username=rec.username, role=rec.role)

    # ---------- Changement de mot de passe ----------
    def change_password(
        self, principal: Principal, payload: ChangePasswordIn, *, current_token: Optional[str] = None
    ) -> None:
        user = self.user_svc.get(principal.user_id)
        if not verify_password(payload.old_password, user.hashed_password):
            raise UnauthenticatedError("Invalid credentials")
        self.user_svc.repo.update(
            user,
            hashed_password=hash_password(payload.new_password),
            updated_at=self.now_fn(),
        )
        # les autres sessions du compte doivent se reconnecter
        self.session_repo.revoke_all_for_user(user.id, keep_jti=self._jti_or_none(current_token))
        logger.info("User %s changed their password", user.username)

    # ---------- Helpers ----------
    def _jti_or_none(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        try:
            decoded = decode_token(token, self.tokens)
        except JWTError:
            return None
        if decoded.get("typ") != SESSION_TOKEN_TYPE:
            return None
        return decoded.get("jti")
