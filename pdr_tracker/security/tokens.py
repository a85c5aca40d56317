import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation
# ==========================================================

@dataclass(frozen=True)
class SessionTokenSettings:
    """
    Configuration des jetons de session.

    - `secret` : clé secrète pour signer/valider les jetons
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `ttl` : durée de vie d’une session
    """
    secret: str
    issuer: str = "pdr-tracker"
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=7)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant utilisateur
    typ: str            # "session"
    jti: str            # clé de la session persistée
    iat: int
    exp: int


SESSION_TOKEN_TYPE = "session"


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique de session."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération / décodage
# ==========================================================

def create_session_token(*, user_id: int, jti: str, settings: SessionTokenSettings) -> str:
    """
    Signe le cookie de session. Le jeton ne porte que la clé (jti) :
    le rôle et l'utilisateur sont lus côté serveur dans la session persistée.
    """
    now = _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": str(user_id),
        "typ": SESSION_TOKEN_TYPE,
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int((now + settings.ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


def decode_token(token: str, settings: SessionTokenSettings) -> DecodedToken:
    """
    Décode et valide un jeton (signature + expiration + émetteur).
    Lève JWTError en cas de signature invalide ou expirée.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]
