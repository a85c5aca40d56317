"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, secret de session, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from pdr_tracker.core.config import settings
print(settings.APP_NAME)
"""

from datetime import timedelta
from typing import List, Optional

from pydantic_settings import BaseSettings
from pdr_tracker.security.tokens import SessionTokenSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "PDR-Tracker"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "pdr_tracker.db"  # fichier SQLite
    # Pour PostgreSQL, définir DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Sessions
    # -----------------------------
    SESSION_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    SESSION_ISSUER: str = "pdr-tracker"
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 24 * 7

    SESSION_COOKIE_NAME: str = "pdr_session"
    SESSION_COOKIE_SAMESITE: str = "lax"      # "lax" | "strict" | "none"
    SESSION_COOKIE_PATH: str = "/"
    SESSION_COOKIE_SECURE: Optional[bool] = None   # auto selon ENV si None
    SESSION_COOKIE_MAX_AGE: Optional[int] = None   # auto depuis SESSION_TTL si None

    # -----------------------------
    # Mots de passe / compte initial
    # -----------------------------
    BCRYPT_ROUNDS: int = 12
    BOOTSTRAP_ADMIN_USERNAME: str = "admin"
    BOOTSTRAP_ADMIN_PASSWORD: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Cookie secure auto: true en prod si non spécifié
        if self.SESSION_COOKIE_SECURE is None:
            object.__setattr__(self, "SESSION_COOKIE_SECURE", self.ENV == "prod")

        # max_age auto depuis SESSION_TTL
        if self.SESSION_COOKIE_MAX_AGE is None:
            object.__setattr__(self, "SESSION_COOKIE_MAX_AGE", self.SESSION_TTL_HOURS * 60 * 60)


# Instance globale importable partout
settings = Settings()

# Paramètres prêts à l'emploi pour la signature des jetons de session
session_token_settings = SessionTokenSettings(
    secret=settings.SESSION_SECRET_KEY,
    issuer=settings.SESSION_ISSUER,
    algorithm=settings.SESSION_ALGORITHM,
    ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
)
