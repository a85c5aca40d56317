import bcrypt

from pdr_tracker.core.config import settings


def hash_password(password: str) -> str:
    """Hash bcrypt salé, stocké en texte (utf-8)."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # hash illisible en base
        return False
