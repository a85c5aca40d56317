from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB, datetime_field


class AuthSession(BaseModelDB, table=True):
    """Session serveur : la clé (jti) est portée par le cookie signé."""
    __tablename__ = "auth_sessions"

    jti: str = Field(index=True, unique=True)
    user_id: int = Field(index=True, foreign_key="local_users.id")
    username: str
    role: str
    expires_at: datetime = datetime_field(index=True)
    revoked_at: Optional[datetime] = datetime_field(default=None)
    user_agent: Optional[str] = None
    ip: Optional[str] = None
