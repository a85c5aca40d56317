"""
➡️ But : Configurer la base et gérer les sessions de base de données.

engine : connexion à la base (SQLite par défaut, PostgreSQL via DATABASE_URL).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session, la fournit aux routes, puis la ferme proprement.
"""

from typing import Dict, Any
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Import all models for creating all tables
from pdr_tracker.db.models.local_users import LocalUser
from pdr_tracker.db.models.sessions import AuthSession
from pdr_tracker.db.models.projects import Project
from pdr_tracker.db.models.conventions import Convention
from pdr_tracker.db.models.partners import Partner
from pdr_tracker.db.models.project_partners import ProjectPartner
from pdr_tracker.db.models.convention_projects import ConventionProject
from pdr_tracker.db.models.financial_advances import FinancialAdvance

from pdr_tracker.core.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite n'applique les clés étrangères que si on le lui demande, connexion par connexion."""
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _build_engine() -> Engine:
    url = settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    engine = create_engine(
        url,
        echo=False,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
    )
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine

engine: Engine = _build_engine()

def init_db(target: Engine | None = None) -> None:
    """
    Crée les tables si elles n'existent pas.
    En prod, préférer des migrations (Alembic).
    """
    SQLModel.metadata.create_all(target or engine)


def get_session():
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
