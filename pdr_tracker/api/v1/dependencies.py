"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_project_service() : crée un ProjectService à partir d’une session DB.

get_principal() : authentifie la requête depuis le cookie de session.

require(operation) : authentifie PUIS autorise selon la table de rôles.

🔹 Les dépendances d'autorisation sont déclarées en premier dans chaque
route : elles lèvent avant la validation du corps et avant tout accès
aux tables métier.
"""

from typing import Optional
from dataclasses import dataclass

from fastapi import Cookie, Depends, Header
from sqlmodel import Session

from pdr_tracker.core.config import settings, session_token_settings
from pdr_tracker.core.errors import ForbiddenError
from pdr_tracker.db.session import get_session
from pdr_tracker.security.policy import Operation, Principal, authorize

from pdr_tracker.db.repositories.local_users import LocalUserRepository
from pdr_tracker.db.repositories.sessions import AuthSessionRepository
from pdr_tracker.db.repositories.projects import ProjectRepository
from pdr_tracker.db.repositories.conventions import ConventionRepository
from pdr_tracker.db.repositories.partners import PartnerRepository
from pdr_tracker.db.repositories.project_partners import ProjectPartnerRepository
from pdr_tracker.db.repositories.convention_projects import ConventionProjectRepository
from pdr_tracker.db.repositories.financial_advances import FinancialAdvanceRepository

from pdr_tracker.features.users.services import UserService
from pdr_tracker.features.authentication.services import AuthService
from pdr_tracker.features.projects.services import ProjectService
from pdr_tracker.features.conventions.services import ConventionService
from pdr_tracker.features.partners.services import PartnerService
from pdr_tracker.features.project_partners.services import ProjectPartnerService
from pdr_tracker.features.financial_advances.services import FinancialAdvanceService


# -----------------------------
# Users / Auth
# -----------------------------
def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(LocalUserRepository(session), AuthSessionRepository(session))


def get_auth_service(
    session: Session = Depends(get_session),
    user_svc: UserService = Depends(get_user_service),
) -> AuthService:
    return AuthService(
        user_svc=user_svc,
        session_repo=AuthSessionRepository(session),
        token_settings=session_token_settings,
    )


# -----------------------------
# Services métier
# -----------------------------
def get_project_service(session: Session = Depends(get_session)) -> ProjectService:
    return ProjectService(ProjectRepository(session))

def get_partner_service(session: Session = Depends(get_session)) -> PartnerService:
    return PartnerService(PartnerRepository(session))

def get_convention_service(session: Session = Depends(get_session)) -> ConventionService:
    return ConventionService(
        repo=ConventionRepository(session),
        link_repo=ConventionProjectRepository(session),
        project_repo=ProjectRepository(session),
    )

def get_project_partner_service(session: Session = Depends(get_session)) -> ProjectPartnerService:
    return ProjectPartnerService(
        repo=ProjectPartnerRepository(session),
        project_repo=ProjectRepository(session),
        partner_repo=PartnerRepository(session),
    )

def get_financial_advance_service(session: Session = Depends(get_session)) -> FinancialAdvanceService:
    return FinancialAdvanceService(
        repo=FinancialAdvanceRepository(session),
        project_repo=ProjectRepository(session),
    )


# -----------------------------
# Authentification / autorisation
# -----------------------------
def get_session_token(
    token: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[str]:
    return token


def get_principal(
    token: Optional[str] = Depends(get_session_token),
    auth_svc: AuthService = Depends(get_auth_service),
) -> Principal:
    """Pas de session valide => 401, sans aller plus loin."""
    return auth_svc.principal_from_token(token)


def require(operation: Operation):
    """
    Fabrique une dépendance : authentifie, puis vérifie le rôle dans la table.
    Utilisation :
        def route(..., principal: Principal = Depends(require(Operation.WRITE_RECORDS))):
            ...
    """
    def _check(principal: Principal = Depends(get_principal)) -> Principal:
        if not authorize(principal.role, operation):
            raise ForbiddenError()
        return principal

    _check.__name__ = f"require_{operation.value}"
    # lu par AuthFirstRoute pour rejouer le contrôle avant la lecture du corps
    _check.operation = operation
    return _check


can_read = require(Operation.READ_RECORDS)
can_read_financial = require(Operation.READ_FINANCIAL)
can_write = require(Operation.WRITE_RECORDS)
can_manage_users = require(Operation.MANAGE_USERS)


# -----------------------------
# Contexte client
# -----------------------------
@dataclass
class ClientContext:
    ip: Optional[str]
    user_agent: Optional[str]

def get_client_ip_and_ua(
    x_forwarded_for: Optional[str] = Header(default=None, alias="X-Forwarded-For"),
    x_real_ip: Optional[str] = Header(default=None, alias="X-Real-IP"),
    user_agent: Optional[str] = Header(default=None, alias="User-Agent"),
) -> ClientContext:
    """
    Récupère l'IP depuis X-Forwarded-For > X-Real-IP (si derrière un proxy),
    et le User-Agent (conservés avec la session).
    """
    ip = None
    if x_forwarded_for:
        ip = x_forwarded_for.split(",")[0].strip()
    elif x_real_ip:
        ip = x_real_ip
    return ClientContext(ip=ip, user_agent=user_agent)
