"""
➡️ But : Faire passer l'authentification avant la lecture du corps.

FastAPI décode le JSON avant de résoudre les dépendances : un corps illisible
donnerait un 400 là où la requête doit d'abord échouer en 401 (pas de session)
ou 403 (rôle insuffisant). AuthFirstRoute rattrape ce cas et applique le
contrôle de session et de rôle de la route avant de laisser passer le 400.

Utilisation :
    router = APIRouter(prefix="/projects", route_class=AuthFirstRoute)
"""

from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Optional

from fastapi import Request, Response
from fastapi.dependencies.models import Dependant
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool

from pdr_tracker.api.v1.dependencies import get_auth_service, get_principal, get_user_service
from pdr_tracker.core.config import settings
from pdr_tracker.core.errors import ForbiddenError, is_json_decode_error
from pdr_tracker.db.session import get_session
from pdr_tracker.security.policy import Operation, authorize


@dataclass(frozen=True)
class AuthGate:
    # None : session exigée, sans contrôle de rôle (ex. /auth/user)
    operation: Optional[Operation] = None


def find_auth_gate(dependant: Dependant) -> Optional[AuthGate]:
    """Contrôle d'accès déclaré par la route, ou None si elle est publique."""
    for dep in dependant.dependencies:
        if dep.call is get_principal:
            return AuthGate()
        operation = getattr(dep.call, "operation", None)
        if isinstance(operation, Operation):
            return AuthGate(operation=operation)
    return None


def check_auth_gate(request: Request, gate: AuthGate) -> None:
    """Lève UnauthenticatedError / ForbiddenError comme les dépendances de la route."""
    provider = request.app.dependency_overrides.get(get_session, get_session)
    sessions = provider()
    session = next(sessions)
    try:
        auth_svc = get_auth_service(session=session, user_svc=get_user_service(session=session))
        principal = auth_svc.principal_from_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
        if gate.operation is not None and not authorize(principal.role, gate.operation):
            raise ForbiddenError()
    finally:
        sessions.close()


class AuthFirstRoute(APIRoute):
    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        gate = find_auth_gate(self.dependant)
        if gate is None:
            return handler

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as exc:
                if is_json_decode_error(exc):
                    await run_in_threadpool(check_auth_gate, request, gate)
                raise

        return route_handler
