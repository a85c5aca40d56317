from fastapi import APIRouter, Depends, Response, status
from typing import Optional

from pdr_tracker.api.v1.routing import AuthFirstRoute
from pdr_tracker.api.v1.dependencies import (
    get_auth_service,
    get_client_ip_and_ua,
    get_principal,
    get_session_token,
)
from pdr_tracker.features.authentication.services import AuthService
from pdr_tracker.features.authentication.schemas import ChangePasswordIn, LoginIn, PrincipalOut
from pdr_tracker.security.policy import Principal

from pdr_tracker.core.config import settings

router = APIRouter(
    route_class=AuthFirstRoute,
    prefix="/auth",
    tags=["auth"],
)

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Ouvre une session serveur ; la clé signée est posée en cookie httpOnly.",
    response_model=PrincipalOut,
    responses={401: {"description": "Invalid credentials"}},
)
def login(
    payload: LoginIn,
    response: Response,
    svc: AuthService = Depends(get_auth_service),
    client_ctx=Depends(get_client_ip_and_ua),
):
    principal, token = svc.login(payload, ip=client_ctx.ip, user_agent=client_ctx.user_agent)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=settings.SESSION_COOKIE_MAX_AGE,
        path=settings.SESSION_COOKIE_PATH,
    )
    return principal

# -----------------------------
# Logout
# -----------------------------
@router.post(
    "/logout",
    summary="Se déconnecter (révocation de la session)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    svc: AuthService = Depends(get_auth_service),
):
    # Logout idempotent : silencieux sans session
    svc.logout(token)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path=settings.SESSION_COOKIE_PATH)
    return None

# -----------------------------
# Utilisateur courant
# -----------------------------
@router.get(
    "/user",
    summary="Récupérer l'utilisateur courant",
    response_model=PrincipalOut,
    responses={401: {"description": "Pas de session valide"}},
)
def current_user(principal: Principal = Depends(get_principal)):
    return PrincipalOut(id=principal.user_id, username=principal.username, role=principal.role)

# -----------------------------
# Changer le mot de passe
# -----------------------------
@router.post(
    "/change-password",
    summary="Changer son mot de passe",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"description": "Ancien mot de passe invalide ou pas de session"}},
)
def change_password(
    payload: ChangePasswordIn,
    principal: Principal = Depends(get_principal),
    token: Optional[str] = Depends(get_session_token),
    svc: AuthService = Depends(get_auth_service),
):
    svc.change_password(principal, payload, current_token=token)
    return None
