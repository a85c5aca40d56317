"""
➡️ But : Gestion des comptes locaux (réservée au rôle admin).

🔹 Les réponses passent toutes par UserOut : aucun mot de passe ni hash n'est renvoyé.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from pdr_tracker.api.v1.routing import AuthFirstRoute
from pdr_tracker.api.v1.dependencies import can_manage_users, get_user_service
from pdr_tracker.features.users.schemas import UserCreateIn, UserOut, UserUpdateIn
from pdr_tracker.features.users.services import UserService
from pdr_tracker.security.policy import Principal

router = APIRouter(
    route_class=AuthFirstRoute,
    prefix="/users",
    tags=["users"],
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Admin only"}},
)

@router.get(
    "",
    summary="Lister les utilisateurs",
    response_model=List[UserOut],
    responses={
        200: {
            "description": "Liste des comptes",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": 1,
                            "username": "admin",
                            "role": "admin",
                            "created_at": "2025-01-01T10:00:00",
                            "updated_at": "2025-01-01T10:00:00",
                        },
                        {
                            "id": 2,
                            "username": "superviseur1",
                            "role": "superviseur",
                            "created_at": "2025-02-01T10:00:00",
                            "updated_at": "2025-02-01T10:00:00",
                        },
                    ]
                }
            },
        }
    },
)
def list_users(
    principal: Principal = Depends(can_manage_users),
    svc: UserService = Depends(get_user_service),
):
    return svc.list()

@router.post(
    "",
    summary="Créer un utilisateur",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={409: {"description": "Username already exists"}},
)
def create_user(
    payload: UserCreateIn,
    principal: Principal = Depends(can_manage_users),
    svc: UserService = Depends(get_user_service),
):
    return svc.create(payload, principal=principal)

@router.get(
    "/{user_id}",
    summary="Récupérer un utilisateur",
    response_model=UserOut,
)
def get_user(
    principal: Principal = Depends(can_manage_users),
    user_id: int = Path(..., ge=1),
    svc: UserService = Depends(get_user_service),
):
    return svc.get(user_id)

@router.put(
    "/{user_id}",
    summary="Mettre à jour un utilisateur",
    description="Un mot de passe absent ou vide laisse le mot de passe inchangé.",
    response_model=UserOut,
)
def update_user(
    payload: UserUpdateIn,
    principal: Principal = Depends(can_manage_users),
    user_id: int = Path(..., ge=1),
    svc: UserService = Depends(get_user_service),
):
    return svc.update(user_id, payload, principal=principal)

@router.delete(
    "/{user_id}",
    summary="Supprimer un utilisateur",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Cannot delete your own account"}},
)
def delete_user(
    principal: Principal = Depends(can_manage_users),
    user_id: int = Path(..., ge=1),
    svc: UserService = Depends(get_user_service),
):
    svc.delete(user_id, principal=principal)
    return None
