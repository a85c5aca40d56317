from typing import List

from fastapi import APIRouter, Depends, Path, status

from pdr_tracker.api.v1.routing import AuthFirstRoute
from pdr_tracker.api.v1.dependencies import can_read, can_write, get_convention_service
from pdr_tracker.features.conventions.schemas import (
    ConventionCreateIn,
    ConventionOut,
    ConventionProjectCreateIn,
    ConventionProjectOut,
    ConventionProjectWithProjectOut,
    ConventionUpdateIn,
    ProgrammeCatalogOut,
)
from pdr_tracker.features.conventions.services import ConventionService
from pdr_tracker.security.policy import Principal

router = APIRouter(
    route_class=AuthFirstRoute,
    prefix="/conventions",
    tags=["conventions"],
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Insufficient permissions"}},
)


@router.get("", summary="Lister les conventions (plus récentes d'abord)", response_model=List[ConventionOut])
def list_conventions(
    principal: Principal = Depends(can_read),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.list()


@router.get("/programmes", summary="Catalogue des programmes régionaux", response_model=ProgrammeCatalogOut)
def list_programmes(principal: Principal = Depends(can_read)):
    return ProgrammeCatalogOut(programmes=ConventionService.programmes())


@router.get(
    "/{convention_id}",
    summary="Récupérer une convention",
    response_model=ConventionOut,
    responses={404: {"description": "Convention not found"}},
)
def get_convention(
    principal: Principal = Depends(can_read),
    convention_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.get(convention_id)


@router.post("", summary="Créer une convention", status_code=status.HTTP_201_CREATED, response_model=ConventionOut)
def create_convention(
    payload: ConventionCreateIn,
    principal: Principal = Depends(can_write),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.create(payload, principal=principal)


@router.put("/{convention_id}", summary="Mettre à jour une convention", response_model=ConventionOut)
def update_convention(
    payload: ConventionUpdateIn,
    principal: Principal = Depends(can_write),
    convention_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.update(convention_id, payload, principal=principal)


@router.delete("/{convention_id}", summary="Supprimer une convention", status_code=status.HTTP_204_NO_CONTENT)
def delete_convention(
    principal: Principal = Depends(can_write),
    convention_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    svc.delete(convention_id, principal=principal)
    return None


# -----------------------------
# Projets rattachés
# -----------------------------
@router.get(
    "/{convention_id}/projects",
    summary="Projets rattachés à une convention",
    response_model=List[ConventionProjectWithProjectOut],
)
def list_convention_projects(
    principal: Principal = Depends(can_read),
    convention_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.get_convention_projects(convention_id)


@router.post(
    "/{convention_id}/projects",
    summary="Rattacher un projet à une convention",
    status_code=status.HTTP_201_CREATED,
    response_model=ConventionProjectOut,
)
def link_project(
    payload: ConventionProjectCreateIn,
    principal: Principal = Depends(can_write),
    convention_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.link_project(convention_id, payload, principal=principal)
