"""
➡️ But : Définir les endpoints de l’API pour les projets.

C’est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PUT, DELETE)

Vérifie la session et le rôle (dépendances can_read / can_write)

Appelle le service correspondant et retourne les schémas de sortie (response_model)

🔹 Les routes ne contiennent ni SQL ni logique métier.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from pdr_tracker.api.v1.routing import AuthFirstRoute
from pdr_tracker.api.v1.dependencies import (
    can_read,
    can_read_financial,
    can_write,
    get_convention_service,
    get_financial_advance_service,
    get_project_partner_service,
    get_project_service,
)
from pdr_tracker.features.conventions.schemas import ConventionProjectWithConventionOut
from pdr_tracker.features.conventions.services import ConventionService
from pdr_tracker.features.financial_advances.schemas import FinancialAdvanceCreateIn, FinancialAdvanceOut
from pdr_tracker.features.financial_advances.services import FinancialAdvanceService
from pdr_tracker.features.project_partners.schemas import (
    ProjectPartnerCreateIn,
    ProjectPartnerOut,
    ProjectPartnerWithPartnerOut,
)
from pdr_tracker.features.project_partners.services import ProjectPartnerService
from pdr_tracker.features.projects.schemas import (
    ProjectCreateIn,
    ProjectOut,
    ProjectSortColumn,
    ProjectUpdateIn,
    SortOrder,
)
from pdr_tracker.features.projects.services import ProjectService
from pdr_tracker.security.policy import Principal

router = APIRouter(
    route_class=AuthFirstRoute,
    prefix="/projects",
    tags=["projects"],
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Insufficient permissions"}},
)

# -----------------------------
# List / search
# -----------------------------
@router.get(
    "",
    summary="Lister les projets",
    description="Recherche sur le titre et tri sur une colonne autorisée (par défaut : plus récents d'abord).",
    response_model=List[ProjectOut],
)
def list_projects(
    principal: Principal = Depends(can_read),
    search: Optional[str] = Query(None, description="Sous-chaîne recherchée dans le titre"),
    sort_by: Optional[ProjectSortColumn] = Query(None),
    sort_order: Optional[SortOrder] = Query(None),
    svc: ProjectService = Depends(get_project_service),
):
    return svc.list(search=search, sort_by=sort_by, sort_order=sort_order)

# -----------------------------
# Get by id
# -----------------------------
@router.get(
    "/{project_id}",
    summary="Récupérer un projet",
    response_model=ProjectOut,
    responses={404: {"description": "Project not found"}},
)
def get_project(
    principal: Principal = Depends(can_read),
    project_id: int = Path(..., ge=1),
    svc: ProjectService = Depends(get_project_service),
):
    return svc.get(project_id)

# -----------------------------
# Create / update / delete
# -----------------------------
@router.post(
    "",
    summary="Créer un projet",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectOut,
    responses={400: {"description": "Invalid project data"}, 409: {"description": "Identifier already exists"}},
)
def create_project(
    payload: ProjectCreateIn,
    principal: Principal = Depends(can_write),
    svc: ProjectService = Depends(get_project_service),
):
    return svc.create(payload, principal=principal)


@router.put(
    "/{project_id}",
    summary="Mettre à jour un projet",
    response_model=ProjectOut,
    responses={404: {"description": "Project not found"}},
)
def update_project(
    payload: ProjectUpdateIn,
    principal: Principal = Depends(can_write),
    project_id: int = Path(..., ge=1),
    svc: ProjectService = Depends(get_project_service),
):
    return svc.update(project_id, payload, principal=principal)


@router.delete(
    "/{project_id}",
    summary="Supprimer un projet",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Project not found"}, 409: {"description": "Project has dependent rows"}},
)
def delete_project(
    principal: Principal = Depends(can_write),
    project_id: int = Path(..., ge=1),
    svc: ProjectService = Depends(get_project_service),
):
    svc.delete(project_id, principal=principal)
    return None

# -----------------------------
# Partenaires du projet
# -----------------------------
@router.get(
    "/{project_id}/partners",
    summary="Partenaires d'un projet (contribution + partenaire)",
    response_model=List[ProjectPartnerWithPartnerOut],
)
def list_project_partners(
    principal: Principal = Depends(can_read),
    project_id: int = Path(..., ge=1),
    svc: ProjectPartnerService = Depends(get_project_partner_service),
):
    return svc.get_project_partners(project_id)


@router.post(
    "/{project_id}/partners",
    summary="Ajouter une contribution partenaire",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectPartnerOut,
)
def add_project_partner(
    payload: ProjectPartnerCreateIn,
    principal: Principal = Depends(can_write),
    project_id: int = Path(..., ge=1),
    svc: ProjectPartnerService = Depends(get_project_partner_service),
):
    return svc.create(project_id, payload, principal=principal)

# -----------------------------
# Conventions du projet
# -----------------------------
@router.get(
    "/{project_id}/conventions",
    summary="Conventions rattachées à un projet",
    response_model=List[ConventionProjectWithConventionOut],
)
def list_project_conventions(
    principal: Principal = Depends(can_read),
    project_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    return svc.get_project_conventions(project_id)

# -----------------------------
# Avances financières
# -----------------------------
@router.get(
    "/{project_id}/financial-advances",
    summary="Avances financières d'un projet",
    response_model=List[FinancialAdvanceOut],
)
def list_financial_advances(
    principal: Principal = Depends(can_read_financial),
    project_id: int = Path(..., ge=1),
    svc: FinancialAdvanceService = Depends(get_financial_advance_service),
):
    return svc.list_for_project(project_id)


@router.post(
    "/{project_id}/financial-advances",
    summary="Enregistrer une avance financière",
    status_code=status.HTTP_201_CREATED,
    response_model=FinancialAdvanceOut,
)
def add_financial_advance(
    payload: FinancialAdvanceCreateIn,
    principal: Principal = Depends(can_write),
    project_id: int = Path(..., ge=1),
    svc: FinancialAdvanceService = Depends(get_financial_advance_service),
):
    return svc.create(project_id, payload, principal=principal)
