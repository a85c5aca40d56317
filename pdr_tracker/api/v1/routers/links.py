"""
Routes sur les lignes de liaison et les avances, adressées par leur propre id
(la création passe par /projects/{id}/... et /conventions/{id}/...).
"""

from fastapi import APIRouter, Depends, Path, status

from pdr_tracker.api.v1.routing import AuthFirstRoute
from pdr_tracker.api.v1.dependencies import (
    can_write,
    get_convention_service,
    get_financial_advance_service,
    get_project_partner_service,
)
from pdr_tracker.features.conventions.services import ConventionService
from pdr_tracker.features.financial_advances.schemas import FinancialAdvanceOut, FinancialAdvanceUpdateIn
from pdr_tracker.features.financial_advances.services import FinancialAdvanceService
from pdr_tracker.features.project_partners.schemas import ProjectPartnerOut, ProjectPartnerUpdateIn
from pdr_tracker.features.project_partners.services import ProjectPartnerService
from pdr_tracker.security.policy import Principal

router = APIRouter(
    route_class=AuthFirstRoute,
    tags=["links"],
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Insufficient permissions"}},
)

# -----------------------------
# Contributions partenaires
# -----------------------------
@router.put("/project-partners/{link_id}", summary="Mettre à jour une contribution", response_model=ProjectPartnerOut)
def update_project_partner(
    payload: ProjectPartnerUpdateIn,
    principal: Principal = Depends(can_write),
    link_id: int = Path(..., ge=1),
    svc: ProjectPartnerService = Depends(get_project_partner_service),
):
    return svc.update(link_id, payload, principal=principal)


@router.delete("/project-partners/{link_id}", summary="Supprimer une contribution", status_code=status.HTTP_204_NO_CONTENT)
def delete_project_partner(
    principal: Principal = Depends(can_write),
    link_id: int = Path(..., ge=1),
    svc: ProjectPartnerService = Depends(get_project_partner_service),
):
    svc.delete(link_id, principal=principal)
    return None

# -----------------------------
# Convention ↔ projet
# -----------------------------
@router.delete(
    "/convention-projects/{link_id}",
    summary="Détacher un projet d'une convention",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_convention_project(
    principal: Principal = Depends(can_write),
    link_id: int = Path(..., ge=1),
    svc: ConventionService = Depends(get_convention_service),
):
    svc.unlink(link_id, principal=principal)
    return None

# -----------------------------
# Avances financières
# -----------------------------
@router.put("/financial-advances/{advance_id}", summary="Mettre à jour une avance", response_model=FinancialAdvanceOut)
def update_financial_advance(
    payload: FinancialAdvanceUpdateIn,
    principal: Principal = Depends(can_write),
    advance_id: int = Path(..., ge=1),
    svc: FinancialAdvanceService = Depends(get_financial_advance_service),
):
    return svc.update(advance_id, payload, principal=principal)


@router.delete("/financial-advances/{advance_id}", summary="Supprimer une avance", status_code=status.HTTP_204_NO_CONTENT)
def delete_financial_advance(
    principal: Principal = Depends(can_write),
    advance_id: int = Path(..., ge=1),
    svc: FinancialAdvanceService = Depends(get_financial_advance_service),
):
    svc.delete(advance_id, principal=principal)
    return None
