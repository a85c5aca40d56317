from typing import List

from fastapi import APIRouter, Depends, Path, status

from pdr_tracker.api.v1.routing import AuthFirstRoute
from pdr_tracker.api.v1.dependencies import can_read, can_write, get_partner_service
from pdr_tracker.features.partners.schemas import PartnerCreateIn, PartnerOut, PartnerUpdateIn
from pdr_tracker.features.partners.services import PartnerService
from pdr_tracker.security.policy import Principal

router = APIRouter(
    route_class=AuthFirstRoute,
    prefix="/partners",
    tags=["partners"],
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Insufficient permissions"}},
)


@router.get("", summary="Lister les partenaires (par nom)", response_model=List[PartnerOut])
def list_partners(
    principal: Principal = Depends(can_read),
    svc: PartnerService = Depends(get_partner_service),
):
    return svc.list()


@router.get("/{partner_id}", summary="Récupérer un partenaire", response_model=PartnerOut)
def get_partner(
    principal: Principal = Depends(can_read),
    partner_id: int = Path(..., ge=1),
    svc: PartnerService = Depends(get_partner_service),
):
    return svc.get(partner_id)


@router.post("", summary="Créer un partenaire", status_code=status.HTTP_201_CREATED, response_model=PartnerOut)
def create_partner(
    payload: PartnerCreateIn,
    principal: Principal = Depends(can_write),
    svc: PartnerService = Depends(get_partner_service),
):
    return svc.create(payload, principal=principal)


@router.put("/{partner_id}", summary="Mettre à jour un partenaire", response_model=PartnerOut)
def update_partner(
    payload: PartnerUpdateIn,
    principal: Principal = Depends(can_write),
    partner_id: int = Path(..., ge=1),
    svc: PartnerService = Depends(get_partner_service),
):
    return svc.update(partner_id, payload, principal=principal)


@router.delete(
    "/{partner_id}",
    summary="Supprimer un partenaire",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Partner still linked to projects"}},
)
def delete_partner(
    principal: Principal = Depends(can_write),
    partner_id: int = Path(..., ge=1),
    svc: PartnerService = Depends(get_partner_service),
):
    svc.delete(partner_id, principal=principal)
    return None
