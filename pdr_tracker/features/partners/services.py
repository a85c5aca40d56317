import logging
from typing import Sequence

from pdr_tracker.core.errors import ConflictError, NotFoundError
from pdr_tracker.db.models.partners import Partner
from pdr_tracker.db.repositories.partners import PartnerRepository
from pdr_tracker.features.partners.schemas import PartnerCreateIn, PartnerUpdateIn
from pdr_tracker.features.validation import changes_from
from pdr_tracker.security.policy import Principal

logger = logging.getLogger(__name__)


class PartnerService:
    def __init__(self, repo: PartnerRepository):
        self.repo = repo

    def list(self) -> Sequence[Partner]:
        return self.repo.list_by_name()

    def get(self, partner_id: int) -> Partner:
        partner = self.repo.get(partner_id)
        if not partner:
            raise NotFoundError("Partner not found")
        return partner

    def create(self, payload: PartnerCreateIn, *, principal: Principal) -> Partner:
        partner = self.repo.create(**payload.model_dump())
        logger.info("Partner %s created by %s", partner.id, principal.username)
        return partner

    def update(self, partner_id: int, payload: PartnerUpdateIn, *, principal: Principal) -> Partner:
        partner = self.get(partner_id)
        partner = self.repo.update(partner, **changes_from(payload))
        logger.info("Partner %s updated by %s", partner.id, principal.username)
        return partner

    def delete(self, partner_id: int, *, principal: Principal) -> None:
        partner = self.get(partner_id)
        # suppression restreinte : un partenaire engagé sur un projet reste en base
        if self.repo.count_dependents(partner.id):
            raise ConflictError("Partner is still linked to projects")
        self.repo.delete(partner)
        logger.info("Partner %s deleted by %s", partner_id, principal.username)
