import logging
from typing import List

from pdr_tracker.core.errors import NotFoundError
from pdr_tracker.db.models.project_partners import ProjectPartner
from pdr_tracker.db.repositories.partners import PartnerRepository
from pdr_tracker.db.repositories.project_partners import ProjectPartnerRepository
from pdr_tracker.db.repositories.projects import ProjectRepository
from pdr_tracker.features.partners.schemas import PartnerOut
from pdr_tracker.features.project_partners.schemas import (
    ProjectPartnerCreateIn,
    ProjectPartnerOut,
    ProjectPartnerUpdateIn,
    ProjectPartnerWithPartnerOut,
)
from pdr_tracker.features.validation import changes_from
from pdr_tracker.security.policy import Principal

logger = logging.getLogger(__name__)


class ProjectPartnerService:
    """
    Contributions des partenaires aux projets.
    Aucune unicité n'est imposée sur (projet, partenaire, année).
    """

    def __init__(
        self,
        repo: ProjectPartnerRepository,
        project_repo: ProjectRepository,
        partner_repo: PartnerRepository,
    ):
        self.repo = repo
        self.project_repo = project_repo
        self.partner_repo = partner_repo

    def _require_project(self, project_id: int) -> None:
        if not self.project_repo.get(project_id):
            raise NotFoundError("Project not found")

    def _require_partner(self, partner_id: int) -> None:
        if not self.partner_repo.get(partner_id):
            raise NotFoundError("Partner not found")

    def get(self, link_id: int) -> ProjectPartner:
        link = self.repo.get(link_id)
        if not link:
            raise NotFoundError("Project partner not found")
        return link

    def get_project_partners(self, project_id: int) -> List[ProjectPartnerWithPartnerOut]:
        self._require_project(project_id)
        links = self.repo.list_for_project(project_id)
        partners = self.partner_repo.get_many(link.partner_id for link in links)
        return [
            ProjectPartnerWithPartnerOut(
                project_partner=ProjectPartnerOut.model_validate(link),
                partner=PartnerOut.model_validate(partners[link.partner_id]),
            )
            for link in links
            if link.partner_id in partners
        ]

    def create(self, project_id: int, payload: ProjectPartnerCreateIn, *, principal: Principal) -> ProjectPartner:
        self._require_project(project_id)
        self._require_partner(payload.partner_id)
        link = self.repo.create(project_id=project_id, **payload.model_dump())
        logger.info(
            "Partner %s added to project %s (%s) by %s",
            link.partner_id, project_id, link.year, principal.username,
        )
        return link

    def update(self, link_id: int, payload: ProjectPartnerUpdateIn, *, principal: Principal) -> ProjectPartner:
        link = self.get(link_id)
        changes = changes_from(payload)
        if "partner_id" in changes:
            self._require_partner(changes["partner_id"])
        link = self.repo.update(link, **changes)
        logger.info("Project partner %s updated by %s", link.id, principal.username)
        return link

    def delete(self, link_id: int, *, principal: Principal) -> None:
        link = self.get(link_id)
        self.repo.delete(link)
        logger.info("Project partner %s deleted by %s", link_id, principal.username)
