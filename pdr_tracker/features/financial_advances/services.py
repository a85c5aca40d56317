import logging
from typing import Sequence

from pdr_tracker.core.errors import NotFoundError
from pdr_tracker.db.models.financial_advances import FinancialAdvance
from pdr_tracker.db.repositories.financial_advances import FinancialAdvanceRepository
from pdr_tracker.db.repositories.projects import ProjectRepository
from pdr_tracker.features.financial_advances.schemas import FinancialAdvanceCreateIn, FinancialAdvanceUpdateIn
from pdr_tracker.features.validation import changes_from
from pdr_tracker.security.policy import Principal

logger = logging.getLogger(__name__)


class FinancialAdvanceService:
    """
    Avances financières d'un projet.
    La création d'une avance ne modifie pas les cumuls engagements/paiements
    du projet : ce sont deux écritures indépendantes.
    """

    def __init__(self, repo: FinancialAdvanceRepository, project_repo: ProjectRepository):
        self.repo = repo
        self.project_repo = project_repo

    def list_for_project(self, project_id: int) -> Sequence[FinancialAdvance]:
        if not self.project_repo.get(project_id):
            raise NotFoundError("Project not found")
        return self.repo.list_for_project(project_id)

    def get(self, advance_id: int) -> FinancialAdvance:
        advance = self.repo.get(advance_id)
        if not advance:
            raise NotFoundError("Financial advance not found")
        return advance

    def create(self, project_id: int, payload: FinancialAdvanceCreateIn, *, principal: Principal) -> FinancialAdvance:
        if not self.project_repo.get(project_id):
            raise NotFoundError("Project not found")
        advance = self.repo.create(project_id=project_id, **payload.model_dump())
        logger.info("Financial advance %s added to project %s by %s", advance.id, project_id, principal.username)
        return advance

    def update(self, advance_id: int, payload: FinancialAdvanceUpdateIn, *, principal: Principal) -> FinancialAdvance:
        advance = self.get(advance_id)
        advance = self.repo.update(advance, **changes_from(payload))
        logger.info("Financial advance %s updated by %s", advance.id, principal.username)
        return advance

    def delete(self, advance_id: int, *, principal: Principal) -> None:
        advance = self.get(advance_id)
        self.repo.delete(advance)
        logger.info("Financial advance %s deleted by %s", advance_id, principal.username)
