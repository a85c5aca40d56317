"""
➡️ But : Contenir la logique métier : orchestrer les repos, appliquer des règles, gérer les erreurs.

ProjectService : unicité de l'identifiant, immutabilité de l'identifiant,
suppression refusée tant que des lignes dépendantes existent.

Les erreurs sont levées via la taxonomie de pdr_tracker.core.errors.
"""

import logging
from typing import Optional, Sequence

from pdr_tracker.core.errors import ConflictError, NotFoundError, ValidationFailedError
from pdr_tracker.db.models.base import utcnow
from pdr_tracker.db.models.projects import Project
from pdr_tracker.db.repositories.projects import ProjectRepository
from pdr_tracker.features.projects.schemas import ProjectCreateIn, ProjectUpdateIn
from pdr_tracker.features.validation import changes_from
from pdr_tracker.security.policy import Principal

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, repo: ProjectRepository):
        self.repo = repo

    # -------- Reads --------

    def list(
        self,
        *,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Sequence[Project]:
        return self.repo.search(q=search, sort_by=sort_by, sort_order=sort_order)

    def get(self, project_id: int) -> Project:
        project = self.repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    # -------- Writes --------

    def create(self, payload: ProjectCreateIn, *, principal: Principal) -> Project:
        if self.repo.get_by_identifier(payload.identifier):
            raise ConflictError("Project identifier already exists")
        project = self.repo.create(**payload.model_dump())
        logger.info("Project %s (%s) created by %s", project.id, project.identifier, principal.username)
        return project

    def update(self, project_id: int, payload: ProjectUpdateIn, *, principal: Principal) -> Project:
        project = self.get(project_id)
        changes = changes_from(payload)

        identifier = changes.pop("identifier", None)
        if identifier is not None and identifier != project.identifier:
            raise ValidationFailedError(
                [("identifier", "Project identifier cannot be changed")],
                message="Invalid project data",
            )

        changes["updated_at"] = utcnow()
        project = self.repo.update(project, **changes)
        logger.info("Project %s updated by %s", project.id, principal.username)
        return project

    def delete(self, project_id: int, *, principal: Principal) -> None:
        project = self.get(project_id)
        if self.repo.count_dependents(project.id):
            raise ConflictError("Project still has partners, conventions or financial advances")
        self.repo.delete(project)
        logger.info("Project %s deleted by %s", project_id, principal.username)
