"""
➡️ But : Logique métier des conventions et de leur rattachement aux projets.

Les lectures jointes se font en deux temps (lignes de liaison, puis entités
liées chargées en une requête) et renvoient des composites typés.
"""

import logging
from typing import List, Sequence

from pdr_tracker.core.errors import ConflictError, NotFoundError
from pdr_tracker.db.models.base import utcnow
from pdr_tracker.db.models.conventions import Convention
from pdr_tracker.db.models.convention_projects import ConventionProject
from pdr_tracker.db.repositories.conventions import ConventionRepository
from pdr_tracker.db.repositories.convention_projects import ConventionProjectRepository
from pdr_tracker.db.repositories.projects import ProjectRepository
from pdr_tracker.features.conventions.schemas import (
    PROGRAMMES,
    ConventionCreateIn,
    ConventionOut,
    ConventionProjectCreateIn,
    ConventionProjectOut,
    ConventionProjectWithConventionOut,
    ConventionProjectWithProjectOut,
    ConventionUpdateIn,
)
from pdr_tracker.features.projects.schemas import ProjectOut
from pdr_tracker.features.validation import changes_from
from pdr_tracker.security.policy import Principal

logger = logging.getLogger(__name__)


class ConventionService:
    def __init__(
        self,
        repo: ConventionRepository,
        link_repo: ConventionProjectRepository,
        project_repo: ProjectRepository,
    ):
        self.repo = repo
        self.link_repo = link_repo
        self.project_repo = project_repo

    # -------- Reads --------

    def list(self) -> Sequence[Convention]:
        return self.repo.list_newest_first()

    @staticmethod
    def programmes() -> List[str]:
        return list(PROGRAMMES)

    def get(self, convention_id: int) -> Convention:
        convention = self.repo.get(convention_id)
        if not convention:
            raise NotFoundError("Convention not found")
        return convention

    def get_convention_projects(self, convention_id: int) -> List[ConventionProjectWithProjectOut]:
        self.get(convention_id)
        links = self.link_repo.list_for_convention(convention_id)
        projects = self.project_repo.get_many(link.project_id for link in links)
        return [
            ConventionProjectWithProjectOut(
                convention_project=ConventionProjectOut.model_validate(link),
                project=ProjectOut.model_validate(projects[link.project_id]),
            )
            for link in links
            if link.project_id in projects
        ]

    def get_project_conventions(self, project_id: int) -> List[ConventionProjectWithConventionOut]:
        if not self.project_repo.get(project_id):
            raise NotFoundError("Project not found")
        links = self.link_repo.list_for_project(project_id)
        conventions = self.repo.get_many(link.convention_id for link in links)
        return [
            ConventionProjectWithConventionOut(
                convention_project=ConventionProjectOut.model_validate(link),
                convention=ConventionOut.model_validate(conventions[link.convention_id]),
            )
            for link in links
            if link.convention_id in conventions
        ]

    # -------- Writes --------

    def create(self, payload: ConventionCreateIn, *, principal: Principal) -> Convention:
        convention = self.repo.create(**payload.model_dump())
        logger.info("Convention %s created by %s", convention.id, principal.username)
        return convention

    def update(self, convention_id: int, payload: ConventionUpdateIn, *, principal: Principal) -> Convention:
        convention = self.get(convention_id)
        changes = changes_from(payload, nullable=("date_visa", "document_url"))
        changes["updated_at"] = utcnow()
        convention = self.repo.update(convention, **changes)
        logger.info("Convention %s updated by %s", convention.id, principal.username)
        return convention

    def delete(self, convention_id: int, *, principal: Principal) -> None:
        convention = self.get(convention_id)
        if self.repo.count_dependents(convention.id):
            raise ConflictError("Convention is still linked to projects")
        self.repo.delete(convention)
        logger.info("Convention %s deleted by %s", convention_id, principal.username)

    # -------- Liaisons convention ↔ projet --------

    def link_project(
        self, convention_id: int, payload: ConventionProjectCreateIn, *, principal: Principal
    ) -> ConventionProject:
        self.get(convention_id)
        if not self.project_repo.get(payload.project_id):
            raise NotFoundError("Project not found")
        link = self.link_repo.create(convention_id=convention_id, project_id=payload.project_id)
        logger.info(
            "Project %s linked to convention %s by %s", payload.project_id, convention_id, principal.username
        )
        return link

    def unlink(self, link_id: int, *, principal: Principal) -> None:
        link = self.link_repo.get(link_id)
        if not link:
            raise NotFoundError("Convention project link not found")
        self.link_repo.delete(link)
        logger.info("Convention project link %s deleted by %s", link_id, principal.username)
