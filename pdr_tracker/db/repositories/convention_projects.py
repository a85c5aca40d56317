from typing import Sequence
from sqlmodel import select

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.convention_projects import ConventionProject


class ConventionProjectRepository(BaseRepository[ConventionProject]):
    model = ConventionProject

    def list_for_convention(self, convention_id: int) -> Sequence[ConventionProject]:
        return self.session.exec(
            select(self.model)
            .where(self.model.convention_id == convention_id)
            .order_by(self.model.id.asc())
        ).all()

    def list_for_project(self, project_id: int) -> Sequence[ConventionProject]:
        return self.session.exec(
            select(self.model)
            .where(self.model.project_id == project_id)
            .order_by(self.model.id.asc())
        ).all()
