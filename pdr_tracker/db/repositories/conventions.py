from typing import Sequence
from sqlmodel import select, func

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.conventions import Convention
from pdr_tracker.db.models.convention_projects import ConventionProject


class ConventionRepository(BaseRepository[Convention]):
    model = Convention

    def list_newest_first(self) -> Sequence[Convention]:
        return self.session.exec(
            select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
        ).all()

    def count_dependents(self, convention_id: int) -> int:
        return self.session.exec(
            select(func.count(ConventionProject.id)).where(ConventionProject.convention_id == convention_id)
        ).one()
