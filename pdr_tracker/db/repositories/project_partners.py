from typing import Sequence
from sqlmodel import select

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.project_partners import ProjectPartner


class ProjectPartnerRepository(BaseRepository[ProjectPartner]):
    model = ProjectPartner

    def list_for_project(self, project_id: int) -> Sequence[ProjectPartner]:
        return self.session.exec(
            select(self.model)
            .where(self.model.project_id == project_id)
            .order_by(self.model.year.asc(), self.model.id.asc())
        ).all()
