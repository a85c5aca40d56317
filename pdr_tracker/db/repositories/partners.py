from typing import Sequence
from sqlmodel import select, func

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.partners import Partner
from pdr_tracker.db.models.project_partners import ProjectPartner


class PartnerRepository(BaseRepository[Partner]):
    model = Partner

    def list_by_name(self) -> Sequence[Partner]:
        return self.session.exec(
            select(self.model).order_by(self.model.name.asc(), self.model.id.asc())
        ).all()

    def count_dependents(self, partner_id: int) -> int:
        return self.session.exec(
            select(func.count(ProjectPartner.id)).where(ProjectPartner.partner_id == partner_id)
        ).one()
