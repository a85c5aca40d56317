from typing import Sequence
from sqlmodel import select

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.financial_advances import FinancialAdvance


class FinancialAdvanceRepository(BaseRepository[FinancialAdvance]):
    model = FinancialAdvance

    def list_for_project(self, project_id: int) -> Sequence[FinancialAdvance]:
        """Avances d'un projet, la plus récente (date de référence) d'abord."""
        return self.session.exec(
            select(self.model)
            .where(self.model.project_id == project_id)
            .order_by(self.model.reference_date.desc(), self.model.id.desc())
        ).all()
