from typing import Optional, Sequence
from sqlmodel import select, func

from pdr_tracker.db.repositories.base import BaseRepository
from pdr_tracker.db.models.projects import Project
from pdr_tracker.db.models.project_partners import ProjectPartner
from pdr_tracker.db.models.convention_projects import ConventionProject
from pdr_tracker.db.models.financial_advances import FinancialAdvance

# Colonnes autorisées pour le tri (liste blanche)
SORTABLE_COLUMNS = {
    "identifier": Project.identifier,
    "title": Project.title,
    "axis": Project.axis,
    "domain": Project.domain,
    "budget": Project.budget,
    "created_at": Project.created_at,
}


class ProjectRepository(BaseRepository[Project]):
    """CRUD Projects + recherche / tri."""
    model = Project

    def get_by_identifier(self, identifier: str) -> Optional[Project]:
        return self.session.exec(
            select(self.model).where(self.model.identifier == identifier)
        ).first()

    def search(
        self,
        *,
        q: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Sequence[Project]:
        """
        - q          : recherche insensible à la casse sur le titre
        - sort_by    : une colonne de SORTABLE_COLUMNS (sinon created_at décroissant)
        - sort_order : "asc" (défaut si sort_by) | "desc"
        Les égalités sont départagées par ordre d'insertion (id).
        """
        stmt = select(self.model)
        if q:
            stmt = stmt.where(self.model.title.ilike(f"%{q}%"))

        if sort_by is None:
            stmt = stmt.order_by(self.model.created_at.desc(), self.model.id.desc())
        else:
            column = SORTABLE_COLUMNS[sort_by]
            if sort_order == "desc":
                stmt = stmt.order_by(column.desc(), self.model.id.asc())
            else:
                stmt = stmt.order_by(column.asc(), self.model.id.asc())

        return self.session.exec(stmt).all()

    def count_dependents(self, project_id: int) -> int:
        """Nombre de lignes (liaisons + avances) qui référencent ce projet."""
        total = 0
        for model in (ProjectPartner, ConventionProject, FinancialAdvance):
            total += self.session.exec(
                select(func.count(model.id)).where(model.project_id == project_id)
            ).one()
        return total
