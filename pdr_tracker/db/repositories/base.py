from typing import Any, Dict, Generic, Iterable, Optional, Type, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, Session, select

from pdr_tracker.core.errors import ConflictError

# Type générique pour le modèle (Project, LocalUser, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 Une violation de contrainte (unicité, clé étrangère) devient une ConflictError
       après rollback : le texte brut du driver ne sort pas d'ici.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def get_many(self, ids: Iterable[int]) -> Dict[int, ModelT]:
        """Charge plusieurs enregistrements en une requête, indexés par id."""
        wanted = set(ids)
        if not wanted:
            return {}
        rows = self.session.exec(select(self.model).where(self.model.id.in_(wanted))).all()
        return {row.id: row for row in rows}

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Met à jour un enregistrement existant (champs fournis uniquement)."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self._commit()

    # ---------- HELPERS ----------

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError(f"{self.model.__name__} violates a store constraint")
