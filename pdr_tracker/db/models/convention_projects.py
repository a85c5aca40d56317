from sqlmodel import Field

from .base import CreatedModelDB


class ConventionProject(CreatedModelDB, table=True):
    __tablename__ = "convention_projects"

    convention_id: int = Field(index=True, foreign_key="conventions.id")
    project_id: int = Field(index=True, foreign_key="projects.id")
