import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session, select

from pdr_tracker.core.config import settings
from pdr_tracker.db.models.conventions import Convention
from pdr_tracker.db.models.convention_projects import ConventionProject
from pdr_tracker.db.models.financial_advances import FinancialAdvance
from pdr_tracker.db.models.local_users import LocalUser
from pdr_tracker.db.models.partners import Partner
from pdr_tracker.db.models.project_partners import ProjectPartner
from pdr_tracker.db.models.projects import Project
from pdr_tracker.security.passwords import hash_password

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).with_name("seed_data.yaml")


# -----------------------------
# Compte initial
# -----------------------------
def ensure_bootstrap_admin(session: Session) -> LocalUser | None:
    """
    Crée un admin si la table des comptes est vide et qu'un mot de passe
    initial est configuré (BOOTSTRAP_ADMIN_PASSWORD). Sinon ne fait rien.
    """
    if session.exec(select(LocalUser)).first() is not None:
        return None
    if not settings.BOOTSTRAP_ADMIN_PASSWORD:
        logger.warning("No user account exists and BOOTSTRAP_ADMIN_PASSWORD is not set")
        return None
    admin = LocalUser(
        username=settings.BOOTSTRAP_ADMIN_USERNAME,
        hashed_password=hash_password(settings.BOOTSTRAP_ADMIN_PASSWORD),
        role="admin",
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    logger.info("Bootstrap admin %r created", admin.username)
    return admin


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


def _money(value: Any) -> Decimal:
    return Decimal(str(value))


def _date(value: Any) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


# -----------------------------
# Seeders
# -----------------------------
def seed_users(session: Session, rows: List[Dict[str, Any]]) -> int:
    created = 0
    for row in rows:
        if session.exec(select(LocalUser).where(LocalUser.username == row["username"])).first():
            continue
        session.add(LocalUser(
            username=row["username"],
            hashed_password=hash_password(row["password"]),
            role=row.get("role", "user"),
        ))
        created += 1
    session.commit()
    return created


def seed_partners(session: Session, rows: List[Dict[str, Any]]) -> Dict[str, Partner]:
    """Retourne partner_key -> Partner (clé YAML, pas en base)."""
    by_key: Dict[str, Partner] = {}
    for row in rows:
        partner = session.exec(select(Partner).where(Partner.name == row["name"])).first()
        if not partner:
            partner = Partner(name=row["name"], type=row["type"])
            session.add(partner)
            session.flush()
        by_key[row["key"]] = partner
    session.commit()
    return by_key


def seed_projects(
    session: Session, rows: List[Dict[str, Any]], partners: Dict[str, Partner]
) -> Dict[str, Project]:
    """Retourne identifier -> Project ; ajoute contributions et avances des nouveaux projets."""
    by_identifier: Dict[str, Project] = {}
    for row in rows:
        project = session.exec(select(Project).where(Project.identifier == row["identifier"])).first()
        if project:
            by_identifier[project.identifier] = project
            continue

        project = Project(
            identifier=row["identifier"],
            title=row["title"],
            axis=row["axis"],
            domain=row["domain"],
            region=row["region"],
            province=row["province"],
            commune=row["commune"],
            budget=_money(row["budget"]),
            engagements=_money(row.get("engagements", 0)),
            payments=_money(row.get("payments", 0)),
            physical_progress=int(row.get("physical_progress", 0)),
            status=row.get("status", "active"),
        )
        session.add(project)
        session.flush()

        for contrib in row.get("partners", []):
            session.add(ProjectPartner(
                project_id=project.id,
                partner_id=partners[contrib["partner_key"]].id,
                year=int(contrib["year"]),
                planned_contribution=_money(contrib["planned_contribution"]),
                actual_contribution=_money(contrib.get("actual_contribution", 0)),
                status=contrib.get("status", "pending"),
            ))
        for advance in row.get("financial_advances", []):
            session.add(FinancialAdvance(
                project_id=project.id,
                reference_date=_date(advance["reference_date"]),
                engagement=_money(advance["engagement"]),
                payment=_money(advance["payment"]),
            ))
        by_identifier[project.identifier] = project
    session.commit()
    return by_identifier


def seed_conventions(session: Session, rows: List[Dict[str, Any]], projects: Dict[str, Project]) -> int:
    created = 0
    for row in rows:
        if session.exec(select(Convention).where(Convention.title == row["title"])).first():
            continue
        convention = Convention(
            title=row["title"],
            date_visa=_date(row.get("date_visa")),
            status=row["status"],
            programme=row["programme"],
            document_url=row.get("document_url"),
        )
        session.add(convention)
        session.flush()
        for identifier in row.get("projects", []):
            session.add(ConventionProject(convention_id=convention.id, project_id=projects[identifier].id))
        created += 1
    session.commit()
    return created


def seed_all(session: Session, seed_path: str | Path = DEFAULT_SEED_PATH) -> Dict[str, int]:
    """Charge le jeu de démonstration ; les enregistrements déjà présents sont ignorés."""
    data = load_seed_yaml(seed_path)
    users = seed_users(session, data.get("users", []))
    partners = seed_partners(session, data.get("partners", []))
    projects = seed_projects(session, data.get("projects", []), partners)
    conventions = seed_conventions(session, data.get("conventions", []), projects)
    summary = {
        "users": users,
        "partners": len(partners),
        "projects": len(projects),
        "conventions": conventions,
    }
    logger.info("Seed done: %s", summary)
    return summary
