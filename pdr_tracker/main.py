"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

CORS, logging, handlers d'erreurs (taxonomie 400/401/403/404/409/500)

titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers (ex : /api/v1/projects).

Initialise la base et le compte admin initial au démarrage.

Point unique d’exécution : uvicorn pdr_tracker.main:app --reload.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from pdr_tracker.core.config import settings
from pdr_tracker.core.errors import register_exception_handlers
from pdr_tracker.core.logging import configure_logging
from pdr_tracker.core.openapi import custom_openapi
from pdr_tracker.db.seed import ensure_bootstrap_admin
from pdr_tracker.db.session import engine, init_db

from pdr_tracker.api.v1.routers import authentication, projects, conventions, partners, links, users

import uvicorn

app = FastAPI(
    title=settings.APP_NAME,
    version="0.0.1",
    openapi_tags=[
        {"name": "auth", "description": "Connexion, déconnexion, utilisateur courant"},
        {"name": "projects", "description": "Projets, leurs partenaires, conventions et avances"},
        {"name": "conventions", "description": "Conventions et projets rattachés"},
        {"name": "partners", "description": "Partenaires financiers"},
        {"name": "links", "description": "Contributions, rattachements et avances adressés par id"},
        {"name": "users", "description": "Gestion des comptes (admin)"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(authentication.router, prefix="/api/v1")
app.include_router(projects.router, prefix="/api/v1")
app.include_router(conventions.router, prefix="/api/v1")
app.include_router(partners.router, prefix="/api/v1")
app.include_router(links.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")

app.openapi = lambda: custom_openapi(app)


@app.get("/health", tags=["health"], summary="Vérifier que l'API répond")
def health():
    return {"status": "ok"}


# Démarrage
@app.on_event("startup")
def on_startup():
    configure_logging()
    init_db()
    with Session(engine) as session:
        ensure_bootstrap_admin(session)

if __name__ == "__main__":
    uvicorn.run("pdr_tracker.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
