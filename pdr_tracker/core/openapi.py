"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec les
conventions de l'API (session, rôles, format des erreurs).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Suivi des projets, conventions, partenaires et avances financières "
            "des programmes de développement régional.\n\n"
            "### Conventions\n"
            "- Authentification par cookie de session (`POST /api/v1/auth/login`).\n"
            "- Rôles : `admin` (tout), `user` (lecture + écriture), `superviseur` (lecture seule).\n"
            "- Erreurs : `{\"message\": ...}` ; les erreurs de validation (400) ajoutent "
            "`errors: [{field, message}]`.\n"
            "- Toutes les heures sont en UTC, les montants sont des décimaux sérialisés en texte.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
