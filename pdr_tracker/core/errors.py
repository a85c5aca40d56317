"""
➡️ But : Une taxonomie d'erreurs unique pour toute l'API.

Les services et dépendances lèvent ces exceptions ; les handlers enregistrés
dans main.py les traduisent en réponses HTTP. Aucun texte brut de la base
ne remonte au client.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

FieldError = Tuple[str, str]  # (chemin du champ, message)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class ValidationFailedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, errors: Iterable[FieldError], message: Optional[str] = None):
        self.errors: List[FieldError] = list(errors)
        super().__init__(message)


# -----------------------------
# Helpers
# -----------------------------

def is_json_decode_error(exc: RequestValidationError) -> bool:
    """Corps JSON illisible (et non un champ invalide)."""
    return any(e.get("type") == "json_invalid" for e in exc.errors())


def _field_path(loc) -> str:
    parts = list(loc)
    # on retire la source ("body", "query", "path") pour ne garder que le champ
    if parts and parts[0] in ("body", "query", "path", "header", "cookie"):
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "__root__"


def _errors_payload(errors: Iterable[FieldError]) -> List[dict]:
    return [{"field": field, "message": message} for field, message in errors]


# -----------------------------
# Handlers
# -----------------------------

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    body = {"message": exc.message}
    if isinstance(exc, ValidationFailedError):
        body["errors"] = _errors_payload(exc.errors)
    if isinstance(exc, UnauthenticatedError):
        logger.warning("Unauthenticated request on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        (
            "body" if e.get("type") == "json_invalid" else _field_path(e.get("loc", ())),
            e.get("msg", "Invalid value"),
        )
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": _errors_payload(errors)},
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, internal_error_handler)
