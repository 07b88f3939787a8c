"""
Global exception handling for the application.
Standardizes error responses as {"error": {code, message, details, path}}.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Élément introuvable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ValidationException(AppError):
    """Input rejected before any call to the backend."""
    def __init__(self, message: str = "Données invalides", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Non authentifié", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Accès refusé", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class DashboardLoadError(AppError):
    """A joint dashboard fetch failed; no partial data is returned."""
    def __init__(self, message: str = "Impossible de charger les données", details: Optional[Dict[str, Any]] = None):
        details = {"retryable": True, **(details or {})}
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE, details)


class PartialFailureError(AppError):
    """A multi-step write where an earlier step succeeded and a later one failed."""
    def __init__(
        self,
        message: str,
        completed: list[str],
        failed: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = {"completed": completed, "failed": failed, **(details or {})}
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class DataStoreError(AppError):
    """The external data store rejected or failed a request."""
    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.code = code
        details = {"code": code, **(details or {})}
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class AuthProviderError(AppError):
    """The authentication provider rejected a request."""
    def __init__(self, message: str, code: Optional[str] = None, status_code: int = status.HTTP_401_UNAUTHORIZED):
        self.code = code
        super().__init__(message, status_code, {"code": code} if code else {})


class StorageError(AppError):
    """The object storage rejected an upload."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class ProfileNotFoundError(AppError):
    """No profile row appeared for a user after every retry."""
    def __init__(self, user_id: str, attempts: int):
        super().__init__(
            "Profil introuvable",
            status.HTTP_404_NOT_FOUND,
            {"user_id": user_id, "attempts": attempts},
        )


class ProfileFetchError(AppError):
    """The profile store failed for a reason other than a missing row."""
    def __init__(self, user_id: str, reason: str):
        super().__init__(
            "Erreur lors du chargement du profil",
            status.HTTP_502_BAD_GATEWAY,
            {"user_id": user_id, "reason": reason},
        )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.__class__.__name__,
                    "message": exc.message,
                    "details": exc.details,
                    "path": request.url.path,
                }
            },
        )

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "Une erreur inattendue est survenue. Veuillez réessayer.",
                "path": request.url.path,
            }
        },
    )
