"""FastAPI dependencies — session bootstrap and role guards."""

from typing import AsyncIterator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.services.session_service import SessionBootstrapper
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.domain.models.profile import Role, UserProfile
from app.domain.models.session import Session
from app.domain.schemas.portal import PortalState
from app.interfaces.deps import get_session_bootstrapper

security = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_portal_state(
    token: Optional[str] = Depends(get_access_token),
    bootstrapper: SessionBootstrapper = Depends(get_session_bootstrapper),
) -> AsyncIterator[PortalState]:
    """Portal state for the lifetime of one request.

    The bootstrapper keeps listening for session changes until the response
    is sent, so a concurrent logout clears the state mid-request.
    """
    state = await bootstrapper.start(token)
    try:
        yield state
    finally:
        bootstrapper.stop()


def get_current_session(state: PortalState = Depends(get_portal_state)) -> Session:
    if state.session is None:
        raise UnauthorizedException(
            "Token invalide ou expiré",
            {"www_authenticate": "Bearer"},
        )
    return state.session


def get_current_profile(state: PortalState = Depends(get_portal_state)) -> UserProfile:
    if not state.authenticated:
        raise UnauthorizedException("Session expirée ou profil introuvable")
    return state.profile


def require_client(profile: UserProfile = Depends(get_current_profile)) -> UserProfile:
    if profile.role != Role.CLIENT:
        raise ForbiddenException("Espace réservé aux clients")
    return profile


def require_admin(profile: UserProfile = Depends(get_current_profile)) -> UserProfile:
    """Require admin role."""
    if profile.role != Role.ADMIN:
        raise ForbiddenException("Accès réservé aux administrateurs")
    return profile
