"""Auth API routes — login, admin login, signup, logout."""

from fastapi import APIRouter, Depends, status

from app.application.services.auth_service import admin_login, login, logout, signup
from app.application.services.profile_resolver import ProfileResolver
from app.domain.models.session import Session
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.session_audit_repository import SessionAuditRepository
from app.domain.repositories.weight_log_repository import WeightLogRepository
from app.domain.schemas.auth import LoginRequest, LogoutResponse, SignupRequest, TokenResponse
from app.domain.schemas.portal import PortalState
from app.infrastructure.session_events import SessionEvents
from app.interfaces.api.deps import get_current_session, get_portal_state
from app.interfaces.deps import (
    get_auth_gateway,
    get_profile_resolver,
    get_session_audit_repository,
    get_session_events,
    get_weight_log_repository,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
async def login_route(
    body: LoginRequest,
    auth: AuthGateway = Depends(get_auth_gateway),
    resolver: ProfileResolver = Depends(get_profile_resolver),
    events: SessionEvents = Depends(get_session_events),
):
    """Login and return an access token with the caller's profile."""
    session, profile = await login(auth, resolver, events, body.email, body.password)
    return TokenResponse(access_token=session.access_token, profile=profile)


@router.post("/admin/login", response_model=TokenResponse)
async def admin_login_route(
    body: LoginRequest,
    auth: AuthGateway = Depends(get_auth_gateway),
    resolver: ProfileResolver = Depends(get_profile_resolver),
    events: SessionEvents = Depends(get_session_events),
):
    """Login reserved to admins; a non-admin credential is signed out again."""
    session, profile = await admin_login(auth, resolver, events, body.email, body.password)
    return TokenResponse(access_token=session.access_token, profile=profile)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup_route(
    body: SignupRequest,
    auth: AuthGateway = Depends(get_auth_gateway),
    resolver: ProfileResolver = Depends(get_profile_resolver),
    events: SessionEvents = Depends(get_session_events),
):
    """Register a new client account."""
    session, profile = await signup(auth, resolver, events, body.full_name, body.email, body.password)
    return TokenResponse(access_token=session.access_token, profile=profile)


@router.post("/logout", response_model=LogoutResponse)
async def logout_route(
    session: Session = Depends(get_current_session),
    state: PortalState = Depends(get_portal_state),
    auth: AuthGateway = Depends(get_auth_gateway),
    events: SessionEvents = Depends(get_session_events),
    weights: WeightLogRepository = Depends(get_weight_log_repository),
    audits: SessionAuditRepository = Depends(get_session_audit_repository),
):
    """Sign out, then record the logout with the client's last weight."""
    profile = state.profile
    audited = await logout(auth, events, weights, audits, session, profile)
    return LogoutResponse(audited=audited)
