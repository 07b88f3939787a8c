"""Auth service — login, admin login, sign-up and logout."""

from datetime import datetime, timezone
from typing import Optional, Tuple

import structlog

from app.application.services.profile_resolver import ProfileResolver
from app.core.exceptions import (
    AppError,
    AuthProviderError,
    DataStoreError,
    ForbiddenException,
    PartialFailureError,
    ProfileFetchError,
    ProfileNotFoundError,
    UnauthorizedException,
    ValidationException,
)
from app.domain.models.profile import Role, UserProfile
from app.domain.models.session import Session
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.session_audit_repository import SessionAuditRepository
from app.domain.repositories.weight_log_repository import WeightLogRepository
from app.infrastructure.session_events import SessionEvent, SessionEvents

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"
INVALID_CREDENTIALS_CODE = "invalid_credentials"


def validate_login(email: str, password: str) -> None:
    """Reject malformed credentials before any call to the provider."""
    if not email or not email.strip() or "@" not in email:
        raise ValidationException("Veuillez saisir une adresse email valide", {"field": "email"})
    if not password:
        raise ValidationException("Veuillez saisir votre mot de passe", {"field": "password"})


def localize_auth_error(exc: AuthProviderError) -> UnauthorizedException:
    if exc.message == INVALID_CREDENTIALS or exc.code == INVALID_CREDENTIALS_CODE:
        return UnauthorizedException("Email ou mot de passe incorrect")
    return UnauthorizedException(exc.message)


async def _discard_session(auth: AuthGateway, events: SessionEvents, session: Session) -> None:
    """Invalidate a session we refuse to hand out."""
    events.revoke(session.access_token, session.expires_at)
    try:
        await auth.sign_out(session.access_token)
    except AuthProviderError as e:
        logger.error("Sign-out of refused session failed", user_id=session.user_id, error=e.message)


async def _authenticate(
    auth: AuthGateway,
    resolver: ProfileResolver,
    events: SessionEvents,
    email: str,
    password: str,
) -> Tuple[Session, UserProfile]:
    validate_login(email, password)
    try:
        session = await auth.sign_in(email.strip(), password)
    except AuthProviderError as e:
        logger.info("Login rejected", email=email, reason=e.message)
        raise localize_auth_error(e) from e

    try:
        profile = await resolver.resolve(session.user_id)
    except (ProfileNotFoundError, ProfileFetchError):
        await _discard_session(auth, events, session)
        raise
    return session, profile


async def login(
    auth: AuthGateway,
    resolver: ProfileResolver,
    events: SessionEvents,
    email: str,
    password: str,
) -> Tuple[Session, UserProfile]:
    session, profile = await _authenticate(auth, resolver, events, email, password)
    logger.info("User logged in", user_id=session.user_id, role=profile.role.value)
    await events.publish(session.user_id, SessionEvent.SIGNED_IN, session)
    return session, profile


async def admin_login(
    auth: AuthGateway,
    resolver: ProfileResolver,
    events: SessionEvents,
    email: str,
    password: str,
) -> Tuple[Session, UserProfile]:
    """Login that only ever yields a session for an admin profile."""
    session, profile = await _authenticate(auth, resolver, events, email, password)
    if profile.role != Role.ADMIN:
        logger.warning("Admin login refused for non-admin", user_id=session.user_id, role=profile.role.value)
        await _discard_session(auth, events, session)
        raise ForbiddenException("Accès réservé aux administrateurs")

    logger.info("Admin logged in", user_id=session.user_id)
    await events.publish(session.user_id, SessionEvent.SIGNED_IN, session)
    return session, profile


async def signup(
    auth: AuthGateway,
    resolver: ProfileResolver,
    events: SessionEvents,
    full_name: str,
    email: str,
    password: str,
) -> Tuple[Session, UserProfile]:
    """Register a client. The provider creates the profile row from the metadata."""
    validate_login(email, password)
    if not full_name or not full_name.strip():
        raise ValidationException("Veuillez saisir votre nom", {"field": "full_name"})

    try:
        session = await auth.sign_up(
            email.strip(),
            password,
            {"full_name": full_name.strip(), "role": Role.CLIENT.value},
        )
    except AuthProviderError as e:
        logger.info("Sign-up rejected", email=email, reason=e.message)
        raise localize_auth_error(e) from e

    try:
        profile = await resolver.resolve(session.user_id)
    except (ProfileNotFoundError, ProfileFetchError) as e:
        logger.error("Signed-up client has no profile", user_id=session.user_id, error=e.message)
        await _discard_session(auth, events, session)
        raise PartialFailureError(
            "Compte créé, mais le profil n'a pas pu être chargé. Veuillez vous connecter.",
            completed=["credential"],
            failed="profile",
            details={"user_id": session.user_id},
        ) from e

    logger.info("Client signed up", user_id=session.user_id)
    await events.publish(session.user_id, SessionEvent.SIGNED_IN, session)
    return session, profile


async def logout(
    auth: AuthGateway,
    events: SessionEvents,
    weights: WeightLogRepository,
    audits: SessionAuditRepository,
    session: Session,
    profile: Optional[UserProfile],
) -> bool:
    """Sign out, then record the logout in the audit trail.

    Returns whether the audit row was written. A failed audit never keeps the
    user signed in.
    """
    try:
        await auth.sign_out(session.access_token)
    except AuthProviderError as e:
        logger.error("Sign-out failed", user_id=session.user_id, error=e.message)
        raise AppError(
            "Une erreur est survenue lors de la déconnexion. Veuillez réessayer.",
            status_code=502,
        ) from e

    events.revoke(session.access_token, session.expires_at)
    await events.publish(session.user_id, SessionEvent.SIGNED_OUT)

    try:
        last_weight = None
        if profile is None or profile.role == Role.CLIENT:
            latest = await weights.latest_for_client(session.user_id)
            last_weight = latest.weight if latest else None
        await audits.create(
            {
                "user_id": session.user_id,
                "logout_time": datetime.now(timezone.utc).isoformat(),
                "last_weight": last_weight,
            }
        )
    except DataStoreError as e:
        logger.error("Logout audit write failed", user_id=session.user_id, error=e.message)
        return False

    logger.info("User logged out", user_id=session.user_id)
    return True
