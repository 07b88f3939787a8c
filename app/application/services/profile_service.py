"""Profile edit — one row update, then the credential email when it changed."""

import structlog

from app.core.exceptions import AuthProviderError
from app.domain.models.profile import UserProfile
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.profile_repository import ProfileRepository
from app.domain.schemas.profile import ProfileUpdate, ProfileUpdateResult
from app.infrastructure.session_events import SessionEvent, SessionEvents

logger = structlog.get_logger(__name__)


async def update_profile(
    profiles: ProfileRepository,
    auth: AuthGateway,
    events: SessionEvents,
    profile: UserProfile,
    changes: ProfileUpdate,
) -> ProfileUpdateResult:
    updated = await profiles.update(profile.id, changes.row_fields())
    result = ProfileUpdateResult(profile=updated, email_updated=False)

    new_email = changes.email.strip()
    if new_email and new_email != profile.email:
        try:
            await auth.update_email(profile.id, new_email)
        except AuthProviderError as e:
            logger.warning(
                "Profile saved but email update failed",
                user_id=profile.id,
                error=e.message,
            )
            result.partial_failure = True
            result.error = f"Profil enregistré, mais l'email n'a pas pu être modifié : {e.message}"
        else:
            result.email_updated = True

    await events.publish(profile.id, SessionEvent.PROFILE_UPDATED)
    return result
