"""Profile API — read and edit the signed-in user's profile."""

from fastapi import APIRouter, Depends

from app.application.services.profile_service import update_profile
from app.domain.models.profile import UserProfile
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.profile_repository import ProfileRepository
from app.domain.schemas.profile import ProfileUpdate, ProfileUpdateResult
from app.infrastructure.session_events import SessionEvents
from app.interfaces.api.deps import get_current_profile
from app.interfaces.deps import get_auth_gateway, get_profile_repository, get_session_events

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", response_model=UserProfile)
async def get_profile(profile: UserProfile = Depends(get_current_profile)):
    """Get the signed-in user's profile."""
    return profile


@router.put("", response_model=ProfileUpdateResult)
async def edit_profile(
    body: ProfileUpdate,
    profile: UserProfile = Depends(get_current_profile),
    profiles: ProfileRepository = Depends(get_profile_repository),
    auth: AuthGateway = Depends(get_auth_gateway),
    events: SessionEvents = Depends(get_session_events),
):
    """Update the profile; a changed email is also sent to the auth provider."""
    return await update_profile(profiles, auth, events, profile, body)
