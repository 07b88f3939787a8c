"""Admin client API — list, search, create and delete clients."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.application.services.admin_dashboard_service import create_client, delete_client, list_clients
from app.domain.models.profile import UserProfile
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.profile_repository import ProfileRepository
from app.domain.schemas.admin import ClientCreate, DeleteResult
from app.interfaces.api.deps import require_admin
from app.interfaces.deps import get_auth_gateway, get_profile_repository

router = APIRouter(prefix="/api/admin/clients", tags=["Admin"])


@router.get("", response_model=List[UserProfile])
async def list_clients_route(
    search: Optional[str] = None,
    admin: UserProfile = Depends(require_admin),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """List clients, filtered by name or email when ``search`` is given."""
    return await list_clients(profiles, search)


@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def create_client_route(
    body: ClientCreate,
    admin: UserProfile = Depends(require_admin),
    auth: AuthGateway = Depends(get_auth_gateway),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Create a client credential and its profile."""
    return await create_client(auth, profiles, body)


@router.delete("/{client_id}", response_model=DeleteResult)
async def delete_client_route(
    client_id: str,
    confirm: bool = False,
    admin: UserProfile = Depends(require_admin),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Delete a client profile. Irreversible; requires ``confirm=true``."""
    return await delete_client(profiles, client_id, confirm)
