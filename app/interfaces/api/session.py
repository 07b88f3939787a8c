"""Session API — the bootstrapped portal state and view navigation."""

from typing import Optional

from fastapi import APIRouter, Depends

from app.application.services.view_router import project, select_view
from app.domain.schemas.portal import PortalState, PortalStateRead, View
from app.interfaces.api.deps import get_portal_state

router = APIRouter(prefix="/api/session", tags=["Session"])


@router.get("", response_model=PortalStateRead)
async def current_session(state: PortalState = Depends(get_portal_state)):
    """Session, profile and default view for the caller's token (if any)."""
    return project(state)


@router.get("/view", response_model=PortalStateRead)
async def navigate(
    requested: Optional[View] = None,
    state: PortalState = Depends(get_portal_state),
):
    """Request a view; anything but home needs a session and a profile."""
    select_view(state, requested)
    return project(state)
