"""View selection for the portal: home, dashboard or profile."""

from typing import Optional

from app.domain.models.profile import Role, UserProfile
from app.domain.schemas.portal import DashboardKind, PortalState, PortalStateRead, View


def dashboard_for(profile: UserProfile) -> DashboardKind:
    """Pick the dashboard variant for a profile's role."""
    if profile.role == Role.ADMIN:
        return DashboardKind.ADMIN
    if profile.role == Role.CLIENT:
        return DashboardKind.CLIENT
    raise ValueError(f"Unknown role: {profile.role!r}")


def select_view(state: PortalState, requested: Optional[View]) -> View:
    """Apply a navigation request. Without session and profile only home is reachable."""
    if not state.authenticated or requested is None:
        state.view = View.HOME
    else:
        state.view = requested
    return state.view


def render_view(state: PortalState) -> View:
    """The view to actually render, re-checked against the current state.

    A logout can land between navigation and rendering, so the stored view is
    never trusted on its own.
    """
    if not state.authenticated:
        state.view = View.HOME
    return state.view


def project(state: PortalState) -> PortalStateRead:
    view = render_view(state)
    dashboard = None
    if view == View.DASHBOARD:
        dashboard = dashboard_for(state.profile)
    return PortalStateRead(
        authenticated=state.authenticated,
        view=view,
        dashboard=dashboard,
        profile=state.profile if state.authenticated else None,
    )
