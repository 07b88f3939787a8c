"""Portal state: who is signed in, their profile, and the active view."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from app.domain.models.profile import UserProfile
from app.domain.models.session import Session


class View(str, Enum):
    HOME = "home"
    DASHBOARD = "dashboard"
    PROFILE = "profile"


class DashboardKind(str, Enum):
    ADMIN = "admin"
    CLIENT = "client"


class PortalState(BaseModel):
    session: Optional[Session] = None
    profile: Optional[UserProfile] = None
    view: View = View.HOME
    initialized: bool = False

    @property
    def authenticated(self) -> bool:
        return self.session is not None and self.profile is not None


class PortalStateRead(BaseModel):
    """Public projection of PortalState; never carries the access token."""
    authenticated: bool
    view: View
    dashboard: Optional[DashboardKind] = None
    profile: Optional[UserProfile] = None
