"""Session bootstrap — builds the portal state for a token and keeps it
consistent with sign-in, sign-out and profile-update notifications."""

import asyncio
from typing import Callable, Optional

import structlog

from app.core.exceptions import ProfileFetchError, ProfileNotFoundError
from app.domain.models.session import Session
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.schemas.portal import PortalState, View
from app.application.services.profile_resolver import ProfileResolver
from app.infrastructure.session_events import SessionEvent, SessionEvents

logger = structlog.get_logger(__name__)


class SessionBootstrapper:
    def __init__(self, auth: AuthGateway, resolver: ProfileResolver, events: SessionEvents):
        self.auth = auth
        self.resolver = resolver
        self.events = events
        self.state = PortalState()
        self._lock = asyncio.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._last_sign_in: Optional[str] = None

    async def start(self, access_token: Optional[str]) -> PortalState:
        """Resolve session and profile, then listen for changes.

        ``initialized`` is only set once the profile lookup has finished, so a
        caller never sees a session without its profile.
        """
        async with self._lock:
            session = await self.auth.get_session(access_token) if access_token else None
            if session is not None:
                self.state.session = session
                self._last_sign_in = session.access_token
                await self._load_profile(session)
            if self.state.session is not None:
                self._unsubscribe = self.events.subscribe(session.user_id, self.on_change)
            self.state.initialized = True
        return self.state

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def on_change(self, event: SessionEvent, session: Optional[Session]) -> None:
        async with self._lock:
            if event == SessionEvent.SIGNED_OUT:
                logger.info("Session ended", user_id=self._user_id())
                self._clear()
                return

            session = session or self.state.session
            if session is None:
                self._clear()
                return
            # One profile fetch per sign-in, however many times it is announced
            if event == SessionEvent.SIGNED_IN and session.access_token == self._last_sign_in:
                return
            if event == SessionEvent.SIGNED_IN:
                self._last_sign_in = session.access_token

            self.state.session = session
            await self._load_profile(session)

    async def _load_profile(self, session: Session) -> None:
        try:
            self.state.profile = await self.resolver.resolve(session.user_id)
        except (ProfileNotFoundError, ProfileFetchError) as e:
            logger.warning("No usable profile for session", user_id=session.user_id, reason=e.message)
            self._clear()

    def _clear(self) -> None:
        self.state.session = None
        self.state.profile = None
        self.state.view = View.HOME

    def _user_id(self) -> Optional[str]:
        return self.state.session.user_id if self.state.session else None
