"""In-process session-change notifications.

The auth endpoints publish sign-in, sign-out and profile updates here; request
handlers that hold a portal state subscribe for their own user. Signed-out
tokens are remembered until they expire so a logged-out token is refused even
though the JWT itself is still valid.
"""

import asyncio
from collections import defaultdict
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional

import structlog

from app.domain.models.session import Session

logger = structlog.get_logger(__name__)


class SessionEvent(str, Enum):
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"
    PROFILE_UPDATED = "profile_updated"


Listener = Callable[[SessionEvent, Optional[Session]], Awaitable[None]]


class SessionEvents:
    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._revoked: Dict[str, Optional[datetime]] = {}

    def subscribe(self, user_id: str, listener: Listener) -> Callable[[], None]:
        """Register a listener for one user. Returns the unsubscribe callable."""
        self._listeners[user_id].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(user_id)
            if listeners and listener in listeners:
                listeners.remove(listener)
                if not listeners:
                    del self._listeners[user_id]

        return unsubscribe

    def listener_count(self, user_id: str) -> int:
        return len(self._listeners.get(user_id, []))

    async def publish(self, user_id: str, event: SessionEvent, session: Optional[Session] = None) -> None:
        listeners = list(self._listeners.get(user_id, []))
        if not listeners:
            return
        logger.debug("Publishing session event", user_id=user_id, session_event=event.value, listeners=len(listeners))
        results = await asyncio.gather(
            *(listener(event, session) for listener in listeners),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error("Session listener failed", user_id=user_id, session_event=event.value, error=str(result))

    def revoke(self, access_token: str, expires_at: Optional[datetime] = None) -> None:
        self._prune()
        self._revoked[access_token] = expires_at

    def is_revoked(self, access_token: str) -> bool:
        self._prune()
        return access_token in self._revoked

    def _prune(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [token for token, exp in self._revoked.items() if exp is not None and exp <= now]
        for token in expired:
            del self._revoked[token]
