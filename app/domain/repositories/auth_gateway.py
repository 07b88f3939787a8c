"""
Auth Gateway Interface.
Everything the service consumes from the authentication provider.
"""

from typing import Any, Dict, Optional, Protocol

from app.domain.models.session import Session


class AuthGateway(Protocol):

    async def get_session(self, access_token: str) -> Optional[Session]:
        """Return the live session behind a token, or None."""
        ...

    async def sign_in(self, email: str, password: str) -> Session:
        ...

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> Session:
        ...

    async def sign_out(self, access_token: str) -> None:
        ...

    async def update_email(self, user_id: str, email: str) -> None:
        ...

    async def create_user(self, email: str, password: str) -> str:
        """Provision a confirmed credential and return its user id."""
        ...

    async def delete_user(self, user_id: str) -> None:
        ...
