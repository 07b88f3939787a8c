"""Supabase Auth implementation of AuthGateway.

Password flows go through the anon client; credential administration goes
through the service-role client. Access tokens are verified locally against
the project's JWT secret.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from jose import JWTError, jwt
from supabase import AsyncClient, AuthError

from app.config import get_settings
from app.core.exceptions import AuthProviderError
from app.domain.models.session import Session
from app.infrastructure.session_events import SessionEvents

logger = structlog.get_logger(__name__)


def _provider_error(exc: AuthError) -> AuthProviderError:
    return AuthProviderError(exc.message, code=getattr(exc, "code", None))


def _to_session(auth_session) -> Session:
    expires_at = None
    if auth_session.expires_at:
        expires_at = datetime.fromtimestamp(auth_session.expires_at, tz=timezone.utc)
    return Session(
        user_id=auth_session.user.id,
        email=auth_session.user.email,
        access_token=auth_session.access_token,
        expires_at=expires_at,
    )


class SupabaseAuthGateway:
    def __init__(self, anon_client: AsyncClient, service_client: AsyncClient, events: SessionEvents):
        self.anon = anon_client
        self.admin = service_client.auth.admin
        self.events = events
        self.settings = get_settings()

    async def get_session(self, access_token: str) -> Optional[Session]:
        if not access_token or self.events.is_revoked(access_token):
            return None
        try:
            payload = jwt.decode(
                access_token,
                self.settings.SUPABASE_JWT_SECRET,
                algorithms=[self.settings.JWT_ALGORITHM],
                audience=self.settings.JWT_AUDIENCE,
            )
        except JWTError as e:
            logger.info("Rejected access token", reason=str(e))
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        exp = payload.get("exp")
        return Session(
            user_id=user_id,
            email=payload.get("email"),
            access_token=access_token,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
        )

    async def sign_in(self, email: str, password: str) -> Session:
        try:
            response = await self.anon.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            raise _provider_error(e) from e
        if response.session is None:
            raise AuthProviderError("Session non créée")
        return _to_session(response.session)

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> Session:
        try:
            response = await self.anon.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        except AuthError as e:
            raise _provider_error(e) from e
        if response.session is None:
            # Email confirmation is enabled on the project
            raise AuthProviderError("Veuillez confirmer votre email avant de vous connecter", code="email_not_confirmed")
        return _to_session(response.session)

    async def sign_out(self, access_token: str) -> None:
        try:
            await self.admin.sign_out(access_token)
        except AuthError as e:
            raise _provider_error(e) from e

    async def update_email(self, user_id: str, email: str) -> None:
        try:
            await self.admin.update_user_by_id(user_id, {"email": email})
        except AuthError as e:
            raise _provider_error(e) from e

    async def create_user(self, email: str, password: str) -> str:
        try:
            response = await self.admin.create_user(
                {"email": email, "password": password, "email_confirm": True}
            )
        except AuthError as e:
            raise _provider_error(e) from e
        return response.user.id

    async def delete_user(self, user_id: str) -> None:
        try:
            await self.admin.delete_user(user_id)
        except AuthError as e:
            raise _provider_error(e) from e
