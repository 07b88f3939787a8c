"""Supabase async client factory."""

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from app.config import get_settings


def _server_options() -> AsyncClientOptions:
    # The service never keeps a user session on a shared client
    return AsyncClientOptions(auto_refresh_token=False, persist_session=False)


async def create_service_client() -> AsyncClient:
    """Client using the service-role key: table access, storage, auth admin."""
    settings = get_settings()
    return await acreate_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        options=_server_options(),
    )


async def create_anon_client() -> AsyncClient:
    """Client using the anon key, only for password sign-in and sign-up."""
    settings = get_settings()
    return await acreate_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        options=_server_options(),
    )
