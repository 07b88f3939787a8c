"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.core.exceptions import AppError, global_exception_handler
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.infrastructure.auth_gateway import SupabaseAuthGateway
from app.infrastructure.session_events import SessionEvents
from app.infrastructure.supabase_client import create_anon_client, create_service_client

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.session import router as session_router
from app.interfaces.api.profile import router as profile_router
from app.interfaces.api.client_dashboard import router as client_dashboard_router
from app.interfaces.api.dashboard import router as admin_dashboard_router
from app.interfaces.api.clients import router as clients_router
from app.interfaces.api.invoices import router as invoices_router
from app.interfaces.api.ui_config import router as ui_config_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the Supabase collaborators for the app lifetime."""
    logger.info("Starting Coach Portal API...", env=settings.ENVIRONMENT)

    service_client = await create_service_client()
    anon_client = await create_anon_client()
    events = SessionEvents()

    app.state.supabase = service_client
    app.state.session_events = events
    app.state.auth_gateway = SupabaseAuthGateway(anon_client, service_client, events)
    logger.info("Supabase clients ready", url=settings.SUPABASE_URL)

    yield

    logger.info("Coach Portal API stopped")


app = FastAPI(
    title="Coach Portal",
    description="API backend : espace client et administration du coaching",
    version="1.0.0",
    lifespan=lifespan,
)

# Correlation ID, request logging, CORS
setup_middleware(app)

# Known application errors render as JSON; anything else becomes a logged 500
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Include routers
app.include_router(auth_router)
app.include_router(session_router)
app.include_router(profile_router)
app.include_router(client_dashboard_router)
app.include_router(admin_dashboard_router)
app.include_router(clients_router)
app.include_router(invoices_router)
app.include_router(ui_config_router)


@app.get("/")
def root():
    return {
        "name": "Coach Portal",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
