"""
Collaborator dependencies.

Every external collaborator is provided here so tests can swap them through
``app.dependency_overrides``.
"""

from fastapi import Depends, Request
from supabase import AsyncClient

from app.config import get_settings
from app.application.services.profile_resolver import ProfileResolver
from app.application.services.session_service import SessionBootstrapper
from app.domain.models.appointment import Appointment
from app.domain.models.invoice import Invoice
from app.domain.models.profile import UserProfile
from app.domain.models.user_session import UserSessionAudit
from app.domain.models.weight_log import WeightLog
from app.domain.repositories.appointment_repository import AppointmentRepository
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.file_storage import FileStorage
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.domain.repositories.profile_repository import ProfileRepository
from app.domain.repositories.session_audit_repository import SessionAuditRepository
from app.domain.repositories.weight_log_repository import WeightLogRepository
from app.infrastructure.repositories.appointment_repository import SupabaseAppointmentRepository
from app.infrastructure.repositories.invoice_repository import SupabaseInvoiceRepository
from app.infrastructure.repositories.profile_repository import SupabaseProfileRepository
from app.infrastructure.repositories.session_audit_repository import SupabaseSessionAuditRepository
from app.infrastructure.repositories.weight_log_repository import SupabaseWeightLogRepository
from app.infrastructure.session_events import SessionEvents
from app.infrastructure.storage import SupabaseFileStorage


def get_supabase(request: Request) -> AsyncClient:
    return request.app.state.supabase


def get_session_events(request: Request) -> SessionEvents:
    return request.app.state.session_events


def get_auth_gateway(request: Request) -> AuthGateway:
    return request.app.state.auth_gateway


def get_profile_repository(client: AsyncClient = Depends(get_supabase)) -> ProfileRepository:
    return SupabaseProfileRepository(client, UserProfile)


def get_weight_log_repository(client: AsyncClient = Depends(get_supabase)) -> WeightLogRepository:
    return SupabaseWeightLogRepository(client, WeightLog)


def get_appointment_repository(client: AsyncClient = Depends(get_supabase)) -> AppointmentRepository:
    return SupabaseAppointmentRepository(client, Appointment)


def get_invoice_repository(client: AsyncClient = Depends(get_supabase)) -> InvoiceRepository:
    return SupabaseInvoiceRepository(client, Invoice)


def get_session_audit_repository(client: AsyncClient = Depends(get_supabase)) -> SessionAuditRepository:
    return SupabaseSessionAuditRepository(client, UserSessionAudit)


def get_file_storage(client: AsyncClient = Depends(get_supabase)) -> FileStorage:
    return SupabaseFileStorage(client, get_settings().INVOICE_BUCKET)


def get_profile_resolver(repo: ProfileRepository = Depends(get_profile_repository)) -> ProfileResolver:
    return ProfileResolver(repo)


def get_session_bootstrapper(
    auth: AuthGateway = Depends(get_auth_gateway),
    resolver: ProfileResolver = Depends(get_profile_resolver),
    events: SessionEvents = Depends(get_session_events),
) -> SessionBootstrapper:
    return SessionBootstrapper(auth, resolver, events)
