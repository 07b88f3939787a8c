"""Admin dashboard API — overview stats, revenue chart data, audit trail."""

from typing import List

from fastapi import APIRouter, Depends

from app.application.services.admin_dashboard_service import load_dashboard
from app.core.exceptions import DashboardLoadError, DataStoreError
from app.domain.models.profile import UserProfile
from app.domain.models.user_session import UserSessionAudit
from app.domain.repositories.appointment_repository import AppointmentRepository
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.domain.repositories.profile_repository import ProfileRepository
from app.domain.repositories.session_audit_repository import SessionAuditRepository
from app.domain.schemas.dashboard import AdminDashboard
from app.interfaces.api.deps import require_admin
from app.interfaces.deps import (
    get_appointment_repository,
    get_invoice_repository,
    get_profile_repository,
    get_session_audit_repository,
)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/dashboard", response_model=AdminDashboard)
async def admin_dashboard(
    admin: UserProfile = Depends(require_admin),
    profiles: ProfileRepository = Depends(get_profile_repository),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    appointments: AppointmentRepository = Depends(get_appointment_repository),
    audits: SessionAuditRepository = Depends(get_session_audit_repository),
):
    """Get all admin dashboard data in a single request."""
    return await load_dashboard(profiles, invoices, appointments, audits)


@router.get("/sessions", response_model=List[UserSessionAudit])
async def logout_audit(
    admin: UserProfile = Depends(require_admin),
    audits: SessionAuditRepository = Depends(get_session_audit_repository),
):
    """List logouts, most recent first."""
    try:
        return await audits.list_with_profiles()
    except DataStoreError as e:
        raise DashboardLoadError(details={"reason": e.message}) from e
