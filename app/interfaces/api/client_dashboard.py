"""Client dashboard API — weight tracking and appointments."""

from fastapi import APIRouter, Depends, status

from app.application.services.client_dashboard_service import add_weight, load_dashboard
from app.domain.models.profile import UserProfile
from app.domain.repositories.appointment_repository import AppointmentRepository
from app.domain.repositories.weight_log_repository import WeightLogRepository
from app.domain.schemas.dashboard import ClientDashboard, WeightCreate
from app.interfaces.api.deps import require_client
from app.interfaces.deps import get_appointment_repository, get_weight_log_repository

router = APIRouter(prefix="/api/client", tags=["Client"])


@router.get("/dashboard", response_model=ClientDashboard)
async def client_dashboard(
    profile: UserProfile = Depends(require_client),
    weights: WeightLogRepository = Depends(get_weight_log_repository),
    appointments: AppointmentRepository = Depends(get_appointment_repository),
):
    """Get the signed-in client's weights, stats and appointments."""
    return await load_dashboard(weights, appointments, profile.id)


@router.post("/weights", response_model=ClientDashboard, status_code=status.HTTP_201_CREATED)
async def record_weight(
    body: WeightCreate,
    profile: UserProfile = Depends(require_client),
    weights: WeightLogRepository = Depends(get_weight_log_repository),
    appointments: AppointmentRepository = Depends(get_appointment_repository),
):
    """Record a weight and return the dashboard reloaded from the store."""
    return await add_weight(weights, appointments, profile.id, body.weight)
