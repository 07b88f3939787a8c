"""Client dashboard — weight tracking and upcoming appointments."""

import asyncio
import math
from datetime import date, datetime
from statistics import fmean
from typing import List, Optional, Tuple, Union

import pytz
import structlog

from app.config import get_settings
from app.core.exceptions import DashboardLoadError, DataStoreError, ValidationException
from app.domain.models.weight_log import MAX_WEIGHT_KG, WeightLog
from app.domain.repositories.appointment_repository import AppointmentRepository
from app.domain.repositories.weight_log_repository import WeightLogRepository
from app.domain.schemas.dashboard import ClientDashboard, Trend, WeightPoint, WeightStats

logger = structlog.get_logger(__name__)

# Differences within this band count as stable (decimal entry noise)
TREND_THRESHOLD = 0.1


def parse_weight(raw: Union[str, float, int, None]) -> float:
    """Validate a weight entry. Each rejection has its own message."""
    try:
        value = float(str(raw).strip().replace(",", "."))
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        raise ValidationException("Le poids doit être un nombre valide", {"field": "weight"})
    if value <= 0:
        raise ValidationException("Le poids doit être supérieur à 0", {"field": "weight"})
    if value > MAX_WEIGHT_KG:
        raise ValidationException(f"Le poids semble invalide (> {MAX_WEIGHT_KG}kg)", {"field": "weight"})
    return value


def trend_for(difference: float) -> Trend:
    if difference > TREND_THRESHOLD:
        return Trend.UP
    if difference < -TREND_THRESHOLD:
        return Trend.DOWN
    return Trend.STABLE


def _entry_order(log: WeightLog) -> Tuple[date, float]:
    # Same-day entries keep the order they were recorded in
    recorded = log.created_at.timestamp() if log.created_at else float("-inf")
    return log.date, recorded


def chronological(logs: List[WeightLog]) -> List[WeightLog]:
    return sorted(logs, key=_entry_order)


def weight_stats(logs: List[WeightLog]) -> Optional[WeightStats]:
    if not logs:
        return None
    ordered = chronological(logs)
    values = [log.weight for log in ordered]
    initial, current = values[0], values[-1]
    difference = current - initial
    return WeightStats(
        initial=initial,
        current=current,
        difference=round(difference, 2),
        trend=trend_for(difference),
        average=round(fmean(values), 2),
        minimum=min(values),
        maximum=max(values),
    )


def chart_points(logs: List[WeightLog]) -> List[WeightPoint]:
    return [
        WeightPoint(date=log.date, label=log.date.strftime("%d/%m/%Y"), weight=log.weight)
        for log in chronological(logs)
    ]


def today() -> date:
    tz = pytz.timezone(get_settings().TIMEZONE)
    return datetime.now(tz).date()


async def load_dashboard(
    weights: WeightLogRepository,
    appointments: AppointmentRepository,
    client_id: str,
) -> ClientDashboard:
    """Fetch weights and appointments together; either failing fails the load."""
    try:
        logs, client_appointments = await asyncio.gather(
            weights.list_for_client(client_id),
            appointments.list_for_client(client_id),
        )
    except DataStoreError as e:
        logger.error("Client dashboard load failed", client_id=client_id, error=e.message)
        raise DashboardLoadError(details={"reason": e.message}) from e

    return ClientDashboard(
        weights=chart_points(logs),
        stats=weight_stats(logs),
        appointments=sorted(client_appointments, key=lambda a: a.date_time),
    )


async def add_weight(
    weights: WeightLogRepository,
    appointments: AppointmentRepository,
    client_id: str,
    raw_weight: Union[str, float],
    on: Optional[date] = None,
) -> ClientDashboard:
    """Record a weight, then reload the whole dashboard from the store."""
    value = parse_weight(raw_weight)
    await weights.create(
        {
            "client_id": client_id,
            "weight": value,
            "date": (on or today()).isoformat(),
        }
    )
    logger.info("Weight recorded", client_id=client_id, weight=value)
    return await load_dashboard(weights, appointments, client_id)
