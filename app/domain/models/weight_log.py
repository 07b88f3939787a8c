"""Weight log — mirrors the 'weight_logs' table (append-only)."""

from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel

MAX_WEIGHT_KG = 300


class WeightLog(BaseModel):
    id: Optional[str] = None
    client_id: str
    weight: float
    date: date_type
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
