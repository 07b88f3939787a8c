"""Logout audit record — mirrors the 'user_sessions' table (write-once)."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserSessionAudit(BaseModel):
    id: Optional[str] = None
    user_id: str
    logout_time: datetime
    last_weight: Optional[float] = None
    created_at: Optional[datetime] = None
    full_name: Optional[str] = None

    model_config = {"from_attributes": True}
