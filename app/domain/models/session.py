"""Authenticated session as observed from the auth provider.

Owned by the provider; the service only reads it and never persists it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Session(BaseModel):
    user_id: str
    access_token: str
    email: Optional[str] = None
    expires_at: Optional[datetime] = None
