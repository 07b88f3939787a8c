"""Invoice — mirrors the 'invoices' table."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class InvoiceStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    CANCELLED = "cancelled"


class FileStatus(str, Enum):
    NONE = "none"
    ATTACHED = "attached"
    MISSING = "missing"  # row written, upload failed


class Invoice(BaseModel):
    id: str
    client_id: str
    amount: Decimal
    status: InvoiceStatus = InvoiceStatus.PENDING
    due_date: date
    file_path: Optional[str] = None
    # Requires column `file_status text not null default 'none'` on invoices;
    # without it attaching a file fails with PartialFailureError
    file_status: FileStatus = FileStatus.NONE
    created_at: Optional[datetime] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None

    model_config = {"from_attributes": True}
