"""Pydantic schemas for admin write operations."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.models.invoice import Invoice, InvoiceStatus


class ClientCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None


class InvoiceCreate(BaseModel):
    client_id: str
    amount: Decimal = Field(gt=0)
    status: InvoiceStatus = InvoiceStatus.PENDING
    due_date: date


class InvoiceCreateResult(BaseModel):
    invoice: Invoice
    partial_failure: bool = False
    error: Optional[str] = None


class DeleteResult(BaseModel):
    id: str
    deleted: bool = True
