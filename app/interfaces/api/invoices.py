"""Admin invoice API — list, search, create (with optional file) and delete."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import ValidationError

from app.application.services.admin_dashboard_service import create_invoice, delete_invoice, list_invoices
from app.core.exceptions import ValidationException
from app.domain.models.invoice import Invoice, InvoiceStatus
from app.domain.models.profile import UserProfile
from app.domain.repositories.file_storage import FileStorage
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.domain.schemas.admin import DeleteResult, InvoiceCreate, InvoiceCreateResult
from app.interfaces.api.deps import require_admin
from app.interfaces.deps import get_file_storage, get_invoice_repository

router = APIRouter(prefix="/api/admin/invoices", tags=["Admin"])


@router.get("", response_model=List[Invoice])
async def list_invoices_route(
    search: Optional[str] = None,
    admin: UserProfile = Depends(require_admin),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
):
    """List invoices, filtered by client name or email when ``search`` is given."""
    return await list_invoices(invoices, search)


@router.post("", response_model=InvoiceCreateResult, status_code=status.HTTP_201_CREATED)
async def create_invoice_route(
    client_id: str = Form(...),
    amount: Decimal = Form(...),
    due_date: date = Form(...),
    invoice_status: InvoiceStatus = Form(InvoiceStatus.PENDING, alias="status"),
    file: Optional[UploadFile] = File(None),
    admin: UserProfile = Depends(require_admin),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    storage: FileStorage = Depends(get_file_storage),
):
    """Create an invoice from form fields, with an optional attached file."""
    try:
        data = InvoiceCreate(client_id=client_id, amount=amount, due_date=due_date, status=invoice_status)
    except ValidationError as e:
        raise ValidationException("Le montant doit être supérieur à 0", {"field": "amount"}) from e

    attachment = None
    if file is not None and file.filename:
        attachment = (file.filename, await file.read(), file.content_type)

    return await create_invoice(invoices, storage, data, attachment)


@router.delete("/{invoice_id}", response_model=DeleteResult)
async def delete_invoice_route(
    invoice_id: str,
    confirm: bool = False,
    admin: UserProfile = Depends(require_admin),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
):
    """Delete an invoice. Irreversible; requires ``confirm=true``."""
    return await delete_invoice(invoices, invoice_id, confirm)
