"""Admin dashboard — clients, invoices, revenue and the logout audit trail."""

import asyncio
import os
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

import pytz
import structlog

from app.config import get_settings
from app.core.exceptions import (
    AuthProviderError,
    DashboardLoadError,
    DataStoreError,
    EntityNotFoundException,
    ForbiddenException,
    PartialFailureError,
    StorageError,
    ValidationException,
)
from app.domain.models.appointment import Appointment, AppointmentStatus
from app.domain.models.invoice import FileStatus, Invoice
from app.domain.models.profile import Role, UserProfile
from app.domain.repositories.appointment_repository import AppointmentRepository
from app.domain.repositories.auth_gateway import AuthGateway
from app.domain.repositories.file_storage import FileStorage
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.domain.repositories.profile_repository import ProfileRepository
from app.domain.repositories.session_audit_repository import SessionAuditRepository
from app.domain.schemas.admin import ClientCreate, DeleteResult, InvoiceCreate, InvoiceCreateResult
from app.domain.schemas.dashboard import AdminDashboard, AdminStats, MonthlyRevenue

logger = structlog.get_logger(__name__)

MONTHS_FR = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)

# Provider codes for an address that cannot be used, as opposed to an outage
REJECTED_EMAIL_CODES = {"email_exists", "user_already_exists", "email_address_invalid"}

# (filename, content, content_type)
Attachment = Tuple[str, bytes, str]


def _local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.timezone(get_settings().TIMEZONE))


def month_label(dt: datetime) -> str:
    dt = _local(dt)
    return f"{MONTHS_FR[dt.month - 1]} {dt.year}"


def monthly_revenue(appointments: Iterable[Appointment]) -> List[MonthlyRevenue]:
    """Sum appointment prices per calendar month, oldest month first."""
    totals: "OrderedDict[Tuple[int, int], Decimal]" = OrderedDict()
    labels = {}
    for appointment in sorted(appointments, key=lambda a: _local(a.date_time)):
        local = _local(appointment.date_time)
        key = (local.year, local.month)
        totals[key] = totals.get(key, Decimal("0")) + Decimal(appointment.price)
        labels[key] = month_label(appointment.date_time)
    return [MonthlyRevenue(month=labels[key], amount=amount) for key, amount in totals.items()]


def admin_stats(appointments: List[Appointment], clients: List[UserProfile]) -> AdminStats:
    return AdminStats(
        total_revenue=sum((Decimal(a.price) for a in appointments), Decimal("0")),
        client_count=len(clients),
        completed_appointments=sum(1 for a in appointments if a.status == AppointmentStatus.COMPLETED),
    )


def _matches(term: str, *fields: Optional[str]) -> bool:
    return any(term in field.lower() for field in fields if field)


def search_clients(clients: List[UserProfile], term: Optional[str]) -> List[UserProfile]:
    """Case-insensitive substring filter over name and email."""
    term = (term or "").strip().lower()
    if not term:
        return list(clients)
    return [c for c in clients if _matches(term, c.full_name, c.email)]


def search_invoices(invoices: List[Invoice], term: Optional[str]) -> List[Invoice]:
    term = (term or "").strip().lower()
    if not term:
        return list(invoices)
    return [i for i in invoices if _matches(term, i.client_name, i.client_email)]


async def load_dashboard(
    profiles: ProfileRepository,
    invoices: InvoiceRepository,
    appointments: AppointmentRepository,
    audits: SessionAuditRepository,
) -> AdminDashboard:
    """Fetch every admin data set together; any failure fails the whole load."""
    try:
        clients, all_invoices, all_appointments, sessions = await asyncio.gather(
            profiles.list_by_role(Role.CLIENT),
            invoices.list_with_clients(),
            appointments.list_with_clients(),
            audits.list_with_profiles(),
        )
    except DataStoreError as e:
        logger.error("Admin dashboard load failed", error=e.message)
        raise DashboardLoadError(details={"reason": e.message}) from e

    return AdminDashboard(
        stats=admin_stats(all_appointments, clients),
        monthly_revenue=monthly_revenue(all_appointments),
        clients=clients,
        invoices=all_invoices,
        appointments=all_appointments,
        sessions=sessions,
    )


async def list_clients(profiles: ProfileRepository, search: Optional[str] = None) -> List[UserProfile]:
    try:
        clients = await profiles.list_by_role(Role.CLIENT)
    except DataStoreError as e:
        raise DashboardLoadError(details={"reason": e.message}) from e
    return search_clients(clients, search)


async def list_invoices(invoices: InvoiceRepository, search: Optional[str] = None) -> List[Invoice]:
    try:
        rows = await invoices.list_with_clients()
    except DataStoreError as e:
        raise DashboardLoadError(details={"reason": e.message}) from e
    return search_invoices(rows, search)


async def create_client(auth: AuthGateway, profiles: ProfileRepository, data: ClientCreate) -> UserProfile:
    """Provision a credential, then its profile row.

    When the profile insert fails the credential is deleted again. If that
    rollback fails too the orphaned credential is reported, not hidden.
    """
    try:
        user_id = await auth.create_user(data.email.strip(), data.password)
    except AuthProviderError as e:
        if e.code in REJECTED_EMAIL_CODES:
            logger.info("Client credential refused", email=data.email, reason=e.message)
            raise ValidationException(e.message, {"field": "email", "code": e.code}) from e
        logger.error("Client credential provisioning failed", email=data.email, code=e.code, error=e.message)
        raise AuthProviderError(e.message, code=e.code, status_code=502) from e

    row = data.model_dump(mode="json", exclude={"password"})
    row.update({"id": user_id, "email": data.email.strip(), "role": Role.CLIENT.value})
    try:
        profile = await profiles.create(row)
    except DataStoreError as e:
        logger.error("Client profile insert failed", user_id=user_id, error=e.message)
        try:
            await auth.delete_user(user_id)
        except AuthProviderError as rollback_error:
            logger.error(
                "Orphaned client credential",
                user_id=user_id,
                error=rollback_error.message,
            )
            raise PartialFailureError(
                "Identifiants créés mais profil non enregistré",
                completed=["credential"],
                failed="profile",
                details={"user_id": user_id, "reason": e.message},
            ) from e
        raise

    logger.info("Client created", user_id=user_id)
    return profile


def _safe_filename(filename: str) -> str:
    name = os.path.basename(filename or "").strip().replace(" ", "_")
    return name or "facture"


async def create_invoice(
    invoices: InvoiceRepository,
    storage: FileStorage,
    data: InvoiceCreate,
    attachment: Optional[Attachment] = None,
) -> InvoiceCreateResult:
    """Insert the invoice, then upload its file. A failed upload keeps the row
    and marks the file as missing."""
    invoice = await invoices.create(data.model_dump(mode="json"))
    logger.info("Invoice created", invoice_id=invoice.id, client_id=invoice.client_id)
    if attachment is None:
        return InvoiceCreateResult(invoice=invoice)

    filename, content, content_type = attachment
    path = f"{invoice.id}/{_safe_filename(filename)}"
    try:
        stored = await storage.upload(path, content, content_type or "application/octet-stream")
    except StorageError as e:
        logger.error("Invoice file upload failed", invoice_id=invoice.id, error=e.message)
        invoice = await _mark_file(invoices, invoice, {"file_status": FileStatus.MISSING.value})
        return InvoiceCreateResult(
            invoice=invoice,
            partial_failure=True,
            error="Facture créée, mais le fichier n'a pas pu être envoyé",
        )

    invoice = await _mark_file(
        invoices, invoice, {"file_path": stored, "file_status": FileStatus.ATTACHED.value}
    )
    return InvoiceCreateResult(invoice=invoice)


async def _mark_file(invoices: InvoiceRepository, invoice: Invoice, fields: dict) -> Invoice:
    try:
        return await invoices.update(invoice.id, fields)
    except DataStoreError as e:
        logger.error("Invoice file status not saved", invoice_id=invoice.id, error=e.message)
        raise PartialFailureError(
            "Facture créée, mais son fichier n'a pas pu être rattaché",
            completed=["invoice"],
            failed="file_status",
            details={"invoice_id": invoice.id},
        ) from e


def _require_confirmation(confirm: bool, what: str) -> None:
    if not confirm:
        raise ValidationException(
            f"Confirmez la suppression {what}",
            {"confirm_required": True},
        )


async def delete_client(profiles: ProfileRepository, client_id: str, confirm: bool) -> DeleteResult:
    _require_confirmation(confirm, "du client")
    profile = await profiles.get_by_id(client_id)
    if profile is None:
        raise EntityNotFoundException("Client introuvable")
    if profile.role != Role.CLIENT:
        raise ForbiddenException("Seuls les clients peuvent être supprimés")
    if not await profiles.delete(client_id):
        raise EntityNotFoundException("Client introuvable")
    logger.info("Client deleted", client_id=client_id)
    return DeleteResult(id=client_id)


async def delete_invoice(invoices: InvoiceRepository, invoice_id: str, confirm: bool) -> DeleteResult:
    _require_confirmation(confirm, "de la facture")
    if not await invoices.delete(invoice_id):
        raise EntityNotFoundException("Facture introuvable")
    logger.info("Invoice deleted", invoice_id=invoice_id)
    return DeleteResult(id=invoice_id)
