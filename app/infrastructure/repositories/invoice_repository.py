"""Supabase implementation of InvoiceRepository."""

from typing import Any, Dict, List

from app.domain.models.invoice import Invoice
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.infrastructure.repositories.base_repository import SupabaseRepository


class SupabaseInvoiceRepository(SupabaseRepository[Invoice], InvoiceRepository):
    table = "invoices"

    def to_model(self, row: Dict[str, Any]) -> Invoice:
        row = dict(row)
        owner = row.pop("user_profiles", None) or {}
        row.setdefault("client_name", owner.get("full_name"))
        row.setdefault("client_email", owner.get("email"))
        return Invoice.model_validate(row)

    async def list_with_clients(self) -> List[Invoice]:
        rows = await self.run(
            self.query()
            .select("*, user_profiles(full_name, email)")
            .order("due_date", desc=True)
        )
        return [self.to_model(row) for row in rows]
