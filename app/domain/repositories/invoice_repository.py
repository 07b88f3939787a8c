"""
Invoice Repository Interface.
"""

from typing import List

from app.domain.models.invoice import Invoice
from app.domain.repositories.base import BaseRepository


class InvoiceRepository(BaseRepository[Invoice]):
    """Interface for invoice operations."""

    async def list_with_clients(self) -> List[Invoice]:
        """Get every invoice joined with its owner's name and email."""
        ...
