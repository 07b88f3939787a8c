"""
Base Repository Interface.
Defines the standard contract for table access in the external data store.
"""

from typing import Any, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations on one table."""

    async def get_by_id(self, id: str) -> Optional[T]:
        """Get a single row by ID, or None when no row matches."""
        ...

    async def list(self, **filters: Any) -> List[T]:
        """List rows matching equality filters."""
        ...

    async def create(self, obj_in: Any) -> T:
        """Insert a row and return it."""
        ...

    async def update(self, id: str, obj_in: Any) -> T:
        """Update a row by ID and return it."""
        ...

    async def delete(self, id: str) -> bool:
        """Delete a row by ID. Returns False when nothing was deleted."""
        ...
