"""
Supabase (PostgREST) implementation of the Base Repository.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import structlog
from postgrest.exceptions import APIError
from pydantic import BaseModel
from supabase import AsyncClient

from app.core.exceptions import DataStoreError
from app.domain.repositories.base import BaseRepository

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)

# PostgREST: "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"


def to_row(obj_in: Any) -> Dict[str, Any]:
    """Turn a pydantic model or dict into a JSON-safe row."""
    if isinstance(obj_in, BaseModel):
        return obj_in.model_dump(mode="json", exclude_unset=True)
    return dict(obj_in)


def store_error(table: str, exc: APIError) -> DataStoreError:
    logger.error("Data store request failed", table=table, code=exc.code, error=exc.message)
    return DataStoreError(exc.message or "Erreur de la base de données", code=exc.code, details={"table": table})


class SupabaseRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository over one Supabase table."""

    table: str = ""

    def __init__(self, client: AsyncClient, model: Type[ModelType], table: Optional[str] = None):
        self.client = client
        self.model = model
        if table:
            self.table = table

    def query(self):
        return self.client.table(self.table)

    def to_model(self, row: Dict[str, Any]) -> ModelType:
        return self.model.model_validate(row)

    async def run(self, request) -> List[Dict[str, Any]]:
        try:
            response = await request.execute()
        except APIError as e:
            raise store_error(self.table, e) from e
        return response.data or []

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        try:
            rows = await self.run(self.query().select("*").eq("id", id).limit(1))
        except DataStoreError as e:
            if e.code == NO_ROWS_CODE:
                return None
            raise
        return self.to_model(rows[0]) if rows else None

    async def list(self, **filters: Any) -> List[ModelType]:
        request = self.query().select("*")
        for column, value in filters.items():
            request = request.eq(column, value)
        return [self.to_model(row) for row in await self.run(request)]

    async def create(self, obj_in: Any) -> ModelType:
        rows = await self.run(self.query().insert(to_row(obj_in)))
        return self.to_model(rows[0])

    async def update(self, id: str, obj_in: Any) -> ModelType:
        rows = await self.run(self.query().update(to_row(obj_in)).eq("id", id))
        if not rows:
            raise DataStoreError("Aucune ligne mise à jour", code=NO_ROWS_CODE, details={"table": self.table, "id": id})
        return self.to_model(rows[0])

    async def delete(self, id: str) -> bool:
        rows = await self.run(self.query().delete().eq("id", id))
        return bool(rows)
