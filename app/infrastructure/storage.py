"""Supabase Storage implementation of FileStorage."""

import structlog
from supabase import AsyncClient, StorageException

from app.core.exceptions import StorageError

logger = structlog.get_logger(__name__)


class SupabaseFileStorage:
    def __init__(self, client: AsyncClient, bucket: str):
        self.client = client
        self.bucket = bucket

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        try:
            await self.client.storage.from_(self.bucket).upload(
                path,
                content,
                {"content-type": content_type, "upsert": "false"},
            )
        except StorageException as e:
            logger.error("Storage upload failed", bucket=self.bucket, path=path, error=str(e))
            raise StorageError("Échec de l'envoi du fichier", {"path": path}) from e
        return f"{self.bucket}/{path}"
