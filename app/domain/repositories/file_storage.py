"""
File Storage Interface.
"""

from typing import Protocol


class FileStorage(Protocol):

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store a file under a logical path and return the stored path."""
        ...
