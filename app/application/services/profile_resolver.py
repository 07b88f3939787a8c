"""Profile resolver — loads the profile row behind an authenticated user.

A freshly signed-up user may have a credential before the profile row exists,
so a missing row is retried a bounded number of times with a fixed delay.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from app.config import get_settings
from app.core.exceptions import DataStoreError, ProfileFetchError, ProfileNotFoundError
from app.domain.models.profile import UserProfile
from app.domain.repositories.profile_repository import ProfileRepository

logger = structlog.get_logger(__name__)


class ProfileResolver:
    def __init__(
        self,
        repo: ProfileRepository,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        settings = get_settings()
        self.repo = repo
        self.max_attempts = max(1, max_attempts or settings.PROFILE_MAX_ATTEMPTS)
        self.retry_delay = settings.PROFILE_RETRY_DELAY_SECONDS if retry_delay is None else retry_delay
        self._sleep = sleep

    async def resolve(self, user_id: str) -> UserProfile:
        """Return exactly the persisted profile row for ``user_id``.

        Raises ProfileNotFoundError once every attempt found no row, and
        ProfileFetchError on any other store failure.
        """
        if not user_id:
            raise ValueError("user_id must not be empty")

        for attempt in range(1, self.max_attempts + 1):
            try:
                profile = await self.repo.get_by_id(user_id)
            except DataStoreError as e:
                logger.error("Profile fetch failed", user_id=user_id, attempt=attempt, error=e.message)
                raise ProfileFetchError(user_id, e.message) from e

            if profile is not None:
                if attempt > 1:
                    logger.info("Profile found after retry", user_id=user_id, attempt=attempt)
                return profile

            if attempt < self.max_attempts:
                logger.info("Profile not created yet, retrying", user_id=user_id, attempt=attempt)
                await self._sleep(self.retry_delay)

        logger.warning("Profile still missing after retries", user_id=user_id, attempts=self.max_attempts)
        raise ProfileNotFoundError(user_id, self.max_attempts)
