import asyncio

import pytest

from app.application.services.profile_resolver import ProfileResolver
from app.core.exceptions import ProfileFetchError, ProfileNotFoundError
from tests.fakes import CLIENT, FakeProfileRepository, store_failure


class _RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def test_resolve_returns_profile_on_first_read() -> None:
    repo = FakeProfileRepository([CLIENT])

    profile = asyncio.run(ProfileResolver(repo, max_attempts=3, retry_delay=0).resolve(CLIENT.id))

    assert profile == CLIENT
    assert repo.reads == 1


def test_resolve_retries_once_when_row_lags_behind_signup() -> None:
    repo = FakeProfileRepository([CLIENT])
    repo.missing_reads = 1
    sleep = _RecordingSleep()

    profile = asyncio.run(ProfileResolver(repo, max_attempts=5, retry_delay=1.0, sleep=sleep).resolve(CLIENT.id))

    assert profile == CLIENT
    assert repo.reads == 2
    assert sleep.delays == [1.0]


def test_resolve_gives_up_after_bounded_attempts() -> None:
    repo = FakeProfileRepository([])
    sleep = _RecordingSleep()
    resolver = ProfileResolver(repo, max_attempts=4, retry_delay=0.5, sleep=sleep)

    with pytest.raises(ProfileNotFoundError) as exc_info:
        asyncio.run(resolver.resolve("ghost"))

    assert repo.reads == 4
    assert len(sleep.delays) == 3
    assert exc_info.value.details == {"user_id": "ghost", "attempts": 4}


def test_resolve_does_not_retry_store_failures() -> None:
    repo = FakeProfileRepository([CLIENT])
    repo.fail = store_failure()

    with pytest.raises(ProfileFetchError):
        asyncio.run(ProfileResolver(repo, max_attempts=5, retry_delay=0).resolve(CLIENT.id))

    assert repo.reads == 1


def test_resolve_rejects_empty_user_id() -> None:
    with pytest.raises(ValueError):
        asyncio.run(ProfileResolver(FakeProfileRepository(), retry_delay=0).resolve(""))
